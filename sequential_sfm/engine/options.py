"""Mini README: Immutable options handed to a reconstruction engine.

``ReconstructionOptions`` is built once from the command line and passed to
``ReconstructionEngine.reconstruct``; engines never mutate it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from ..scene.cameras import CameraModel, IntrinsicRefinement


@dataclass(frozen=True, slots=True)
class ReconstructionOptions:
    """Everything an engine needs besides the scene and its features/matches."""

    unknown_camera_model: CameraModel = CameraModel.PINHOLE_RADIAL_K3
    intrinsic_refinement: IntrinsicRefinement = IntrinsicRefinement.ADJUST_ALL
    use_motion_priors: bool = False
    omit_angle_error: bool = False
    robust_estimation_iterations: int = 4096
    initial_pair: Optional[Tuple[int, int]] = None
    use_pba: bool = False

    def __post_init__(self) -> None:
        if self.robust_estimation_iterations < 1:
            raise ValueError("robust_estimation_iterations must be positive")

    def as_dict(self) -> Dict[str, object]:
        """Serialisable view used in log lines."""

        return {
            "unknown_camera_model": self.unknown_camera_model.label,
            "intrinsic_refinement": str(self.intrinsic_refinement),
            "use_motion_priors": self.use_motion_priors,
            "omit_angle_error": self.omit_angle_error,
            "robust_estimation_iterations": self.robust_estimation_iterations,
            "initial_pair": self.initial_pair,
            "use_pba": self.use_pba,
        }
