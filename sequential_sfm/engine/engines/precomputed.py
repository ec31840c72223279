"""Mini README: Engine that replays a reconstruction computed out of process.

Structure:
    * PrecomputedEngine - merges poses, intrinsics and structure from a full
      scene document into the input scene.

The input views are kept as loaded. Poses and structure come from the
document; its intrinsics replace the input ones unless refinement is
``NONE``, in which case input calibration is held constant. Views that end
up without an intrinsic receive a fresh one of the configured unknown
camera model when their image size is known.
"""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path
from typing import Optional

from ...errors import ReconstructionError, SceneFormatError
from ...logging_utils import get_logger
from ...providers import FeaturesProvider, MatchesProvider
from ...scene.cameras import CameraModel, IntrinsicRefinement
from ...scene.io import SceneParts, document_to_scene, read_document
from ...scene.model import Intrinsic, Scene, View
from ..base import ReconstructionEngine
from ..options import ReconstructionOptions
from ..registry import ENGINES

LOGGER = get_logger(__name__)

MINIMUM_POSES = 2


def default_intrinsic(view: View, model: CameraModel) -> Intrinsic:
    """Guess a calibration from the image size: focal = 1.2 * max(width, height)."""

    return Intrinsic(
        model=model,
        width=view.width,
        height=view.height,
        focal_length=1.2 * max(view.width, view.height),
        principal_point=(view.width / 2.0, view.height / 2.0),
        distortion=(0.0,) * model.distortion_size,
    )


class PrecomputedEngine(ReconstructionEngine):
    """Replay a reconstruction stored as a full scene document."""

    engine_name = "precomputed"

    def __init__(self, scene_path: Optional[Path] = None, **engine_settings: object) -> None:
        super().__init__(scene_path=scene_path, **engine_settings)
        self.scene_path = Path(scene_path) if scene_path else None

    def reconstruct(
        self,
        scene: Scene,
        features: FeaturesProvider,
        matches: MatchesProvider,
        options: ReconstructionOptions,
    ) -> Scene:
        LOGGER.info("Replaying reconstruction with options %s", options.as_dict())
        if self.scene_path is None:
            raise ReconstructionError("No precomputed reconstruction configured")
        parts = SceneParts.EXTRINSICS | SceneParts.STRUCTURE
        try:
            document = read_document(self.scene_path)
            if document.intrinsics is not None:
                parts |= SceneParts.INTRINSICS
            reconstructed = document_to_scene(document, parts)
        except SceneFormatError as error:
            raise ReconstructionError(str(error)) from error

        result = Scene(root_path=scene.root_path)
        result.views = {key: replace(view) for key, view in scene.views.items()}
        result.intrinsics = dict(scene.intrinsics)
        if options.intrinsic_refinement != IntrinsicRefinement.NONE:
            result.intrinsics.update(reconstructed.intrinsics)
        used_poses = {view.id_pose for view in result.views.values()}
        result.poses = {key: pose for key, pose in reconstructed.poses.items() if key in used_poses}
        result.structure = reconstructed.structure
        self._assign_unknown_intrinsics(result, options.unknown_camera_model)

        if len(result.poses) < MINIMUM_POSES:
            raise ReconstructionError(
                f"Only {len(result.poses)} poses reconstructed; at least {MINIMUM_POSES} are required"
            )
        if options.initial_pair is not None:
            missing = [
                id_view
                for id_view in options.initial_pair
                if id_view not in result.views or result.views[id_view].id_pose not in result.poses
            ]
            if missing:
                raise ReconstructionError(f"Initial pair views {missing} were not reconstructed")
        LOGGER.info(
            "Replayed %s poses and %s landmarks over %s matching pairs",
            len(result.poses),
            len(result.structure),
            len(matches.pairwise_matches),
        )
        return result

    @staticmethod
    def _assign_unknown_intrinsics(scene: Scene, model: CameraModel) -> None:
        next_id = max(scene.intrinsics, default=-1) + 1
        for view in scene.iter_views():
            if view.id_intrinsic is not None and view.id_intrinsic in scene.intrinsics:
                continue
            if view.width <= 0 or view.height <= 0:
                continue
            scene.intrinsics[next_id] = default_intrinsic(view, model)
            view.id_intrinsic = next_id
            LOGGER.debug("View %s assigned %s intrinsic %s", view.id_view, model.label, next_id)
            next_id += 1


ENGINES.register(PrecomputedEngine)
