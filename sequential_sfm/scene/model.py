"""Mini README: In-memory scene graph for a reconstruction.

Structure:
    * View - one input image, referencing a pose and an intrinsic by id.
    * Pose - rotation and camera centre in world coordinates.
    * Intrinsic - calibration parameters tagged with a camera model.
    * Observation / Landmark - a 3D point and the image measurements of it.
    * Scene - index-addressed containers holding all of the above.

Every cross reference is a plain integer id looked up in the owning
``Scene`` dictionaries, so entities can be copied or re-keyed without any
aliasing between scenes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, Optional, Tuple

import numpy as np

from .cameras import CameraModel


@dataclass(slots=True)
class View:
    """An image of the scene and the ids of its pose and intrinsic."""

    id_view: int
    image_path: str
    id_pose: int
    id_intrinsic: Optional[int]
    width: int = 0
    height: int = 0


@dataclass(slots=True)
class Pose:
    """Camera orientation (world to camera rotation) and centre."""

    rotation: np.ndarray
    center: np.ndarray


@dataclass(slots=True)
class Intrinsic:
    """Calibration parameters of a camera, possibly shared across views."""

    model: CameraModel
    width: int
    height: int
    focal_length: float
    principal_point: Tuple[float, float]
    distortion: Tuple[float, ...] = ()


@dataclass(slots=True)
class Observation:
    """2D measurement of a landmark in one view."""

    x: np.ndarray
    id_feat: int = -1


@dataclass(slots=True)
class Landmark:
    """Reconstructed 3D point with its observations keyed by view id."""

    X: np.ndarray
    observations: Dict[int, Observation] = field(default_factory=dict)


@dataclass(slots=True)
class Scene:
    """Views, poses, intrinsics and structure of a reconstruction."""

    root_path: str = ""
    views: Dict[int, View] = field(default_factory=dict)
    poses: Dict[int, Pose] = field(default_factory=dict)
    intrinsics: Dict[int, Intrinsic] = field(default_factory=dict)
    structure: Dict[int, Landmark] = field(default_factory=dict)

    def is_pose_and_intrinsic_defined(self, view: View) -> bool:
        """A view is usable only when both of its references resolve."""

        return (
            view.id_intrinsic is not None
            and view.id_intrinsic in self.intrinsics
            and view.id_pose in self.poses
        )

    def iter_views(self) -> Iterator[View]:
        """Yield views in ascending id order."""

        for id_view in sorted(self.views):
            yield self.views[id_view]

    def observation_count(self) -> int:
        return sum(len(landmark.observations) for landmark in self.structure.values())

    def summary(self) -> Dict[str, int]:
        """Entity counts, used for log lines."""

        return {
            "views": len(self.views),
            "poses": len(self.poses),
            "intrinsics": len(self.intrinsics),
            "landmarks": len(self.structure),
            "observations": self.observation_count(),
        }
