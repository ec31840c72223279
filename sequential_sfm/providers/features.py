"""Mini README: Per-view feature loading.

Structure:
    * FeaturesProvider - holds the keypoints of every view, keyed by view id.

Each view has a ``<image stem>.feat`` file in the matches directory with one
``x y scale orientation`` row per keypoint. A missing or malformed file for
any view fails the whole load.
"""

from __future__ import annotations

from pathlib import Path, PurePath
from typing import Dict

import numpy as np

from ..errors import ProviderError
from ..logging_utils import get_logger
from ..scene.initial_pair import image_basename
from ..scene.model import Scene, View

LOGGER = get_logger(__name__)

FEATURE_SUFFIX = ".feat"


def feature_path(matches_directory: Path, view: View) -> Path:
    stem = PurePath(image_basename(view.image_path)).stem
    return Path(matches_directory) / f"{stem}{FEATURE_SUFFIX}"


class FeaturesProvider:
    """Keypoints of each view as ``(N, 4)`` arrays."""

    def __init__(self) -> None:
        self.features: Dict[int, np.ndarray] = {}
        self.regions_type: str = ""

    def load(self, scene: Scene, matches_directory: Path, regions_type: str) -> "FeaturesProvider":
        """Read the feature file of every view in ``scene``."""

        self.regions_type = regions_type
        for view in scene.iter_views():
            path = feature_path(matches_directory, view)
            try:
                keypoints = np.loadtxt(path, dtype=float, ndmin=2)
            except (OSError, ValueError) as error:
                raise ProviderError(f"Invalid features for view {view.id_view}: {path} ({error})") from error
            if keypoints.size and keypoints.shape[1] < 2:
                raise ProviderError(f"Invalid features for view {view.id_view}: {path} has fewer than 2 columns")
            self.features[view.id_view] = keypoints
        LOGGER.info(
            "Loaded %s %s features for %s views",
            sum(len(keypoints) for keypoints in self.features.values()),
            regions_type,
            len(self.features),
        )
        return self

    def keypoints(self, id_view: int) -> np.ndarray:
        return self.features[id_view]
