"""Mini README: Persist a canonical scene as independent artifacts.

Structure:
    * ExportArtifact - the three artifacts and their fixed filenames.
    * ExportResult - outcome of writing one artifact.
    * SceneExporter - writes every artifact, one at a time, best effort.

Artifacts:
    * ``cloud_and_poses.ply`` - landmarks and camera centres for viewers.
    * ``sfm_data.json`` - views, extrinsics and intrinsics only, suitable as
      input to a later stage.
    * ``sfm_data_all.json`` - every section including structure.

Each artifact is written through a temporary file and renamed into place. A
failure is recorded in its ``ExportResult`` and logged; the remaining
artifacts are still attempted.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import List, Optional

from ..logging_utils import get_logger
from ..scene.io import SceneParts, save_scene
from ..scene.model import Scene
from .point_cloud_exporter import PointCloudExporter, scene_point_cloud

LOGGER = get_logger(__name__)


class ExportArtifact(str, Enum):
    """Artifacts written for a finished reconstruction."""

    CLOUD_AND_POSES = "cloud_and_poses.ply"
    CALIBRATION = "sfm_data.json"
    FULL = "sfm_data_all.json"


@dataclass(slots=True)
class ExportResult:
    """Outcome of exporting one artifact."""

    artifact: ExportArtifact
    path: Path
    success: bool
    error: Optional[str] = None


class SceneExporter:
    """Write the canonical scene into an output directory."""

    def __init__(self, point_cloud_exporter: Optional[PointCloudExporter] = None) -> None:
        self.point_cloud_exporter = point_cloud_exporter or PointCloudExporter()

    def export_artifact(self, scene: Scene, artifact: ExportArtifact, output_directory: Path) -> ExportResult:
        """Write a single artifact, capturing any failure in the result."""

        destination = Path(output_directory) / artifact.value
        try:
            if artifact is ExportArtifact.CLOUD_AND_POSES:
                self.point_cloud_exporter.export(scene_point_cloud(scene), destination)
            elif artifact is ExportArtifact.CALIBRATION:
                save_scene(scene, destination, SceneParts.VIEWS | SceneParts.EXTRINSICS | SceneParts.INTRINSICS)
            else:
                save_scene(scene, destination, SceneParts.ALL)
        except (OSError, ValueError) as error:
            LOGGER.error("Failed to export %s to %s: %s", artifact.name, destination, error)
            return ExportResult(artifact=artifact, path=destination, success=False, error=str(error))
        LOGGER.info("Exported %s to %s", artifact.name, destination)
        return ExportResult(artifact=artifact, path=destination, success=True)

    def export_all(self, scene: Scene, output_directory: Path) -> List[ExportResult]:
        """Attempt every artifact in turn and return all outcomes."""

        return [self.export_artifact(scene, artifact, output_directory) for artifact in ExportArtifact]
