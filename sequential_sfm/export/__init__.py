"""Mini README: Export utilities for reconstructed scenes.

Exposes the scene exporter that writes the point cloud, calibration-only
and full artifacts, plus the PLY writer it builds on.
"""

from .point_cloud_exporter import PointCloud, PointCloudExporter, scene_point_cloud
from .scene_exporter import ExportArtifact, ExportResult, SceneExporter

__all__ = [
    "ExportArtifact",
    "ExportResult",
    "PointCloud",
    "PointCloudExporter",
    "SceneExporter",
    "scene_point_cloud",
]
