"""Mini README: Export landmarks and camera centres to PLY point clouds.

Structure:
    * PointCloud - points with optional per-point RGB colours.
    * PointCloudExporter - serialises clouds to ASCII PLY.
    * scene_point_cloud - landmarks (white) followed by camera centres (green).

The resulting file is meant for visual inspection of a reconstruction in any
PLY viewer.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import numpy as np

from ..logging_utils import get_logger
from ..scene.model import Scene
from ..utils.files import atomic_writer

LOGGER = get_logger(__name__)

LANDMARK_COLOR = (255, 255, 255)
CAMERA_COLOR = (0, 255, 0)


@dataclass(slots=True)
class PointCloud:
    """Simple container for point cloud data."""

    points: np.ndarray
    colors: np.ndarray | None = None


def scene_point_cloud(scene: Scene) -> PointCloud:
    """Build a coloured cloud: landmarks in id order, then pose centres in id order."""

    landmark_points = [scene.structure[key].X for key in sorted(scene.structure)]
    camera_points = [scene.poses[key].center for key in sorted(scene.poses)]
    points = np.asarray(landmark_points + camera_points, dtype=float).reshape(-1, 3)
    colors = np.asarray(
        [LANDMARK_COLOR] * len(landmark_points) + [CAMERA_COLOR] * len(camera_points),
        dtype=np.uint8,
    ).reshape(-1, 3)
    return PointCloud(points=points, colors=colors)


class PointCloudExporter:
    """Persist point clouds to disk."""

    def export(self, point_cloud: PointCloud, destination: Path) -> Path:
        """Export the cloud to PLY format at the destination."""

        if point_cloud.points.ndim != 2 or point_cloud.points.shape[1] != 3:
            raise ValueError("Point cloud must be of shape (N, 3)")
        LOGGER.info("Exporting point cloud with %s points to %s", point_cloud.points.shape[0], destination)
        with atomic_writer(destination) as ply_file:
            vertex_count = point_cloud.points.shape[0]
            header = [
                "ply",
                "format ascii 1.0",
                f"element vertex {vertex_count}",
                "property double x",
                "property double y",
                "property double z",
            ]
            if point_cloud.colors is not None:
                header.extend(
                    [
                        "property uchar red",
                        "property uchar green",
                        "property uchar blue",
                    ]
                )
            header.append("end_header\n")
            ply_file.write("\n".join(header))
            for index in range(vertex_count):
                point = point_cloud.points[index]
                if point_cloud.colors is not None:
                    color = point_cloud.colors[index]
                    ply_file.write(
                        f"{point[0]} {point[1]} {point[2]} {int(color[0])} {int(color[1])} {int(color[2])}\n"
                    )
                else:
                    ply_file.write(f"{point[0]} {point[1]} {point[2]}\n")
        return destination
