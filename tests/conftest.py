"""Mini README: Shared fixtures and scene builders for the test suite.

Structure:
    * make_view / make_intrinsic / make_pose / make_landmark - entity builders.
    * write_matches_directory - lay out describer, feature and match files.
    * workspace - input scene, matches directory and a precomputed
      reconstruction laid out under ``tmp_path``.
    * reset_settings - clear cached settings between tests.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, Tuple

import numpy as np
import pytest

from sequential_sfm.configuration import SfMSettings, get_settings
from sequential_sfm.pipeline import PipelineRequest
from sequential_sfm.scene import CameraModel, Intrinsic, Landmark, Observation, Pose, Scene, View


def make_view(id_view: int, image_path: str, id_intrinsic=0, id_pose=None) -> View:
    return View(
        id_view=id_view,
        image_path=image_path,
        id_pose=id_view if id_pose is None else id_pose,
        id_intrinsic=id_intrinsic,
        width=640,
        height=480,
    )


def make_intrinsic(focal_length: float = 800.0) -> Intrinsic:
    return Intrinsic(
        model=CameraModel.PINHOLE_RADIAL_K3,
        width=640,
        height=480,
        focal_length=focal_length,
        principal_point=(320.0, 240.0),
        distortion=(0.0, 0.0, 0.0),
    )


def make_pose(offset: float) -> Pose:
    return Pose(rotation=np.eye(3), center=np.array([offset, 0.0, 0.0]))


def make_landmark(point: Tuple[float, float, float], view_ids: Iterable[int]) -> Landmark:
    return Landmark(
        X=np.array(point, dtype=float),
        observations={
            id_view: Observation(x=np.array([10.0 * id_view, 5.0]), id_feat=id_view)
            for id_view in view_ids
        },
    )


@pytest.fixture
def scenario_scene() -> Scene:
    """Views 2, 5 and 7; only 2 and 7 have both a pose and an intrinsic."""

    scene = Scene(root_path="/images")
    scene.views = {
        2: make_view(2, "b.jpg", id_intrinsic=9),
        5: make_view(5, "x.jpg", id_intrinsic=5),
        7: make_view(7, "a.jpg", id_intrinsic=5),
    }
    scene.intrinsics = {5: make_intrinsic(500.0), 9: make_intrinsic(900.0)}
    scene.poses = {2: make_pose(2.0), 7: make_pose(7.0)}
    scene.structure = {
        40: make_landmark((1.0, 2.0, 3.0), [2, 7]),
        41: make_landmark((4.0, 5.0, 6.0), [2, 5, 7]),
    }
    return scene


def write_matches_directory(
    directory: Path,
    image_names: Iterable[str],
    pairs: Dict[Tuple[int, int], Iterable[Tuple[int, int]]],
    *,
    match_filename: str = "matches.f.txt",
) -> Path:
    """Write ``image_describer.json``, one ``.feat`` per image and a text match file."""

    directory.mkdir(parents=True, exist_ok=True)
    (directory / "image_describer.json").write_text(
        json.dumps({"regions_type": {"polymorphic_name": "SIFT_Regions"}}), encoding="utf-8"
    )
    for name in image_names:
        stem = Path(name).stem
        (directory / f"{stem}.feat").write_text("1.0 2.0 1.5 0.1\n3.0 4.0 1.5 0.2\n", encoding="utf-8")
    lines = []
    for (view_i, view_j), matches in pairs.items():
        matches = list(matches)
        lines.append(f"{view_i} {view_j}")
        lines.append(str(len(matches)))
        lines.extend(f"{i} {j}" for i, j in matches)
    (directory / match_filename).write_text("\n".join(lines) + "\n", encoding="utf-8")
    return directory


@pytest.fixture(autouse=True)
def reset_settings(monkeypatch: pytest.MonkeyPatch):
    """Ensure every test reads settings from its own environment."""

    for variable in ("SFM_LOG_LEVEL", "SFM_ENGINE", "SFM_PRECOMPUTED_SCENE", "SFM_UNMAPPED_OBSERVATIONS", "SFM_STRICT_EXPORTS"):
        monkeypatch.delenv(variable, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


IDENTITY = [[1.0, 0.0, 0.0], [0.0, 1.0, 0.0], [0.0, 0.0, 1.0]]


def intrinsic_record(identifier: int, focal_length: float) -> dict:
    return {
        "id": identifier,
        "model": 3,
        "width": 640,
        "height": 480,
        "focal_length": focal_length,
        "principal_point": [320.0, 240.0],
        "distortion": [0.0, 0.0, 0.0],
    }


@dataclass
class Workspace:
    input_file: Path
    matches_directory: Path
    reconstruction: Path
    output_directory: Path

    def request(self, **overrides) -> PipelineRequest:
        values = {
            "input_file": self.input_file,
            "matches_directory": self.matches_directory,
            "output_directory": self.output_directory,
        }
        values.update(overrides)
        return PipelineRequest(**values)

    def settings(self, **overrides) -> SfMSettings:
        return SfMSettings(precomputed_scene=self.reconstruction, **overrides)


@pytest.fixture
def workspace(tmp_path: Path) -> Workspace:
    views = [
        {"id_view": 2, "filename": "imgs/b.jpg", "id_pose": 2, "id_intrinsic": 9, "width": 640, "height": 480},
        {"id_view": 5, "filename": "imgs/x.jpg", "id_pose": 5, "id_intrinsic": 5, "width": 640, "height": 480},
        {"id_view": 7, "filename": "imgs/a.jpg", "id_pose": 7, "id_intrinsic": 5, "width": 640, "height": 480},
    ]
    input_file = tmp_path / "sfm_data.json"
    input_file.write_text(
        json.dumps({"root_path": "/data", "views": views, "intrinsics": [intrinsic_record(5, 500.0), intrinsic_record(9, 900.0)]}),
        encoding="utf-8",
    )
    matches_directory = write_matches_directory(
        tmp_path / "matches", ["a.jpg", "b.jpg", "x.jpg"], {(2, 7): [(0, 0), (1, 1)], (5, 7): [(0, 1)]}
    )
    reconstruction = matches_directory / "sfm_data_reconstructed.json"
    reconstruction.write_text(
        json.dumps(
            {
                "extrinsics": [
                    {"id": 2, "rotation": IDENTITY, "center": [2.0, 0.0, 0.0]},
                    {"id": 7, "rotation": IDENTITY, "center": [7.0, 0.0, 0.0]},
                ],
                "structure": [
                    {
                        "id": 40,
                        "X": [1.0, 2.0, 3.0],
                        "observations": [
                            {"id_view": 2, "id_feat": 0, "x": [1.0, 2.0]},
                            {"id_view": 7, "id_feat": 0, "x": [1.0, 2.0]},
                        ],
                    },
                    {
                        "id": 41,
                        "X": [4.0, 5.0, 6.0],
                        "observations": [
                            {"id_view": 5, "id_feat": 0, "x": [1.0, 2.0]},
                            {"id_view": 7, "id_feat": 1, "x": [3.0, 4.0]},
                        ],
                    },
                ],
            }
        ),
        encoding="utf-8",
    )
    return Workspace(input_file, matches_directory, reconstruction, tmp_path / "out")
