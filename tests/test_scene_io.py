"""Mini README: Tests for scene document loading and saving.

Checks that required sections are enforced, that partial saves only carry
the requested sections, and that malformed documents raise clear errors.
"""

from __future__ import annotations

import json
from pathlib import Path

import numpy as np
import pytest

from sequential_sfm.errors import SceneFormatError
from sequential_sfm.scene import CameraModel, Scene, SceneParts, load_scene, save_scene


def _partial_document() -> dict:
    return {
        "version": "1",
        "root_path": "/images",
        "views": [
            {"id_view": 0, "filename": "a.jpg", "id_pose": 0, "id_intrinsic": 0, "width": 640, "height": 480},
            {"id_view": 1, "filename": "b.jpg", "id_pose": 1, "width": 640, "height": 480},
        ],
        "intrinsics": [
            {
                "id": 0,
                "model": 3,
                "width": 640,
                "height": 480,
                "focal_length": 800.0,
                "principal_point": [320.0, 240.0],
                "distortion": [0.0, 0.0, 0.0],
            }
        ],
    }


def test_load_views_and_intrinsics(tmp_path: Path) -> None:
    path = tmp_path / "sfm_data.json"
    path.write_text(json.dumps(_partial_document()), encoding="utf-8")

    scene = load_scene(path, SceneParts.VIEWS | SceneParts.INTRINSICS)

    assert scene.root_path == "/images"
    assert scene.views[1].id_intrinsic is None
    assert scene.intrinsics[0].model is CameraModel.PINHOLE_RADIAL_K3
    assert scene.poses == {}


def test_missing_required_section_is_rejected(tmp_path: Path) -> None:
    document = _partial_document()
    del document["intrinsics"]
    path = tmp_path / "sfm_data.json"
    path.write_text(json.dumps(document), encoding="utf-8")

    with pytest.raises(SceneFormatError):
        load_scene(path, SceneParts.VIEWS | SceneParts.INTRINSICS)


def test_unreadable_and_invalid_documents(tmp_path: Path) -> None:
    with pytest.raises(SceneFormatError):
        load_scene(tmp_path / "absent.json")

    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")
    with pytest.raises(SceneFormatError):
        load_scene(broken, SceneParts.VIEWS)


def test_duplicate_view_ids_are_rejected(tmp_path: Path) -> None:
    document = _partial_document()
    document["views"][1]["id_view"] = 0
    path = tmp_path / "sfm_data.json"
    path.write_text(json.dumps(document), encoding="utf-8")

    with pytest.raises(SceneFormatError):
        load_scene(path, SceneParts.VIEWS)


def test_save_writes_only_requested_sections(tmp_path: Path, scenario_scene: Scene) -> None:
    path = save_scene(
        scenario_scene, tmp_path / "calibration.json", SceneParts.VIEWS | SceneParts.EXTRINSICS | SceneParts.INTRINSICS
    )

    payload = json.loads(path.read_text(encoding="utf-8"))
    assert "structure" not in payload
    assert [view["id_view"] for view in payload["views"]] == [2, 5, 7]
    assert [pose["id"] for pose in payload["extrinsics"]] == [2, 7]
    assert list(tmp_path.iterdir()) == [path]


def test_full_save_can_be_loaded_back(tmp_path: Path, scenario_scene: Scene) -> None:
    path = save_scene(scenario_scene, tmp_path / "all.json")

    loaded = load_scene(path)

    assert sorted(loaded.structure) == [40, 41]
    np.testing.assert_allclose(loaded.structure[41].X, [4.0, 5.0, 6.0])
    np.testing.assert_allclose(loaded.poses[7].center, [7.0, 0.0, 0.0])
    assert sorted(loaded.structure[41].observations) == [2, 5, 7]
