"""Mini README: Tests for region metadata, feature and match loading."""

from __future__ import annotations

import json
from pathlib import Path

import numpy as np
import pytest

from conftest import make_view, write_matches_directory
from sequential_sfm.errors import ProviderError
from sequential_sfm.providers import FeaturesProvider, MatchesProvider, load_matches, load_regions_type
from sequential_sfm.scene import Scene


@pytest.fixture
def scene() -> Scene:
    return Scene(views={0: make_view(0, "imgs/a.jpg"), 1: make_view(1, "imgs/b.jpg")})


def test_regions_type_is_read_from_describer(tmp_path: Path, scene: Scene) -> None:
    write_matches_directory(tmp_path, ["a.jpg", "b.jpg"], {})

    assert load_regions_type(tmp_path) == "SIFT_Regions"


def test_missing_describer_is_an_error(tmp_path: Path) -> None:
    with pytest.raises(ProviderError):
        load_regions_type(tmp_path)

    (tmp_path / "image_describer.json").write_text(json.dumps({"image_describer": {}}), encoding="utf-8")
    with pytest.raises(ProviderError):
        load_regions_type(tmp_path)


def test_features_are_loaded_per_view(tmp_path: Path, scene: Scene) -> None:
    write_matches_directory(tmp_path, ["a.jpg", "b.jpg"], {})

    provider = FeaturesProvider().load(scene, tmp_path, "SIFT_Regions")

    assert provider.keypoints(0).shape == (2, 4)
    np.testing.assert_allclose(provider.keypoints(1)[1], [3.0, 4.0, 1.5, 0.2])


def test_missing_feature_file_fails(tmp_path: Path, scene: Scene) -> None:
    write_matches_directory(tmp_path, ["a.jpg"], {})

    with pytest.raises(ProviderError):
        FeaturesProvider().load(scene, tmp_path, "SIFT_Regions")


def test_matches_fall_back_to_default_filename(tmp_path: Path, scene: Scene) -> None:
    write_matches_directory(tmp_path, ["a.jpg", "b.jpg"], {(0, 1): [(0, 1), (1, 0)], (0, 9): [(0, 0)]})

    provider = load_matches(scene, tmp_path, tmp_path / "does_not_exist.txt")

    assert provider.source == tmp_path / "matches.f.txt"
    assert list(provider.pairs()) == [(0, 1)]
    np.testing.assert_array_equal(provider.pairwise_matches[(0, 1)], [[0, 1], [1, 0]])


def test_explicit_match_file_takes_precedence(tmp_path: Path, scene: Scene) -> None:
    write_matches_directory(tmp_path, ["a.jpg", "b.jpg"], {(0, 1): [(0, 0)]})
    explicit = tmp_path / "matches.e.txt"
    explicit.write_text("0 1\n2\n0 0\n1 1\n", encoding="utf-8")

    provider = load_matches(scene, tmp_path, explicit)

    assert provider.source == explicit
    assert provider.pairwise_matches[(0, 1)].shape == (2, 2)


def test_binary_matches_are_read(tmp_path: Path, scene: Scene) -> None:
    np.array([0, 1, 1, 5, 6], dtype="<u4").tofile(tmp_path / "matches.f.bin")

    provider = load_matches(scene, tmp_path)

    assert provider.source == tmp_path / "matches.f.bin"
    np.testing.assert_array_equal(provider.pairwise_matches[(0, 1)], [[5, 6]])


def test_truncated_matches_are_unreadable(tmp_path: Path, scene: Scene) -> None:
    path = tmp_path / "matches.f.txt"
    path.write_text("0 1\n3\n0 0\n", encoding="utf-8")

    assert MatchesProvider().load(scene, path) is False
    with pytest.raises(ProviderError):
        load_matches(scene, tmp_path)
