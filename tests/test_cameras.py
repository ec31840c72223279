"""Mini README: Tests for camera model and refinement option parsing."""

from __future__ import annotations

import pytest

from sequential_sfm.errors import InvalidInputError
from sequential_sfm.scene import CameraModel, IntrinsicRefinement


@pytest.mark.parametrize("value", [0, 7, -1])
def test_camera_model_rejects_unknown_values(value: int) -> None:
    with pytest.raises(InvalidInputError):
        CameraModel.from_value(value)


def test_camera_model_accepts_command_line_codes() -> None:
    assert CameraModel.from_value(3) is CameraModel.PINHOLE_RADIAL_K3
    assert CameraModel.from_value(5) is CameraModel.PINHOLE_FISHEYE
    assert CameraModel.PINHOLE_BROWN_T2.distortion_size == 5


def test_refinement_parses_combined_tokens() -> None:
    refinement = IntrinsicRefinement.from_str("ADJUST_FOCAL_LENGTH|adjust_distortion")

    assert refinement.adjusts(IntrinsicRefinement.ADJUST_FOCAL_LENGTH)
    assert refinement.adjusts(IntrinsicRefinement.ADJUST_DISTORTION)
    assert not refinement.adjusts(IntrinsicRefinement.ADJUST_PRINCIPAL_POINT)


def test_refinement_all_covers_every_parameter() -> None:
    refinement = IntrinsicRefinement.from_str("ADJUST_ALL")

    assert refinement == (
        IntrinsicRefinement.ADJUST_FOCAL_LENGTH
        | IntrinsicRefinement.ADJUST_PRINCIPAL_POINT
        | IntrinsicRefinement.ADJUST_DISTORTION
    )
    assert IntrinsicRefinement.from_str("NONE") == IntrinsicRefinement.NONE


@pytest.mark.parametrize("value", ["", "ADJUST_EVERYTHING", "ADJUST_FOCAL_LENGTH|", "|NONE"])
def test_refinement_rejects_unparseable_values(value: str) -> None:
    with pytest.raises(InvalidInputError):
        IntrinsicRefinement.from_str(value)
