"""Mini README: Camera model and intrinsic refinement enumerations.

Structure:
    * CameraModel - numbered camera models accepted on the command line.
    * IntrinsicRefinement - bit-combinable set of intrinsic parameters that
      bundle adjustment may refine.

Both enums parse user input through ``from_value``/``from_str`` and raise
``InvalidInputError`` with the offending value when parsing fails.
"""

from __future__ import annotations

from enum import Flag, IntEnum
from functools import reduce

from ..errors import InvalidInputError


class CameraModel(IntEnum):
    """Camera models, numbered as on the command line."""

    PINHOLE = 1
    PINHOLE_RADIAL_K1 = 2
    PINHOLE_RADIAL_K3 = 3
    PINHOLE_BROWN_T2 = 4
    PINHOLE_FISHEYE = 5
    PINHOLE_RADIAL_K1_PBA = 6

    @classmethod
    def from_value(cls, value: int) -> "CameraModel":
        """Return the model numbered ``value`` on the command line."""

        try:
            return cls(int(value))
        except ValueError as error:
            raise InvalidInputError(f"Invalid camera type: {value}") from error

    @property
    def label(self) -> str:
        return self.name.lower()

    @property
    def distortion_size(self) -> int:
        """Number of distortion coefficients carried by the model."""

        return _DISTORTION_SIZES[self]


_DISTORTION_SIZES = {
    CameraModel.PINHOLE: 0,
    CameraModel.PINHOLE_RADIAL_K1: 1,
    CameraModel.PINHOLE_RADIAL_K3: 3,
    CameraModel.PINHOLE_BROWN_T2: 5,
    CameraModel.PINHOLE_FISHEYE: 4,
    CameraModel.PINHOLE_RADIAL_K1_PBA: 1,
}


class IntrinsicRefinement(Flag):
    """Intrinsic parameters held constant or refined during adjustment."""

    NONE = 1
    ADJUST_FOCAL_LENGTH = 2
    ADJUST_PRINCIPAL_POINT = 4
    ADJUST_DISTORTION = 8
    ADJUST_ALL = ADJUST_FOCAL_LENGTH | ADJUST_PRINCIPAL_POINT | ADJUST_DISTORTION

    @classmethod
    def from_str(cls, value: str) -> "IntrinsicRefinement":
        """Parse ``|`` separated tokens such as ``ADJUST_FOCAL_LENGTH|ADJUST_DISTORTION``."""

        tokens = [token.strip().upper() for token in (value or "").split("|")]
        if not tokens or any(not token for token in tokens):
            raise InvalidInputError(
                f"Invalid intrinsic refinement option: {value!r}"
            )
        try:
            members = [cls[token] for token in tokens]
        except KeyError as error:
            raise InvalidInputError(
                f"Invalid intrinsic refinement option: {value!r}"
            ) from error
        return reduce(lambda left, right: left | right, members)

    def adjusts(self, parameter: "IntrinsicRefinement") -> bool:
        """Return whether ``parameter`` is refined under this option set."""

        return bool(self & parameter)
