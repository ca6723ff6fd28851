"""Unit scales and rounding modes."""

from __future__ import annotations

from enum import Enum

from . import constants


class Unit(Enum):
    """
    A named scale that integer counts can be expressed in.

    The member value is the scale denominator, so `n` of a unit is
    `n / unit.denominator` amounts.
    """

    PERCENTAGE = constants.PERCENTAGE
    BASIS_POINT = constants.BASIS_POINT
    HALF_BASIS_POINT = constants.HALF_BASIS_POINT
    DECI_BASIS_POINT = constants.DECI_BASIS_POINT
    PPM = constants.PPM
    PPB = constants.PPB

    @property
    def denominator(self) -> int:
        """How many of this unit make up one amount."""
        return self.value

    @classmethod
    def from_name(cls, name: str) -> Unit:
        """
        Look up a unit by a loosely written name.

        Case, underscores, hyphens and spaces are ignored, so `"ppm"`,
        `"deci_basis_point"` and `"DeciBasisPoint"` all resolve.

        Raises:
            ValueError: If no unit matches.
        """
        key = _normalize(name)
        for unit in cls:
            if _normalize(unit.name) == key:
                return unit
        raise ValueError(f"Unknown unit name: {name!r}")


def _normalize(name: str) -> str:
    return "".join(ch for ch in name.lower() if ch not in "_- ")


class Rounding(Enum):
    """How a scaled value is reduced to an integer count."""

    DOWN = "down"
    """Truncate toward zero. The default for every accessor."""

    HALF_UP = "half_up"
    """Round to nearest; exact halves round away from zero."""
