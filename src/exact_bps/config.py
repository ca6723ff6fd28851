"""
Process-wide settings for exact_bps.

The only setting is the base unit: the scale used by
`BPS.from_base_unit` and `BPS.base_unit_amounts` when no explicit unit is
passed. It is seeded from the `EXACT_BPS_BASE_UNIT` environment variable and
defaults to deci basis points.

The setting is a plain module global with no lock. Writes must not race
with reads that depend on them; code that needs isolation should pass
`unit=` explicitly or scope a change with `base_unit(...)`.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from contextlib import contextmanager

from .units import Unit

logger = logging.getLogger(__name__)

DEFAULT_BASE_UNIT: Unit = Unit.DECI_BASIS_POINT
"""Base unit used when the environment does not name one."""

ENV_VAR = "EXACT_BPS_BASE_UNIT"

_env_value = os.environ.get(ENV_VAR)

if _env_value is None:
    _base_unit = DEFAULT_BASE_UNIT
else:
    try:
        _base_unit = Unit.from_name(_env_value)
    except ValueError:
        raise ValueError(
            f"Invalid {ENV_VAR} environment variable: '{_env_value}'. "
            f"Supported values: {[unit.name.lower() for unit in Unit]}"
        ) from None


def get_base_unit() -> Unit:
    """Return the current process-wide base unit."""
    return _base_unit


def set_base_unit(unit: Unit) -> Unit:
    """
    Replace the process-wide base unit.

    Returns:
        The unit that was in effect before the call.
    """
    global _base_unit

    if not isinstance(unit, Unit):
        raise TypeError(f"Expected Unit, got {type(unit).__name__}")

    previous = _base_unit
    _base_unit = unit
    logger.debug("Base unit changed from %s to %s", previous.name, unit.name)
    return previous


@contextmanager
def base_unit(unit: Unit) -> Iterator[Unit]:
    """Temporarily switch the base unit, restoring the previous one on exit."""
    previous = set_base_unit(unit)
    try:
        yield unit
    finally:
        set_base_unit(previous)
