"""Exact, arbitrary-precision basis points and related proportional units.

Usage::

    from exact_bps import BPS, parse_from_string

    rate = parse_from_string("0.02645")   # 2.645%
    rate.deci_basis_points()              # 2645
    rate == BPS.from_ppm(26450)           # True

Values are exact fractions of one "amount" (1 amount = 100%), so adding,
dividing and converting between units never drifts. Integer accessors
truncate toward zero unless `rounding=Rounding.HALF_UP` is passed.
"""

from .bps import BPS, must_parse_from_string, parse_from_string
from .config import base_unit, get_base_unit, set_base_unit
from .exceptions import BPSError, ErrorKind, FatalParseError, InvalidFormatError
from .units import Rounding, Unit

__all__ = [
    # Core type
    "BPS",
    "Unit",
    "Rounding",
    # Parsing
    "parse_from_string",
    "must_parse_from_string",
    # Process-wide base unit
    "get_base_unit",
    "set_base_unit",
    "base_unit",
    # Exceptions
    "BPSError",
    "ErrorKind",
    "InvalidFormatError",
    "FatalParseError",
]
