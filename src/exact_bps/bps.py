"""
Exact Proportional Quantity Type.

A `BPS` is a rational number of "amounts", where 1 amount = 100% =
10,000 basis points = 1,000,000,000 parts per billion. Every named unit is a
thin view over that single value, so converting between units never loses
precision. Rounding only happens when a value is read back as an integer
count of some unit.

Example::

    from exact_bps import BPS, parse_from_string

    fee = BPS.from_basis_point(25)        # 0.25%
    fee.deci_basis_points()               # 250
    parse_from_string("0.0025") == fee    # True
"""

from __future__ import annotations

import logging
import math
import numbers
from decimal import Decimal
from fractions import Fraction
from typing import Any

from pydantic import GetCoreSchemaHandler
from pydantic_core import CoreSchema, core_schema
from typing_extensions import Self

from . import config, constants
from .exceptions import FatalParseError, InvalidFormatError
from .parsing import int_to_digits, parse_decimal
from .units import Rounding, Unit

logger = logging.getLogger(__name__)


class BPS(Fraction):
    """
    An immutable, exact proportional quantity that inherits from `Fraction`.

    The fraction is the quantity measured in amounts and is always held in
    lowest terms, so two values compare equal whenever they denote the same
    proportion, whichever unit they were built from.

    Arithmetic is restricted to operations that keep the result a
    proportion: `BPS + BPS`, `BPS - BPS`, `BPS * int`, `BPS * BPS`,
    `BPS / int` and `BPS % BPS`. Mixing in other number types raises
    `TypeError`, as do `//`, `divmod()` and `**`.

    `BPS()` is zero.
    """

    __slots__ = ()

    def __new__(cls, value: Any = 0, denominator: int | None = None) -> Self:
        """
        Create a new instance from a number of amounts.

        Accepts an `int`, a `float` (its exact binary value), a `Decimal`, any
        rational, or an integer numerator/denominator pair.

        Raises:
            TypeError: For strings, booleans and other non-numbers.
            ZeroDivisionError: If `denominator` is zero.
        """
        if denominator is not None:
            _require_int(value, "numerator")
            _require_int(denominator, "denominator")
            return super().__new__(cls, value, denominator)

        if isinstance(value, bool) or not isinstance(
            value, (numbers.Rational, float, Decimal)
        ):
            hint = " (use parse_from_string for text)" if isinstance(value, str) else ""
            raise TypeError(f"Expected a number of amounts, got {type(value).__name__}{hint}")

        return super().__new__(cls, value)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def from_amount(cls, n: int | float | Fraction) -> Self:
        """Create from a count of amounts (1 amount = 100%)."""
        return cls(n)

    @classmethod
    def from_unit(cls, n: int, unit: Unit) -> Self:
        """Create from an integer count of `unit`."""
        _require_int(n, "count")
        _require_unit(unit)
        return cls(n, unit.denominator)

    @classmethod
    def from_percentage(cls, n: int) -> Self:
        """Create from a whole number of percent."""
        return cls.from_unit(n, Unit.PERCENTAGE)

    @classmethod
    def from_basis_point(cls, n: int) -> Self:
        """Create from basis points (1/10,000)."""
        return cls.from_unit(n, Unit.BASIS_POINT)

    @classmethod
    def from_half_basis_point(cls, n: int) -> Self:
        """Create from half basis points (1/20,000)."""
        return cls.from_unit(n, Unit.HALF_BASIS_POINT)

    @classmethod
    def from_deci_basis_point(cls, n: int) -> Self:
        """Create from deci basis points (1/100,000)."""
        return cls.from_unit(n, Unit.DECI_BASIS_POINT)

    @classmethod
    def from_ppm(cls, n: int | None) -> Self:
        """Create from parts per million. `None` is treated as zero."""
        return cls.from_unit(0 if n is None else n, Unit.PPM)

    @classmethod
    def from_ppb(cls, n: int | None) -> Self:
        """Create from parts per billion. `None` is treated as zero."""
        return cls.from_unit(0 if n is None else n, Unit.PPB)

    @classmethod
    def from_base_unit(cls, n: int, unit: Unit | None = None) -> Self:
        """
        Create from a count of the base unit.

        The base unit is `unit` when given, otherwise the process-wide
        setting from `exact_bps.config`.
        """
        return cls.from_unit(n, config.get_base_unit() if unit is None else unit)

    @classmethod
    def from_string(cls, text: str) -> Self:
        """
        Parse a decimal string of amounts, so `"0.15"` is 15%.

        Raises:
            InvalidFormatError: If `text` is not a plain base-10 decimal.
        """
        return cls(parse_decimal(text))

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> CoreSchema:
        """
        Hook into Pydantic's validation system.

        Fields accept either an existing instance or a decimal string.
        Parse failures are reported as validation errors.
        """
        # Schema that first validates the input is a strict str, then parses it.
        from_str_schema = core_schema.chain_schema(
            [
                core_schema.str_schema(strict=True),
                core_schema.no_info_plain_validator_function(cls.from_string),
            ]
        )

        return core_schema.json_or_python_schema(
            json_schema=from_str_schema,
            python_schema=core_schema.union_schema(
                [
                    # Case 1: The value is already an instance.
                    core_schema.is_instance_schema(cls),
                    # Case 2: The value is a decimal string.
                    from_str_schema,
                ]
            ),
        )

    # ------------------------------------------------------------------
    # Conversion
    # ------------------------------------------------------------------

    def in_unit(self, unit: Unit, *, rounding: Rounding = Rounding.DOWN) -> int:
        """Return the value as an integer count of `unit`."""
        _require_unit(unit)
        return _scale(self, unit.denominator, rounding)

    def amounts(self, *, rounding: Rounding = Rounding.DOWN) -> int:
        """
        Return the value as a whole number of amounts.

        Fractions are dropped by default, so 1.999999999 amounts reads as 1.
        """
        return _scale(self, constants.AMOUNT, rounding)

    def percentages(self, *, rounding: Rounding = Rounding.DOWN) -> int:
        """Return the value in percent."""
        return self.in_unit(Unit.PERCENTAGE, rounding=rounding)

    def basis_points(self, *, rounding: Rounding = Rounding.DOWN) -> int:
        """Return the value in basis points."""
        return self.in_unit(Unit.BASIS_POINT, rounding=rounding)

    def half_basis_points(self, *, rounding: Rounding = Rounding.DOWN) -> int:
        """Return the value in half basis points."""
        return self.in_unit(Unit.HALF_BASIS_POINT, rounding=rounding)

    def deci_basis_points(self, *, rounding: Rounding = Rounding.DOWN) -> int:
        """Return the value in deci basis points."""
        return self.in_unit(Unit.DECI_BASIS_POINT, rounding=rounding)

    def ppms(self, *, rounding: Rounding = Rounding.DOWN) -> int:
        """Return the value in parts per million."""
        return self.in_unit(Unit.PPM, rounding=rounding)

    def ppbs(self, *, rounding: Rounding = Rounding.DOWN) -> int:
        """Return the value in parts per billion."""
        return self.in_unit(Unit.PPB, rounding=rounding)

    def base_unit_amounts(
        self, unit: Unit | None = None, *, rounding: Rounding = Rounding.DOWN
    ) -> int:
        """Return the value in `unit`, or in the process-wide base unit."""
        return self.in_unit(config.get_base_unit() if unit is None else unit, rounding=rounding)

    def rat(self) -> Fraction:
        """Return the exact value in amounts as a plain `Fraction`."""
        return Fraction(self.numerator, self.denominator)

    def to_float(self) -> tuple[float, bool]:
        """
        Return the nearest float and whether it represents the value exactly.

        Values beyond the float range come back as a signed infinity.
        """
        try:
            approx = float(self.rat())
        except OverflowError:
            return math.copysign(math.inf, self.sign()), False
        return approx, Fraction(approx) == self.rat()

    # ------------------------------------------------------------------
    # Arithmetic
    # ------------------------------------------------------------------

    def _raise_type_error(self, other: Any, op_symbol: str) -> None:
        """Helper to raise a consistent TypeError."""
        raise TypeError(
            f"Unsupported operand type(s) for {op_symbol}: "
            f"'{type(self).__name__}' and '{type(other).__name__}'"
        )

    def __add__(self, other: Any) -> Self:
        """Handle the addition operator (`+`)."""
        if not isinstance(other, BPS):
            self._raise_type_error(other, "+")
        return type(self)(super().__add__(other))

    def __radd__(self, other: Any) -> Self:
        """Handle the reverse addition operator (`+`)."""
        if not isinstance(other, BPS):
            self._raise_type_error(other, "+")
        return type(self)(super().__radd__(other))

    def __sub__(self, other: Any) -> Self:
        """Handle the subtraction operator (`-`)."""
        if not isinstance(other, BPS):
            self._raise_type_error(other, "-")
        return type(self)(super().__sub__(other))

    def __rsub__(self, other: Any) -> Self:
        """Handle the reverse subtraction operator (`-`)."""
        if not isinstance(other, BPS):
            self._raise_type_error(other, "-")
        return type(self)(super().__rsub__(other))

    def __mul__(self, other: Any) -> Self:
        """Handle the multiplication operator (`*`) by an int or another proportion."""
        if isinstance(other, bool) or not isinstance(other, (int, BPS)):
            self._raise_type_error(other, "*")
        return type(self)(super().__mul__(other))

    def __rmul__(self, other: Any) -> Self:
        """Handle the reverse multiplication operator (`*`)."""
        return self.__mul__(other)

    def __truediv__(self, other: Any) -> Self:
        """
        Handle the division operator (`/`) by a plain integer.

        The quotient is kept exact. Dividing by zero is a caller error and
        raises `ZeroDivisionError`.
        """
        if isinstance(other, bool) or not isinstance(other, int):
            self._raise_type_error(other, "/")
        return type(self)(super().__truediv__(other))

    def __rtruediv__(self, other: Any) -> Any:
        """Dividing by a proportion is not supported."""
        self._raise_type_error(other, "/")

    def __mod__(self, other: Any) -> Self:
        """Handle the modulo operator (`%`): what is left of `self` after whole `other`s."""
        if not isinstance(other, BPS):
            self._raise_type_error(other, "%")
        return type(self)(super().__mod__(other))

    def __rmod__(self, other: Any) -> Self:
        """Handle the reverse modulo operator (`%`)."""
        if not isinstance(other, BPS):
            self._raise_type_error(other, "%")
        return type(self)(super().__rmod__(other))

    def __floordiv__(self, other: Any) -> Any:
        """The floor division operator (`//`) does not yield a proportion."""
        self._raise_type_error(other, "//")

    def __rfloordiv__(self, other: Any) -> Any:
        """The reverse floor division operator (`//`) does not yield a proportion."""
        self._raise_type_error(other, "//")

    def __divmod__(self, other: Any) -> Any:
        """`divmod(self, other)` does not yield a proportion."""
        self._raise_type_error(other, "divmod")

    def __rdivmod__(self, other: Any) -> Any:
        """`divmod(other, self)` does not yield a proportion."""
        self._raise_type_error(other, "divmod")

    def __pow__(self, exponent: Any, modulo: Any | None = None) -> Any:
        """The exponentiation operator (`**`) does not yield a proportion."""
        self._raise_type_error(exponent, "** or pow()")

    def __rpow__(self, base: Any, modulo: Any | None = None) -> Any:
        """The reverse exponentiation operator (`**`) does not yield a proportion."""
        self._raise_type_error(base, "**")

    def __neg__(self) -> Self:
        """Handle unary negation (`-`)."""
        return type(self)(super().__neg__())

    def __pos__(self) -> Self:
        """Handle unary plus (`+`)."""
        return self

    def __abs__(self) -> Self:
        """Handle `abs()`."""
        return type(self)(super().__abs__())

    def add(self, other: BPS) -> Self:
        """Return the exact sum `self + other`."""
        return self + other

    def sub(self, other: BPS) -> Self:
        """Return the exact difference `self - other`."""
        return self - other

    def mul(self, n: int) -> Self:
        """Return `self * n`."""
        return self * n

    def div(self, n: int) -> Self:
        """Return `self / n` as an exact fraction. `n` must not be zero."""
        return self / n

    def neg(self) -> Self:
        """Return `-self`."""
        return -self

    def abs(self) -> Self:
        """Return `abs(self)`."""
        return abs(self)

    def sign(self) -> int:
        """Return -1, 0 or 1 according to the sign of the value."""
        return (self.numerator > 0) - (self.numerator < 0)

    def is_zero(self) -> bool:
        """Return whether the value is zero."""
        return self.numerator == 0

    # ------------------------------------------------------------------
    # Comparison
    # ------------------------------------------------------------------

    def equal(self, other: BPS) -> bool:
        """Return whether both values denote the same proportion."""
        return self == other

    def cmp(self, other: BPS) -> int:
        """Return -1, 0 or 1 as `self` is less than, equal to or greater than `other`."""
        if not isinstance(other, BPS):
            self._raise_type_error(other, "cmp")
        return (self > other) - (self < other)

    def __eq__(self, other: object) -> bool:
        """Handle the equality operator (`==`). Other types never compare equal."""
        if not isinstance(other, BPS):
            return False
        return super().__eq__(other)

    def __ne__(self, other: object) -> bool:
        """Handle the inequality operator (`!=`)."""
        if not isinstance(other, BPS):
            return True
        return not super().__eq__(other)

    def __lt__(self, other: Any) -> bool:
        """Handle the less-than operator (`<`)."""
        if not isinstance(other, BPS):
            self._raise_type_error(other, "<")
        return super().__lt__(other)

    def __le__(self, other: Any) -> bool:
        """Handle the less-than-or-equal-to operator (`<=`)."""
        if not isinstance(other, BPS):
            self._raise_type_error(other, "<=")
        return super().__le__(other)

    def __gt__(self, other: Any) -> bool:
        """Handle the greater-than operator (`>`)."""
        if not isinstance(other, BPS):
            self._raise_type_error(other, ">")
        return super().__gt__(other)

    def __ge__(self, other: Any) -> bool:
        """Handle the greater-than-or-equal-to operator (`>=`)."""
        if not isinstance(other, BPS):
            self._raise_type_error(other, ">=")
        return super().__ge__(other)

    def __hash__(self) -> int:
        """Return a distinct hash for the object."""
        return hash((BPS, self.numerator, self.denominator))

    # ------------------------------------------------------------------
    # Representation
    # ------------------------------------------------------------------

    def __repr__(self) -> str:
        """Return the official string representation of the object."""
        return (
            f"{type(self).__name__}"
            f"({int_to_digits(self.numerator)}, {int_to_digits(self.denominator)})"
        )

    def __str__(self) -> str:
        """Return the value as a count of the process-wide base unit."""
        return int_to_digits(self.base_unit_amounts())


def parse_from_string(text: str) -> BPS:
    """
    Parse a decimal string of amounts into a `BPS`.

    `"0.15"` is 15%, `"-.5"` is -50%.

    Raises:
        InvalidFormatError: If `text` has more than one decimal point,
            non-decimal characters, or a `0b`/`0o`/`0x` prefix.
    """
    return BPS.from_string(text)


def must_parse_from_string(text: str) -> BPS:
    """
    Parse like `parse_from_string`, treating bad input as a fatal fault.

    Use this for literals that are known to be valid; a failure indicates a
    programming error rather than bad user input.

    Raises:
        FatalParseError: If `text` cannot be parsed.
    """
    try:
        return parse_from_string(text)
    except InvalidFormatError as e:
        logger.error("Failed to parse required decimal %r: %s", text, e.detail)
        raise FatalParseError(f"must_parse_from_string: {e.message}") from e


def _require_int(value: Any, name: str) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"Expected int for {name}, got {type(value).__name__}")


def _scale(value: Fraction, denominator: int, rounding: Rounding) -> int:
    """Return `value * denominator` as an integer, rounded per `rounding`."""
    numerator = value.numerator * denominator
    quotient, remainder = divmod(abs(numerator), value.denominator)
    if rounding is Rounding.HALF_UP and 2 * remainder >= value.denominator:
        quotient += 1
    return -quotient if numerator < 0 else quotient


def _require_unit(unit: Any) -> None:
    if not isinstance(unit, Unit):
        raise TypeError(f"Expected Unit, got {type(unit).__name__}")
