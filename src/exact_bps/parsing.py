"""
Decimal string parsing.

Turns text such as `"123.456"`, `".1234"` or `"-0.5"` into the exact
rational value it denotes. Nothing is ever routed through `float`, so any
number of fractional digits is kept without loss.

Accepted grammar::

    [+|-] digits [ "." [digits] ]
    [+|-] "." digits

Only ASCII digits in base 10 are allowed. Prefixed literals (`0b`, `0o`,
`0x`), exponents, underscores and surrounding whitespace are all rejected.
"""

from __future__ import annotations

import logging
import re
from fractions import Fraction
from typing import NoReturn

from .exceptions import InvalidFormatError

logger = logging.getLogger(__name__)

_DECIMAL_RE = re.compile(r"(?P<sign>[+-]?)(?P<whole>[0-9]*)(?:\.(?P<frac>[0-9]*))?")

_BASE_PREFIXES = ("0b", "0o", "0x")

# Stays well under the interpreter's int <-> str digit limit.
_CHUNK_DIGITS = 1000
_CHUNK_BASE = 10**_CHUNK_DIGITS


def parse_decimal(text: str) -> Fraction:
    """
    Parse a signed base-10 decimal into an exact `Fraction`.

    Raises:
        TypeError: If `text` is not a `str`.
        InvalidFormatError: If `text` is not a plain decimal.
    """
    if not isinstance(text, str):
        raise TypeError(f"Expected str, got {type(text).__name__}")

    if text.count(".") > 1:
        _reject(text, "more than one decimal point")

    unsigned = text[1:] if text[:1] in ("+", "-") else text
    if unsigned[:2].lower() in _BASE_PREFIXES:
        _reject(text, "only base-10 digits are allowed")

    match = _DECIMAL_RE.fullmatch(text)
    if match is None:
        _reject(text, "unexpected character")

    whole = match.group("whole")
    frac = match.group("frac") or ""
    if not whole and not frac:
        _reject(text, "no digits")

    # "12.345" -> 12345 / 1000
    scale = 10 ** len(frac)
    value = Fraction(digits_to_int(whole) * scale + digits_to_int(frac), scale)

    return -value if match.group("sign") == "-" else value


def _reject(text: str, detail: str) -> NoReturn:
    logger.debug("Rejected decimal %r: %s", text, detail)
    raise InvalidFormatError(text, detail)


def digits_to_int(digits: str) -> int:
    """
    Convert a string of ASCII digits to an `int`, with no length limit.

    An empty string is zero.
    """
    value = 0
    for start in range(0, len(digits), _CHUNK_DIGITS):
        chunk = digits[start : start + _CHUNK_DIGITS]
        value = value * 10 ** len(chunk) + int(chunk)
    return value


def int_to_digits(value: int) -> str:
    """Render an `int` in base 10, with no length limit."""
    if value < 0:
        return "-" + int_to_digits(-value)

    chunks = []
    while value >= _CHUNK_BASE:
        value, low = divmod(value, _CHUNK_BASE)
        chunks.append(str(low).zfill(_CHUNK_DIGITS))
    chunks.append(str(value))
    return "".join(reversed(chunks))
