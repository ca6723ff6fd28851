"""
Scale denominators for the supported proportional units.

Every value is measured in "amounts", where 1 amount = 100%.
A count `n` of some unit equals `n / DENOMINATOR` amounts.
"""

from __future__ import annotations

AMOUNT: int = 1
"""The base unit. 1 amount = 100% = 10,000 basis points."""

PERCENTAGE: int = 100
"""1 percent is 1/100 of an amount."""

BASIS_POINT: int = 10_000
"""1 basis point (bp) is 1/100th of a percent."""

HALF_BASIS_POINT: int = 20_000
"""1 half basis point is half of a basis point."""

DECI_BASIS_POINT: int = 100_000
"""1 deci basis point is a tenth of a basis point."""

PPM: int = 1_000_000
"""Parts per million."""

PPB: int = 1_000_000_000
"""Parts per billion. The finest supported scale."""
