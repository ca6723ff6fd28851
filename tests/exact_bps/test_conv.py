"""Conversion Accessor Tests."""

import math

import pytest

from exact_bps import BPS, Rounding, Unit, base_unit, set_base_unit


@pytest.mark.parametrize(
    "ppb, expected",
    [
        (1_000_000_000, 1),
        # Fractions below one whole amount are dropped.
        (1_999_999_999, 1),
        (2_000_000_000, 2),
        (999_999_999, 0),
        (-1_999_999_999, -1),
    ],
)
def test_amounts(ppb: int, expected: int) -> None:
    """Tests reading whole amounts."""
    assert BPS.from_ppb(ppb).amounts() == expected


@pytest.mark.parametrize(
    "ppb, expected",
    [
        (1_000_000_000, 100),
        (1_009_999_999, 100),
        (1_010_000_000, 101),
        (10_000_000, 1),
        (9_999_999, 0),
    ],
)
def test_percentages(ppb: int, expected: int) -> None:
    """Tests reading percentages."""
    assert BPS.from_ppb(ppb).percentages() == expected


@pytest.mark.parametrize(
    "ppb, expected",
    [
        (1_000_000_000, 10_000),
        (1_000_099_999, 10_000),
        (1_000_100_000, 10_001),
        (99_999, 0),
    ],
)
def test_basis_points(ppb: int, expected: int) -> None:
    """Tests reading basis points."""
    assert BPS.from_ppb(ppb).basis_points() == expected


@pytest.mark.parametrize(
    "ppb, expected",
    [
        (1_000_000_000, 20_000),
        (1_000_049_999, 20_000),
        (1_000_050_000, 20_001),
        (49_999, 0),
    ],
)
def test_half_basis_points(ppb: int, expected: int) -> None:
    """Tests reading half basis points."""
    assert BPS.from_ppb(ppb).half_basis_points() == expected


@pytest.mark.parametrize(
    "ppb, expected",
    [
        (1_000_000_000, 100_000),
        (1_000_009_999, 100_000),
        (1_000_010_000, 100_001),
        (9_999, 0),
    ],
)
def test_deci_basis_points(ppb: int, expected: int) -> None:
    """Tests reading deci basis points."""
    assert BPS.from_ppb(ppb).deci_basis_points() == expected


@pytest.mark.parametrize(
    "ppb, expected",
    [
        (1_000_000, 1_000),
        (1_000, 1),
        (1_999, 1),
        (2_001, 2),
        (999, 0),
        (-1_999, -1),
    ],
)
def test_ppms(ppb: int, expected: int) -> None:
    """Tests reading parts per million."""
    assert BPS.from_ppb(ppb).ppms() == expected


@pytest.mark.parametrize("ppb, expected", [(1_000, 1_000), (1, 1), (5, 5), (None, 0)])
def test_ppbs(ppb: int | None, expected: int) -> None:
    """Tests reading parts per billion."""
    assert BPS.from_ppb(ppb).ppbs() == expected


@pytest.mark.parametrize(
    "ppb, expected",
    [
        (1_009_999_999, 101),
        (1_005_000_000, 101),
        (1_004_999_999, 100),
        (-1_005_000_000, -101),
        (-1_004_999_999, -100),
        (5_000_000, 1),
        (4_999_999, 0),
    ],
)
def test_percentages_half_up(ppb: int, expected: int) -> None:
    """Tests that HALF_UP rounds to nearest with ties away from zero."""
    assert BPS.from_ppb(ppb).percentages(rounding=Rounding.HALF_UP) == expected


@pytest.mark.parametrize(
    "ppb, expected",
    [
        (1_999_999_999, 2),
        (1_500_000_000, 2),
        (1_499_999_999, 1),
        (-500_000_000, -1),
    ],
)
def test_amounts_half_up(ppb: int, expected: int) -> None:
    """Tests that whole amounts can be rounded to nearest on request."""
    assert BPS.from_ppb(ppb).amounts(rounding=Rounding.HALF_UP) == expected


@pytest.mark.parametrize(
    "accessor, ppb, expected",
    [
        ("basis_points", 1_000_050_000, 10_001),
        ("basis_points", 1_000_049_999, 10_000),
        ("half_basis_points", 1_000_025_000, 20_001),
        ("half_basis_points", 1_000_024_999, 20_000),
        ("deci_basis_points", 1_000_005_000, 100_001),
        ("deci_basis_points", 1_000_004_999, 100_000),
        ("ppms", 1_500, 2),
        ("ppms", 1_499, 1),
    ],
)
def test_half_unit_thresholds(accessor: str, ppb: int, expected: int) -> None:
    """Tests each accessor exactly at and just below its half-unit boundary."""
    value = BPS.from_ppb(ppb)
    assert getattr(value, accessor)(rounding=Rounding.HALF_UP) == expected


@pytest.mark.parametrize(
    "unit, expected",
    [
        (Unit.DECI_BASIS_POINT, 15_000),
        (Unit.PPB, 150_000_000),
        (Unit.PPM, 150_000),
        (Unit.HALF_BASIS_POINT, 3_000),
        (Unit.BASIS_POINT, 1_500),
        (Unit.PERCENTAGE, 15),
    ],
)
def test_base_unit_amounts(unit: Unit, expected: int) -> None:
    """Tests the generic accessor against every base unit, globally and explicitly."""
    value = BPS.from_percentage(15)
    assert value.base_unit_amounts(unit) == expected
    assert value.in_unit(unit) == expected

    set_base_unit(unit)
    assert value.base_unit_amounts() == expected


def test_base_unit_amounts_default() -> None:
    """Tests that the default base unit is deci basis points."""
    assert BPS.from_percentage(15).base_unit_amounts() == 15_000


def test_str_renders_base_unit_amounts() -> None:
    """Tests that str() shows the value in the current base unit."""
    a = BPS.from_amount(10**12)
    b = BPS.from_string(".000001")
    with base_unit(Unit.PPM):
        assert str(a.add(b)) == "1000000000000000001"
    assert str(BPS.from_percentage(15)) == "15000"


def test_repr() -> None:
    """Tests the official representation."""
    assert repr(BPS.from_basis_point(5)) == "BPS(1, 2000)"
    assert repr(BPS()) == "BPS(0, 1)"


@pytest.mark.parametrize(
    "value, expected_float, expected_exact",
    [
        (BPS.from_amount(1).div(4), 0.25, True),
        (BPS.from_amount(1).div(3), 1 / 3, False),
        (BPS(), 0.0, True),
        (BPS.from_percentage(-50), -0.5, True),
        (BPS.from_ppb(1), 1e-9, False),
    ],
)
def test_to_float(value: BPS, expected_float: float, expected_exact: bool) -> None:
    """Tests float reduction and its exactness flag."""
    got_float, got_exact = value.to_float()
    assert got_float == expected_float
    assert got_exact is expected_exact


@pytest.mark.parametrize("sign", [1, -1])
def test_to_float_out_of_range(sign: int) -> None:
    """Tests that values beyond the float range become a signed infinity."""
    got_float, got_exact = BPS.from_amount(sign * 10**400).to_float()
    assert got_float == math.copysign(math.inf, sign)
    assert got_exact is False


def test_repr_and_str_of_very_large_values() -> None:
    """Tests rendering values beyond the interpreter's int digit limit."""
    value = BPS.from_amount(10**5000)
    assert repr(value) == "BPS(1" + "0" * 5000 + ", 1)"
    with base_unit(Unit.PERCENTAGE):
        assert str(value) == "1" + "0" * 5002


@pytest.mark.parametrize("invalid_unit", ["ppm", 1_000_000, None])
def test_in_unit_rejects_non_unit(invalid_unit: object) -> None:
    """Tests that accessors only take Unit members."""
    value = BPS.from_percentage(15)
    with pytest.raises(TypeError, match="Expected Unit"):
        value.in_unit(invalid_unit)  # type: ignore[arg-type]
    if invalid_unit is not None:
        with pytest.raises(TypeError, match="Expected Unit"):
            value.base_unit_amounts(invalid_unit)  # type: ignore[arg-type]
