import pytest

from wofost.mathutil import insw, leap_year, limit, notnul


@pytest.mark.parametrize(
    "low, high, value, expected",
    [(0.0, 1.0, -0.5, 0.0), (0.0, 1.0, 0.25, 0.25), (0.0, 1.0, 3.0, 1.0), (0.0, 1.0, 1.0, 1.0)],
)
def test_limit_clamps(low, high, value, expected):
    assert limit(low, high, value) == expected


def test_limit_result_inside_bounds():
    for value in (-10.0, -0.1, 0.0, 0.5, 2.0, 7.5, 100.0):
        result = limit(-0.1, 7.5, value)
        assert -0.1 <= result <= 7.5


def test_notnul_replaces_zero():
    assert notnul(0.0) == 1.0


def test_notnul_keeps_nonzero():
    assert notnul(-2.5) == -2.5


def test_insw_negative_selects_second():
    assert insw(-0.1, 7.0, 9.0) == 7.0


def test_insw_zero_and_positive_select_third():
    assert insw(0.0, 7.0, 9.0) == 9.0
    assert insw(0.3, 7.0, 9.0) == 9.0


@pytest.mark.parametrize(
    "year, days",
    [(2000, 366), (1900, 365), (2024, 366), (2023, 365), (2100, 365), (1600, 366)],
)
def test_leap_year(year, days):
    assert leap_year(year) == days