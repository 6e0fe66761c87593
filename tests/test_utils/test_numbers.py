"""Tests for loose numeric coercion helpers."""

import math

import pytest

from riskradar.utils.numbers import as_float, as_optional_float, clamp, round_half_up


@pytest.mark.parametrize(
    "value,expected",
    [(None, 0.0), ("12.5", 12.5), (7, 7.0), (True, 1.0), ("abc", 0.0), (math.nan, 0.0),
     (math.inf, 0.0), ([1], 0.0)],
)
def test_as_float(value: object, expected: float) -> None:
    assert as_float(value) == expected


def test_as_float_custom_default() -> None:
    assert as_float(None, 50.0) == 50.0


def test_as_optional_float() -> None:
    assert as_optional_float(None) is None
    assert as_optional_float("x") is None
    assert as_optional_float("3") == 3.0


def test_clamp() -> None:
    assert clamp(5, 0, 10) == 5
    assert clamp(-5, 0, 10) == 0
    assert clamp(50, 0, 10) == 10


@pytest.mark.parametrize("value,expected", [(0.5, 1), (1.5, 2), (2.5, 3), (2.49, 2), (-0.5, 0)])
def test_round_half_up(value: float, expected: int) -> None:
    assert round_half_up(value) == expected
