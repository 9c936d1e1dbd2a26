import pytest

from core.processing.normalizer import DEFAULT_DIGITS, TEMPERATURE_DIGITS, round_value


def test_none_is_preserved():
    """Absence stays absent, it is never coerced to zero."""
    assert round_value(None, 2) is None


def test_rounds_to_requested_digits():
    assert round_value(12.345678, TEMPERATURE_DIGITS) == 12.3
    assert round_value(12.345678, DEFAULT_DIGITS) == 12.35


def test_halves_round_away_from_zero():
    assert round_value(12.345, 2) == 12.35
    assert round_value(2.5, 0) == 3.0
    assert round_value(-2.5, 0) == -3.0
    assert round_value(-12.345, 2) == -12.35


@pytest.mark.parametrize("value", [0.0, 1.05, 12.345678, -7.777, 1e-9, 123456.789])
@pytest.mark.parametrize("digits", [0, 1, 2, 3])
def test_round_is_idempotent(value: float, digits: int):
    once = round_value(value, digits)
    assert round_value(once, digits) == once


def test_non_finite_values_pass_through():
    assert round_value(float("inf"), 2) == float("inf")


def test_huge_values_are_left_alone():
    assert round_value(1e300, 2) == 1e300
