"""Tests for the shared rounding helpers."""

from __future__ import annotations

from core.services.rounding import clamp, is_positive_number, round_half_up


def test_round_half_up_rounds_halves_up():
    assert round_half_up(2.5) == 3
    assert round_half_up(0.5) == 1
    assert round_half_up(6.5) == 7


def test_round_half_up_negative_half_goes_toward_positive():
    assert round_half_up(-0.5) == 0
    assert round_half_up(-1.5) == -1


def test_round_half_up_regular_values():
    assert round_half_up(1.49) == 1
    assert round_half_up(66.375) == 66
    assert round_half_up(57.0) == 57


def test_clamp():
    assert clamp(140, 0, 100) == 100
    assert clamp(-5, 0, 100) == 0
    assert clamp(42, 0, 100) == 42


def test_is_positive_number():
    assert is_positive_number(1)
    assert is_positive_number(0.1)
    assert not is_positive_number(0)
    assert not is_positive_number(-3)
    assert not is_positive_number(True)
    assert not is_positive_number("5")
    assert not is_positive_number(None)
    assert not is_positive_number(float("nan"))
    assert not is_positive_number(float("inf"))
