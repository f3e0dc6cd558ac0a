"""Tests for the daily check-in adaptation resolver."""

from __future__ import annotations

from datetime import date, timedelta

from core.services.adaptation import (
    AdaptationLevel,
    intensity_multiplier,
    reduce_triggers,
    resolve_adaptation,
    volume_scale,
)
from core.services.profile import normalize_profile

TODAY = date(2026, 10, 19)


def _profile(checkin_date=TODAY, **checkin):
    row = {
        "id": "u1",
        "checkin_date": checkin_date,
        "checkin_readiness": checkin.get("readiness", 6),
        "checkin_feel": checkin.get("feel", "ok"),
        "checkin_energy": checkin.get("energy", "moderate"),
        "checkin_sleep": checkin.get("sleep", "ok"),
        "checkin_pain": checkin.get("pain", "none"),
    }
    return normalize_profile(row)


def test_pain_short_circuits_increase():
    p = _profile(pain="yes", feel="good", energy="high", sleep="good", readiness=9)
    assert resolve_adaptation(p, TODAY) is AdaptationLevel.REDUCE


def test_stale_checkin_is_ignored():
    p = _profile(checkin_date=TODAY - timedelta(days=1), pain="yes", feel="poor", readiness=2)
    assert resolve_adaptation(p, TODAY) is AdaptationLevel.NORMAL


def test_no_checkin_is_normal():
    assert resolve_adaptation(normalize_profile({"id": "u1"}), TODAY) is AdaptationLevel.NORMAL


def test_increase_needs_good_feel_and_energy_or_sleep():
    assert resolve_adaptation(_profile(feel="good", energy="high", readiness=7), TODAY) is AdaptationLevel.INCREASE
    assert resolve_adaptation(_profile(feel="good", sleep="good", readiness=8), TODAY) is AdaptationLevel.INCREASE
    assert resolve_adaptation(_profile(feel="good", readiness=9), TODAY) is AdaptationLevel.NORMAL


def test_increase_requires_readiness_seven():
    p = _profile(feel="good", energy="high", sleep="good", readiness=6)
    assert resolve_adaptation(p, TODAY) is AdaptationLevel.NORMAL


def test_minor_pain_blocks_increase_but_does_not_reduce():
    p = _profile(feel="good", energy="high", readiness=8, pain="minor")
    assert resolve_adaptation(p, TODAY) is AdaptationLevel.NORMAL


def test_each_reduce_trigger():
    cases = [
        ({"pain": "yes"}, ["pain"]),
        ({"feel": "poor"}, ["feel"]),
        ({"energy": "low"}, ["energy"]),
        ({"sleep": "poor"}, ["sleep"]),
        ({"readiness": 4}, ["readiness"]),
    ]
    for fields, expected in cases:
        p = _profile(**fields)
        assert reduce_triggers(p.checkin) == expected
        assert resolve_adaptation(p, TODAY) is AdaptationLevel.REDUCE


def test_readiness_five_is_not_low():
    assert resolve_adaptation(_profile(readiness=5), TODAY) is AdaptationLevel.NORMAL


def test_scales():
    assert volume_scale(AdaptationLevel.REDUCE) == 0.6
    assert volume_scale(AdaptationLevel.NORMAL) == 1.0
    assert volume_scale(AdaptationLevel.INCREASE) == 1.2
    assert intensity_multiplier(AdaptationLevel.REDUCE) == 0.85
    assert intensity_multiplier(AdaptationLevel.INCREASE) == 1.05
