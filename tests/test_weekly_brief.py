"""Tests for the weekly brief summary."""

from __future__ import annotations

from datetime import date

from core.services.periodization import PHASE_INTENT
from core.services.profile import normalize_profile
from core.services.session_builder import build_programme
from core.services.weekly_brief import build_weekly_brief, recovery_bandwidth, system_bias

TODAY = date(2026, 10, 19)


def _profile(**overrides):
    row = {"id": "u1", "goal": "General fitness", "readiness_score": 70, "sleep_score": 80, "stress_level": 30}
    row.update(overrides)
    return normalize_profile(row)


def test_recovery_bandwidth_bands():
    assert recovery_bandwidth(70) == "High"
    assert recovery_bandwidth(69.9) == "Adequate"
    assert recovery_bandwidth(50) == "Adequate"
    assert recovery_bandwidth(49) == "Limited"


def test_system_bias_follows_programme_family():
    assert system_bias(_profile(goal="Marathon")).startswith("Aerobic-dominant")
    assert system_bias(_profile(goal="Powerlifting")).startswith("Strength-dominant")
    assert "aerobic engine leading" in system_bias(_profile(aerobic_score=80, strength_upper=50, strength_lower=50))
    assert "strength leading" in system_bias(_profile(aerobic_score=40))


def test_brief_for_planned_week():
    p = _profile(current_week=3, primary_limiter="Mobility")
    brief = build_weekly_brief(p, build_programme(p, TODAY))
    assert brief.week_number == 3
    assert brief.phase_intent == PHASE_INTENT["Intensification"]
    assert brief.primary_limiter == "Mobility"
    # 80 * 0.6 + 70 * 0.4 = 76
    assert brief.recovery_bandwidth == "High"
    assert "intensification" in brief.why_this_week


def test_brief_explains_deload():
    p = _profile(fatigue_score=90)
    brief = build_weekly_brief(p, build_programme(p, TODAY))
    assert "deload" in brief.why_this_week.lower()


def test_brief_explains_reduce_day():
    p = _profile(checkin_date=TODAY, checkin_energy="low")
    brief = build_weekly_brief(p, build_programme(p, TODAY))
    assert "reduced capacity" in brief.why_this_week
