"""Tests for profile normalization."""

from __future__ import annotations

from datetime import date, datetime
from types import SimpleNamespace

from core.services.profile import PROFILE_DEFAULTS, normalize_profile
from core.services.training_targets import ProgrammeType


def test_empty_profile_gets_defaults():
    p = normalize_profile({})
    assert p.days_per_week == 3
    assert p.aerobic_score == 60
    assert p.stress_level == 40
    assert p.readiness_score == PROFILE_DEFAULTS["readiness_score"]
    assert p.fatigue_score == 0
    assert p.current_week == 1
    assert p.experience == "beginner"
    assert p.programme_type is ProgrammeType.HYBRID
    assert p.checkin is None
    assert p.performance_benchmarks == {}


def test_scores_are_clamped():
    p = normalize_profile({"aerobic_score": 140, "sleep_score": -5, "strength_upper": 0})
    assert p.aerobic_score == 100
    assert p.sleep_score == 0
    assert p.strength_upper == 0


def test_days_and_week_bounds():
    assert normalize_profile({"days_per_week": 0}).days_per_week == 1
    assert normalize_profile({"days_per_week": 12}).days_per_week == 7
    assert normalize_profile({"days_per_week": None}).days_per_week == 3
    assert normalize_profile({"current_week": 0}).current_week == 1
    assert normalize_profile({"fatigue_score": -3}).fatigue_score == 0


def test_non_numeric_values_fall_back():
    p = normalize_profile({"aerobic_score": "lots", "mobility_score": True})
    assert p.aerobic_score == 60
    assert p.mobility_score == 60


def test_programme_type_falls_back_to_goal():
    assert normalize_profile({"programme_type": "zzz", "goal": "Marathon"}).programme_type is ProgrammeType.PURE_ENDURANCE
    assert normalize_profile({"programme_type": "strength"}).programme_type is ProgrammeType.STRENGTH


def test_checkin_parsed_from_iso_string_and_datetime():
    p = normalize_profile({"checkin_date": "2026-10-19", "checkin_feel": "Poor", "checkin_readiness": 4})
    assert p.checkin.checkin_date == date(2026, 10, 19)
    assert p.checkin.feel == "poor"
    assert p.checkin.readiness == 4

    p = normalize_profile({"checkin_date": datetime(2026, 10, 19, 7, 30)})
    assert p.checkin.checkin_date == date(2026, 10, 19)


def test_attribute_objects_are_accepted():
    row = SimpleNamespace(id="abc", goal="Powerlifting", days_per_week=4, strength_upper=80, strength_lower=70)
    p = normalize_profile(row)
    assert p.id == "abc"
    assert p.programme_type is ProgrammeType.STRENGTH
    assert p.strength_index == 75
