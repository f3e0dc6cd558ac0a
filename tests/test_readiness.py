"""Tests for readiness and derived-metric calculations."""

from __future__ import annotations

import pytest

from core.services.periodization import is_deload
from core.services.readiness import (
    DomainScores,
    derived_metrics,
    intake_readiness,
    primary_limiter,
    programme_recovery,
    readiness_band,
    work_capacity,
)


def test_dashboard_scenario_composites():
    # stress quality 30 -> stress level 70
    scores = DomainScores(aerobic=40, strength_upper=70, strength_lower=70, mobility=60, sleep=80, stress_level=70)
    m = derived_metrics(scores)
    assert m.avg_strength == 70
    assert m.work_capacity == 55
    assert m.training_load == pytest.approx(60)
    assert m.dashboard_recovery == pytest.approx(70)
    assert m.programme_recovery == pytest.approx(60)


def test_dashboard_scenario_deloads_on_fatigue_regardless_of_flag():
    assert is_deload(False, 50, 80) is True
    assert is_deload(True, 50, 80) is True


def test_work_capacity_rounds_half_up():
    # 41 * 0.5 + 70 * 0.5 = 55.5
    assert work_capacity(41, 70, 70) == 56


def test_programme_recovery_weights_sleep_and_stress():
    assert programme_recovery(100, 0) == pytest.approx(100)
    assert programme_recovery(50, 100) == pytest.approx(30)


def test_intake_readiness_weights():
    assert intake_readiness(60, 60, 60, 60, 60) == 60
    # 10 + 17.5 + 9 + 16 + 4.5
    assert intake_readiness(40, 70, 60, 80, 30) == 57


def test_primary_limiter_lowest_domain():
    assert primary_limiter(80, 70, 60, 50) == "Sleep"
    assert primary_limiter(60, 40, 55, 70) == "Strength"


def test_primary_limiter_tie_goes_to_first_domain():
    assert primary_limiter(50, 50, 60, 70) == "Aerobic"
    assert primary_limiter(60, 40, 40, 70) == "Strength"


def test_readiness_band_threshold_is_exclusive():
    assert readiness_band(66) == "primed"
    assert readiness_band(65) == "stabilising"
    assert readiness_band(10) == "stabilising"


def test_readiness_band_threshold_from_env(monkeypatch):
    monkeypatch.setenv("READINESS_PRIMED_THRESHOLD", "50")
    assert readiness_band(55) == "primed"
