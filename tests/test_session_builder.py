"""Tests for weekly session assembly."""

from __future__ import annotations

from datetime import date

import pytest

from core.services.adaptation import AdaptationLevel
from core.services.exercise_library import EXERCISE_VIDEOS
from core.services.profile import normalize_profile
from core.services.session_builder import (
    DELOAD_BANNER,
    adapted_sets,
    base_main_sets,
    build_programme,
    build_week,
    day_scaling,
    recovery_day_index,
    regeneration_session,
    rpe_target,
)
from core.services.training_targets import ProgrammeType

TODAY = date(2026, 10, 19)

TRAINING_SECTIONS = ["Prep", "Main Lift", "Secondary Lift", "Accessory", "Trunk Capacity", "Energy System"]


def _profile(**overrides):
    row = {
        "id": "u1",
        "goal": "General fitness",
        "experience": "Beginner",
        "days_per_week": 4,
        "aerobic_score": 60,
        "strength_upper": 60,
        "strength_lower": 60,
        "mobility_score": 60,
        "sleep_score": 70,
        "stress_level": 40,
        "readiness_score": 70,
        "fatigue_score": 0,
        "current_week": 1,
        "performance_benchmarks": {},
    }
    row.update(overrides)
    return normalize_profile(row)


def _block(session, section):
    return next(b for b in session.blocks if b.section == section)


def test_experience_sets_and_rpe():
    assert base_main_sets("Advanced") == 5
    assert base_main_sets("intermediate lifter") == 4
    assert base_main_sets("") == 3
    assert rpe_target("ADVANCED") == "8–9"
    assert rpe_target("Intermediate") == "7–8"
    assert rpe_target("Beginner") == "6–7"


def test_adapted_sets_rounds_half_up_with_floor_of_two():
    assert adapted_sets(3, 0.6) == 2
    assert adapted_sets(5, 0.6) == 3
    assert adapted_sets(4, 1.2) == 5
    assert adapted_sets(3, 1.2) == 4
    assert adapted_sets(2, 0.6) == 2


def test_middle_day_is_regeneration():
    sessions = build_week(_profile(days_per_week=4), AdaptationLevel.NORMAL)
    assert len(sessions) == 4
    assert recovery_day_index(4) == 2
    assert [s.is_recovery for s in sessions] == [False, False, True, False]
    assert sessions[2].title == "Day 3 · Regeneration"
    assert sessions[0].title == "Day 1 · Accumulation"


def test_single_day_week_is_regeneration():
    sessions = build_week(_profile(days_per_week=1), AdaptationLevel.NORMAL)
    assert len(sessions) == 1
    assert sessions[0].is_recovery


def test_training_day_block_order():
    session = build_week(_profile(), AdaptationLevel.NORMAL)[0]
    assert [b.section for b in session.blocks] == TRAINING_SECTIONS
    assert all(b.lines for b in session.blocks)


def test_main_lift_uses_benchmark():
    p = _profile(performance_benchmarks={"exerciseBenchmarks": {"back_squat": {"oneRM": 120}}})
    main = _block(build_week(p, AdaptationLevel.NORMAL)[0], "Main Lift")
    # 120 * 0.8 = 96 -> 95
    assert main.lines == ["Back Squat · 3×3–5 @ 80% (95kg) · Tempo 31X1 · Rest 2–3 min"]


def test_main_lift_without_benchmark_uses_rpe():
    main = _block(build_week(_profile(experience="Intermediate"), AdaptationLevel.NORMAL)[0], "Main Lift")
    assert main.lines == ["Back Squat · 4×3–5 @ RPE 7–8 · Tempo 31X1 · Rest 2–3 min"]


def test_accessories_use_rpe_seven_and_alias_keys():
    p = _profile(performance_benchmarks={"exerciseBenchmarks": {"deadlift": {"oneRM": 100}}})
    accessory = _block(build_week(p, AdaptationLevel.NORMAL)[0], "Accessory")
    assert accessory.lines == [
        "Rear-Foot Elevated Split Squat · 3×8 ea @ RPE 7",
        "Dumbbell Press · 3×10 @ RPE 7",
        "Romanian Deadlift · 3×8 @ 60% (60kg)",
    ]


def test_reduce_scales_sets_and_intensity():
    scaling = day_scaling(_profile(), AdaptationLevel.REDUCE)
    assert scaling.main_sets == 2
    assert scaling.accessory_sets == 2
    assert scaling.effective_intensity == pytest.approx(0.85)


def test_increase_scales_sets_up():
    scaling = day_scaling(_profile(experience="Advanced"), AdaptationLevel.INCREASE)
    assert scaling.main_sets == 6
    assert scaling.accessory_sets == 4


def test_deload_compounds_intensity_and_sets_banner():
    p = _profile(readiness_score=50)
    week = build_programme(p, TODAY)
    assert week.deload.active
    assert week.deload_banner == DELOAD_BANNER
    # 0.9 readiness bias x 0.85 deload
    assert week.effective_intensity == pytest.approx(0.765)


def test_no_deload_no_banner():
    week = build_programme(_profile(), TODAY)
    assert week.deload.active is False
    assert week.deload_banner is None
    assert week.effective_intensity == 1.0
    assert week.phase == "Accumulation"


def test_power_speed_prep_and_main_lift():
    p = _profile(goal="Sprinting (track / field)")
    assert p.programme_type is ProgrammeType.POWER_SPEED
    session = build_week(p, AdaptationLevel.NORMAL)[0]
    prep = _block(session, "Prep")
    assert "Pogos · 3×10" in prep.lines
    assert "Broad Jumps · 3×3" in prep.lines
    main = _block(session, "Main Lift")
    assert main.exercise_keys == ["power_clean"]
    assert main.lines[0].startswith("Power Clean · 3×2–3 @ RPE")


def test_load_carriage_replaces_trunk_block():
    p = _profile(goal="P Company (Paras)")
    session = build_week(p, AdaptationLevel.NORMAL)[0]
    sections = [b.section for b in session.blocks]
    assert "Load Carriage Resilience" in sections
    assert "Trunk Capacity" not in sections
    energy = _block(session, "Energy System")
    assert energy.lines[0].endswith("run, unloaded")


def test_energy_system_variants():
    aerobic = _block(build_week(_profile(aerobic_score=80), AdaptationLevel.NORMAL)[0], "Energy System")
    assert aerobic.lines[0].startswith("Threshold Intervals · 4 × 6 min")

    strength = _block(build_week(_profile(goal="Powerlifting"), AdaptationLevel.NORMAL)[0], "Energy System")
    assert strength.lines[0].startswith("Minimal-Interference Conditioning · 10 × 30s")

    base = _block(build_week(_profile(), AdaptationLevel.NORMAL)[0], "Energy System")
    assert base.lines[0].startswith("Zone 2 Aerobic Base · 30–40 min")

    tri = _block(build_week(_profile(goal="Ironman / long-course tri"), AdaptationLevel.NORMAL)[0], "Energy System")
    assert tri.lines[0].startswith("Aerobic Threshold Build")


def test_regeneration_shrinks_under_reduce():
    normal = regeneration_session(1, AdaptationLevel.NORMAL)
    reduced = regeneration_session(1, AdaptationLevel.REDUCE)
    assert [b.section for b in normal.blocks] == ["Zone 1 Flush", "Mobility Circuit", "Breathing"]
    assert "20–30 min" in normal.blocks[0].lines[0]
    assert "15–20 min" in reduced.blocks[0].lines[0]


def test_same_inputs_same_week():
    p = _profile(
        checkin_date=TODAY,
        checkin_feel="poor",
        performance_benchmarks={"exerciseBenchmarks": {"back_squat": {"oneRM": 140}}},
    )
    first = build_programme(p, TODAY)
    second = build_programme(p, TODAY)
    assert first == second
    assert repr(first) == repr(second)
    assert first.adaptation is AdaptationLevel.REDUCE


@pytest.mark.parametrize("programme_type", list(ProgrammeType))
def test_every_exercise_key_has_a_video(programme_type):
    p = _profile(programme_type=programme_type.value, days_per_week=5)
    for adaptation in AdaptationLevel:
        for session in build_week(p, adaptation):
            for block in session.blocks:
                for key in block.exercise_keys:
                    assert key in EXERCISE_VIDEOS, key


def test_compounded_intensity_is_not_rounded_before_weighing():
    # 1.05 readiness * 0.85 fatigue * 0.85 deload; 138 * 0.8 * 0.758625 = 83.75 -> 85
    p = _profile(readiness_score=80, fatigue_score=80, performance_benchmarks={"exerciseBenchmarks": {"back_squat": {"oneRM": 138}}})
    week = build_programme(p, TODAY)
    assert week.effective_intensity == pytest.approx(0.758625)
    main = _block(week.sessions[0], "Main Lift")
    assert main.lines == ["Back Squat · 3×3–5 @ 61% (85kg) · Tempo 31X1 · Rest 2–3 min"]


def test_programme_carries_session_minutes():
    assert build_programme(_profile(minutes_per_session=75), TODAY).session_minutes == 75
    assert build_programme(_profile(), TODAY).session_minutes == 60
