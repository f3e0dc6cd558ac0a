"""Tests for the intake questionnaire and initial profile derivation."""

from __future__ import annotations

import pytest

from core.services.intake import (
    QUESTIONS_BY_ID,
    IntakeError,
    build_intake_profile,
    initial_fatigue,
    momentum_label,
    score_answer,
)
from core.services.training_targets import ALL_TRAINING_OPTIONS
from core.validators import SelectAnswer, TextAnswer


def _answers(**overrides):
    chosen = {
        "goal": "Marathon",
        "experience": "Beginner",
        "days_per_week": "3",
        "minutes_per_session": "45",
        "equipment": "Full gym",
        "aerobic": "20-40 minutes",
        "strength_upper": "10-20",
        "strength_lower": "About bodyweight",
        "mobility": "Toes",
        "sleep": "7-8",
        "stress": "Moderate",
    }
    chosen.update(overrides)
    return [SelectAnswer(question_id=q, option=o) for q, o in chosen.items() if o is not None]


def test_full_intake_derives_profile():
    fields = build_intake_profile(_answers())
    assert fields["goal"] == "Marathon"
    assert fields["programme_type"] == "pure_endurance"
    assert fields["days_per_week"] == 3
    assert fields["minutes_per_session"] == 45
    assert fields["aerobic_score"] == 65
    assert fields["strength_upper"] == 50
    assert fields["strength_lower"] == 65
    assert fields["stress_level"] == 45
    # 16.25 + 14.375 + 10.5 + 17 + 8.25
    assert fields["readiness_score"] == 66
    assert fields["momentum"] == "Steady"
    assert fields["fatigue_score"] == 15
    assert fields["primary_limiter"] == "Strength"
    assert fields["current_week"] == 1
    assert fields["deload_active"] is False
    assert fields["sport"] == "General"


def test_free_text_sport_is_kept():
    fields = build_intake_profile(_answers() + [TextAnswer(question_id="sport", text="  Hyrox  ")])
    assert fields["sport"] == "Hyrox"


def test_option_match_is_case_insensitive():
    fields = build_intake_profile(_answers(goal="marathon", experience="ADVANCED"))
    assert fields["goal"] == "Marathon"
    assert fields["experience"] == "Advanced"


def test_unknown_option_rejected():
    with pytest.raises(IntakeError):
        build_intake_profile(_answers(sleep="Eleven hours"))


def test_wrong_answer_kind_rejected():
    with pytest.raises(IntakeError):
        score_answer(QUESTIONS_BY_ID["goal"], TextAnswer(question_id="goal", text="Marathon"))


def test_missing_required_answer_rejected():
    with pytest.raises(IntakeError, match="sleep"):
        build_intake_profile(_answers(sleep=None))


def test_unknown_and_duplicate_questions_rejected():
    with pytest.raises(IntakeError):
        build_intake_profile(_answers() + [SelectAnswer(question_id="favourite_colour", option="Blue")])
    with pytest.raises(IntakeError):
        build_intake_profile(_answers() + [SelectAnswer(question_id="stress", option="Low")])


def test_goal_question_lists_every_training_option():
    labels = [o.label for o in QUESTIONS_BY_ID["goal"].options]
    assert labels == [o.label for o in ALL_TRAINING_OPTIONS]


def test_momentum_thresholds():
    assert momentum_label(70) == "Building"
    assert momentum_label(69) == "Steady"
    assert momentum_label(50) == "Steady"
    assert momentum_label(49) == "Rebuilding"


def test_initial_fatigue_rounds_half_up():
    assert initial_fatigue(45, 85) == 15
    assert initial_fatigue(20, 94) == 7
    assert initial_fatigue(90, 25) == 41
