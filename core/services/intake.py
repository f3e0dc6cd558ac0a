"""Intake questionnaire: question definitions, answer scoring and initial profile.

Questions come in two closed variants. A ``SelectQuestion`` offers fixed
options, each optionally carrying a 0-100 domain score or an integer value; a
``FreeTextQuestion`` captures a label. Every answer scores to an
``AnswerResult`` and the full set is folded into the profile fields written at
intake completion.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Union

from core.services.readiness import intake_readiness, primary_limiter
from core.services.rounding import clamp, round_half_up
from core.services.training_targets import ALL_TRAINING_OPTIONS, programme_type_for_goal
from core.validators import SelectAnswer, TextAnswer


class IntakeError(ValueError):
    """Raised when submitted answers do not match the questionnaire."""


@dataclass(frozen=True)
class SelectOption:
    label: str
    score: Optional[int] = None
    value: Optional[int] = None


@dataclass(frozen=True)
class SelectQuestion:
    id: str
    prompt: str
    field: str
    options: tuple[SelectOption, ...]
    required: bool = True
    kind: str = "select"


@dataclass(frozen=True)
class FreeTextQuestion:
    id: str
    prompt: str
    field: str
    required: bool = False
    max_length: int = 120
    kind: str = "text"


Question = Union[SelectQuestion, FreeTextQuestion]


@dataclass(frozen=True)
class AnswerResult:
    question_id: str
    field: str
    score: Optional[int] = None
    label: Optional[str] = None
    value: Optional[int] = None


def _labels(*labels: str) -> tuple[SelectOption, ...]:
    return tuple(SelectOption(label) for label in labels)


def _values(*values: int) -> tuple[SelectOption, ...]:
    return tuple(SelectOption(str(v), value=v) for v in values)


QUESTIONS: tuple[Question, ...] = (
    SelectQuestion(
        "goal",
        "What are you training for?",
        "goal",
        tuple(SelectOption(opt.label) for opt in ALL_TRAINING_OPTIONS),
    ),
    FreeTextQuestion("sport", "Main sport or discipline (optional)", "sport"),
    SelectQuestion("experience", "How long have you trained consistently?", "experience", _labels("Beginner", "Intermediate", "Advanced")),
    SelectQuestion("days_per_week", "How many days a week can you train?", "days_per_week", _values(2, 3, 4, 5, 6)),
    SelectQuestion("minutes_per_session", "How long is a typical session (minutes)?", "minutes_per_session", _values(30, 45, 60, 75, 90)),
    SelectQuestion(
        "equipment",
        "What equipment do you have access to?",
        "equipment",
        _labels("Full gym", "Home gym", "Minimal equipment", "Bodyweight only"),
    ),
    SelectQuestion(
        "aerobic",
        "How long can you run continuously at a conversational pace?",
        "aerobic_score",
        (
            SelectOption("Under 10 minutes", 25),
            SelectOption("10-20 minutes", 45),
            SelectOption("20-40 minutes", 65),
            SelectOption("40-60 minutes", 80),
            SelectOption("Over 60 minutes", 95),
        ),
    ),
    SelectQuestion(
        "strength_upper",
        "How many strict push-ups can you do in one set?",
        "strength_upper",
        (
            SelectOption("Fewer than 10", 30),
            SelectOption("10-20", 50),
            SelectOption("20-35", 70),
            SelectOption("More than 35", 90),
        ),
    ),
    SelectQuestion(
        "strength_lower",
        "What is your best back squat relative to bodyweight?",
        "strength_lower",
        (
            SelectOption("Never squatted with a bar", 25),
            SelectOption("Less than bodyweight", 45),
            SelectOption("About bodyweight", 65),
            SelectOption("1.5x bodyweight", 80),
            SelectOption("2x bodyweight or more", 95),
        ),
    ),
    SelectQuestion(
        "mobility",
        "Standing with straight legs, how far can you reach?",
        "mobility_score",
        (
            SelectOption("Knees", 30),
            SelectOption("Shins", 50),
            SelectOption("Toes", 70),
            SelectOption("Palms flat on the floor", 90),
        ),
    ),
    SelectQuestion(
        "sleep",
        "How many hours do you usually sleep?",
        "sleep_score",
        (
            SelectOption("Under 5", 25),
            SelectOption("5-6", 45),
            SelectOption("6-7", 65),
            SelectOption("7-8", 85),
            SelectOption("More than 8", 95),
        ),
    ),
    SelectQuestion(
        "stress",
        "How stressed do you feel day to day?",
        "stress_level",
        (
            SelectOption("Low", 20),
            SelectOption("Moderate", 45),
            SelectOption("High", 70),
            SelectOption("Very high", 90),
        ),
    ),
)

QUESTIONS_BY_ID: dict[str, Question] = {q.id: q for q in QUESTIONS}

DOMAIN_FIELDS = ("aerobic_score", "strength_upper", "strength_lower", "mobility_score", "sleep_score", "stress_level")


def score_answer(question: Question, answer: Union[SelectAnswer, TextAnswer]) -> AnswerResult:
    if answer.kind != question.kind:
        raise IntakeError(f"question {question.id!r} expects a {question.kind} answer")

    if isinstance(question, FreeTextQuestion):
        text = answer.text.strip()[: question.max_length]
        return AnswerResult(question.id, question.field, label=text or None)

    wanted = answer.option.strip().lower()
    for option in question.options:
        if option.label.lower() == wanted:
            return AnswerResult(question.id, question.field, score=option.score, label=option.label, value=option.value)
    raise IntakeError(f"unknown option {answer.option!r} for question {question.id!r}")


def score_answers(answers: list[Union[SelectAnswer, TextAnswer]]) -> dict[str, AnswerResult]:
    results: dict[str, AnswerResult] = {}
    for answer in answers:
        question = QUESTIONS_BY_ID.get(answer.question_id)
        if question is None:
            raise IntakeError(f"unknown question {answer.question_id!r}")
        if question.field in results:
            raise IntakeError(f"question {question.id!r} answered more than once")
        results[question.field] = score_answer(question, answer)

    missing = [q.id for q in QUESTIONS if q.required and q.field not in results]
    if missing:
        raise IntakeError(f"missing answers: {', '.join(missing)}")
    return results


def momentum_label(readiness: int) -> str:
    if readiness >= 70:
        return "Building"
    if readiness >= 50:
        return "Steady"
    return "Rebuilding"


def initial_fatigue(stress_level: float, sleep: float) -> int:
    return round_half_up((stress_level + (100 - sleep)) / 4)


def build_intake_profile(answers: list[Union[SelectAnswer, TextAnswer]]) -> dict[str, Any]:
    """Score the answers and derive every profile field computed at intake."""
    results = score_answers(answers)
    scores = {f: clamp(float(results[f].score or 0), 0, 100) for f in DOMAIN_FIELDS}
    strength = (scores["strength_upper"] + scores["strength_lower"]) / 2
    readiness = intake_readiness(
        scores["aerobic_score"],
        strength,
        scores["mobility_score"],
        scores["sleep_score"],
        100 - scores["stress_level"],
    )
    goal = results["goal"].label or ""
    sport_result = results.get("sport")

    fields: dict[str, Any] = {
        "goal": goal,
        "sport": (sport_result.label if sport_result else None) or "General",
        "experience": results["experience"].label,
        "equipment": results["equipment"].label,
        "days_per_week": results["days_per_week"].value,
        "minutes_per_session": results["minutes_per_session"].value,
        "programme_type": programme_type_for_goal(goal).value,
        "readiness_score": readiness,
        "fatigue_score": initial_fatigue(scores["stress_level"], scores["sleep_score"]),
        "momentum": momentum_label(readiness),
        "primary_limiter": primary_limiter(scores["aerobic_score"], strength, scores["mobility_score"], scores["sleep_score"]),
        "current_week": 1,
        "deload_active": False,
    }
    fields.update({f: int(v) for f, v in scores.items()})
    return fields
