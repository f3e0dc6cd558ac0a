"""Profile normalization.

Every calculator takes a ``NormalizedProfile``. Defaults for missing or
out-of-range fields are applied here, once, so the engine never has to guess.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Mapping, Optional

from core.services.readiness import DomainScores
from core.services.rounding import clamp
from core.services.training_targets import ProgrammeType, coerce_programme_type

PROFILE_DEFAULTS: dict[str, Any] = {
    "aerobic_score": 60,
    "strength_upper": 60,
    "strength_lower": 60,
    "mobility_score": 60,
    "sleep_score": 60,
    "stress_level": 40,
    "readiness_score": 60,
    "fatigue_score": 0,
    "days_per_week": 3,
    "minutes_per_session": 60,
    "current_week": 1,
    "experience": "beginner",
}

MAX_DAYS_PER_WEEK = 7


@dataclass(frozen=True)
class CheckInSnapshot:
    checkin_date: date
    readiness: Optional[int] = None
    feel: Optional[str] = None
    energy: Optional[str] = None
    sleep: Optional[str] = None
    pain: Optional[str] = None
    pain_location: Optional[str] = None


@dataclass(frozen=True)
class NormalizedProfile:
    id: str
    goal: str
    sport: str
    experience: str
    equipment: str
    programme_type: ProgrammeType
    days_per_week: int
    minutes_per_session: int
    aerobic_score: float
    strength_upper: float
    strength_lower: float
    mobility_score: float
    sleep_score: float
    stress_level: float
    readiness_score: float
    fatigue_score: float
    momentum: str
    primary_limiter: str
    current_week: int
    deload_active: bool
    checkin: Optional[CheckInSnapshot] = None
    performance_benchmarks: dict[str, Any] = field(default_factory=dict)

    @property
    def domain_scores(self) -> DomainScores:
        return DomainScores(
            aerobic=self.aerobic_score,
            strength_upper=self.strength_upper,
            strength_lower=self.strength_lower,
            mobility=self.mobility_score,
            sleep=self.sleep_score,
            stress_level=self.stress_level,
        )

    @property
    def strength_index(self) -> float:
        return (self.strength_upper + self.strength_lower) / 2

    @property
    def aerobic_index(self) -> float:
        return self.aerobic_score


def _get(source: Any, name: str) -> Any:
    if isinstance(source, Mapping):
        return source.get(name)
    return getattr(source, name, None)


def _number(value: Any, default: float) -> float:
    if isinstance(value, bool):
        return default
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    return number if math.isfinite(number) else default


def _score(source: Any, name: str) -> float:
    return clamp(_number(_get(source, name), PROFILE_DEFAULTS[name]), 0, 100)


def _text(value: Any, default: str = "") -> str:
    if value is None:
        return default
    text = str(value).strip()
    return text or default


def _as_date(value: Any) -> Optional[date]:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value:
        try:
            return date.fromisoformat(value[:10])
        except ValueError:
            return None
    return None


def _checkin(source: Any) -> Optional[CheckInSnapshot]:
    checkin_date = _as_date(_get(source, "checkin_date"))
    if checkin_date is None:
        return None
    raw_readiness = _get(source, "checkin_readiness")
    readiness = None if raw_readiness is None else int(_number(raw_readiness, 0))

    def _label(name: str) -> Optional[str]:
        value = _get(source, name)
        return str(value).strip().lower() if value is not None else None

    return CheckInSnapshot(
        checkin_date=checkin_date,
        readiness=readiness,
        feel=_label("checkin_feel"),
        energy=_label("checkin_energy"),
        sleep=_label("checkin_sleep"),
        pain=_label("checkin_pain"),
        pain_location=_get(source, "checkin_pain_location"),
    )


def normalize_profile(source: Any) -> NormalizedProfile:
    """Build a fully-populated profile from an ORM row, a dict, or any attribute bag."""
    goal = _text(_get(source, "goal"))
    raw_days = _get(source, "days_per_week")
    days = PROFILE_DEFAULTS["days_per_week"] if raw_days is None else int(_number(raw_days, PROFILE_DEFAULTS["days_per_week"]))
    benchmarks = _get(source, "performance_benchmarks")

    return NormalizedProfile(
        id=_text(_get(source, "id")),
        goal=goal,
        sport=_text(_get(source, "sport")),
        experience=_text(_get(source, "experience"), PROFILE_DEFAULTS["experience"]),
        equipment=_text(_get(source, "equipment")),
        programme_type=coerce_programme_type(_get(source, "programme_type"), goal),
        days_per_week=int(clamp(days, 1, MAX_DAYS_PER_WEEK)),
        minutes_per_session=max(1, int(_number(_get(source, "minutes_per_session"), PROFILE_DEFAULTS["minutes_per_session"]))),
        aerobic_score=_score(source, "aerobic_score"),
        strength_upper=_score(source, "strength_upper"),
        strength_lower=_score(source, "strength_lower"),
        mobility_score=_score(source, "mobility_score"),
        sleep_score=_score(source, "sleep_score"),
        stress_level=_score(source, "stress_level"),
        readiness_score=_score(source, "readiness_score"),
        fatigue_score=max(0.0, _number(_get(source, "fatigue_score"), PROFILE_DEFAULTS["fatigue_score"])),
        momentum=_text(_get(source, "momentum"), "Steady"),
        primary_limiter=_text(_get(source, "primary_limiter")),
        current_week=max(1, int(_number(_get(source, "current_week"), PROFILE_DEFAULTS["current_week"]))),
        deload_active=bool(_get(source, "deload_active")),
        checkin=_checkin(source),
        performance_benchmarks=dict(benchmarks) if isinstance(benchmarks, Mapping) else {},
    )
