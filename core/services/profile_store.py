"""Persistence boundary for profiles, session logs and the decision log.

Every function works on a caller-owned SQLAlchemy ``Session`` and only
flushes; committing is the caller's job. ``SQLAlchemyError`` is never caught
here.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Any, Mapping, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from core.models import Profile, ProgrammeDecision, SessionLog
from core.services.adaptation import AdaptationLevel, reduce_triggers, resolve_checkin
from core.services.benchmarks import merge_benchmark_update
from core.services.periodization import DELOAD_FATIGUE_CEILING
from core.services.profile import CheckInSnapshot
from core.services.rounding import clamp, round_half_up
from core.validators import BenchmarkUpdateInput, CheckInInput, SessionCompleteInput

logger = logging.getLogger(__name__)

SCORE_FIELDS = (
    "aerobic_score",
    "strength_upper",
    "strength_lower",
    "mobility_score",
    "sleep_score",
    "stress_level",
    "readiness_score",
)
DEFAULT_FATIGUE_INCREMENT = 5


class ProfileStoreError(Exception):
    pass


class ProfileNotFoundError(ProfileStoreError):
    def __init__(self, user_id: str):
        super().__init__(f"profile not found: {user_id}")
        self.user_id = user_id


def fetch_profile(db: Session, user_id: str) -> Optional[Profile]:
    return db.get(Profile, user_id)


def _require_profile(db: Session, user_id: str) -> Profile:
    profile = fetch_profile(db, user_id)
    if profile is None:
        raise ProfileNotFoundError(user_id)
    return profile


def _clean_fields(fields: Mapping[str, Any]) -> dict[str, Any]:
    cleaned: dict[str, Any] = {}
    for name, value in fields.items():
        if name == "id" or not hasattr(Profile, name):
            raise ProfileStoreError(f"unknown profile field: {name}")
        if name in SCORE_FIELDS and value is not None:
            value = round_half_up(clamp(float(value), 0, 100))
        elif name == "fatigue_score" and value is not None:
            value = max(0, round_half_up(float(value)))
        elif name == "current_week" and value is not None:
            value = max(1, int(value))
        cleaned[name] = value
    return cleaned


def update_profile(db: Session, user_id: str, fields: Mapping[str, Any]) -> Profile:
    profile = _require_profile(db, user_id)
    for name, value in _clean_fields(fields).items():
        setattr(profile, name, value)
    db.flush()
    return profile


def upsert_intake_profile(db: Session, user_id: str, fields: Mapping[str, Any]) -> Profile:
    """Create the profile or overwrite its intake-derived fields.

    Stored benchmarks and the session history survive a re-take of the intake.
    """
    cleaned = _clean_fields(fields)
    profile = fetch_profile(db, user_id)
    created = profile is None
    if profile is None:
        profile = Profile(id=user_id, performance_benchmarks={}, **cleaned)
        db.add(profile)
    else:
        for name, value in cleaned.items():
            setattr(profile, name, value)
    db.flush()
    logger.info(
        "intake_profile_saved",
        extra={
            "profile_id": user_id,
            "profile_created": created,
            "programme_type": profile.programme_type,
            "readiness_score": profile.readiness_score,
        },
    )
    return profile


def record_decision(
    db: Session,
    user_id: str,
    decision_type: str,
    adjustment_made: str,
    explanation: str,
    trigger_variables: Optional[Mapping[str, Any]] = None,
) -> ProgrammeDecision:
    decision = ProgrammeDecision(
        profile_id=user_id,
        decision_type=decision_type,
        adjustment_made=adjustment_made,
        explanation=explanation,
        trigger_variables=dict(trigger_variables or {}),
    )
    db.add(decision)
    db.flush()
    return decision


def list_decisions(db: Session, user_id: str, limit: int = 20) -> list[ProgrammeDecision]:
    stmt = (
        select(ProgrammeDecision)
        .where(ProgrammeDecision.profile_id == user_id)
        .order_by(ProgrammeDecision.created_at.desc(), ProgrammeDecision.id.desc())
        .limit(max(1, limit))
    )
    return list(db.scalars(stmt))


def _snapshot(checkin: CheckInInput) -> CheckInSnapshot:
    return CheckInSnapshot(
        checkin_date=checkin.checkin_date,
        readiness=checkin.readiness,
        feel=checkin.feel,
        energy=checkin.energy,
        sleep=checkin.sleep,
        pain=checkin.pain,
        pain_location=checkin.pain_location or None,
    )


def submit_checkin(db: Session, user_id: str, checkin: CheckInInput, today: date) -> tuple[Profile, AdaptationLevel]:
    """Store today's check-in and return the adaptation it resolves to.

    A check-in dated other than ``today`` is stored but resolves to normal.
    """
    profile = _require_profile(db, user_id)
    profile.checkin_date = checkin.checkin_date
    profile.checkin_readiness = checkin.readiness
    profile.checkin_feel = checkin.feel
    profile.checkin_energy = checkin.energy
    profile.checkin_sleep = checkin.sleep
    profile.checkin_pain = checkin.pain
    profile.checkin_pain_location = checkin.pain_location or None
    db.flush()

    snapshot = _snapshot(checkin)
    level = resolve_checkin(snapshot) if checkin.checkin_date == today else AdaptationLevel.NORMAL
    triggers = reduce_triggers(snapshot) if level is AdaptationLevel.REDUCE else []

    if level is AdaptationLevel.REDUCE:
        record_decision(
            db,
            user_id,
            "daily_reduce",
            "Volume to 60%, intensity to 85% for today",
            "Today's check-in flagged reduced capacity: " + ", ".join(triggers) + ".",
            {"triggers": triggers, "readiness": checkin.readiness, "pain_location": checkin.pain_location or None},
        )
    elif level is AdaptationLevel.INCREASE:
        record_decision(
            db,
            user_id,
            "daily_increase",
            "Volume to 120%, intensity to 105% for today",
            "Strong check-in: feeling good, well rested and pain free.",
            {"readiness": checkin.readiness, "energy": checkin.energy, "sleep": checkin.sleep},
        )

    logger.info(
        "checkin_submitted",
        extra={"profile_id": user_id, "checkin_date": checkin.checkin_date.isoformat(), "adaptation": level.value},
    )
    return profile, level


def complete_session(
    db: Session,
    user_id: str,
    payload: SessionCompleteInput,
    fatigue_increment: int = DEFAULT_FATIGUE_INCREMENT,
) -> SessionLog:
    profile = _require_profile(db, user_id)
    week = profile.current_week or 1
    log = SessionLog(
        profile_id=user_id,
        week=week,
        session_name=payload.session_name,
        perceived_exertion=payload.perceived_exertion,
        completed=payload.completed,
    )
    db.add(log)

    before = profile.fatigue_score or 0
    after = before + fatigue_increment
    profile.fatigue_score = after
    db.flush()

    if before <= DELOAD_FATIGUE_CEILING < after:
        record_decision(
            db,
            user_id,
            "deload_triggered",
            "Intensity down 15% until fatigue settles",
            f"Accumulated fatigue reached {after}, above the deload threshold of {DELOAD_FATIGUE_CEILING}.",
            {"fatigue_before": before, "fatigue_after": after, "session_name": payload.session_name},
        )

    logger.info(
        "session_completed",
        extra={"profile_id": user_id, "week": week, "session_name": payload.session_name, "fatigue_score": after},
    )
    return log


def save_benchmarks(db: Session, user_id: str, update: BenchmarkUpdateInput, today: date) -> Profile:
    profile = _require_profile(db, user_id)
    entries = {key: (entry.one_rm, entry.estimated_one_rm) for key, entry in update.exercise_benchmarks.items()}
    # new dict so the JSON column is marked dirty
    profile.performance_benchmarks = merge_benchmark_update(
        profile.performance_benchmarks or {},
        entries,
        today,
        aerobic=update.aerobic_benchmarks,
        power=update.power_benchmarks,
    )
    db.flush()
    logger.info("benchmarks_saved", extra={"profile_id": user_id, "exercise_keys": sorted(entries)})
    return profile
