from __future__ import annotations

import datetime as dt
from typing import Any

from sqlalchemy import (
    JSON,
    Boolean,
    CheckConstraint,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


class Profile(Base):
    __tablename__ = "profiles"
    __table_args__ = (
        CheckConstraint("current_week >= 1", name="ck_profiles_current_week"),
        CheckConstraint("fatigue_score >= 0", name="ck_profiles_fatigue_nonneg"),
    )

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    goal: Mapped[str | None] = mapped_column(String(120))
    sport: Mapped[str | None] = mapped_column(String(120))
    experience: Mapped[str | None] = mapped_column(String(40))
    equipment: Mapped[str | None] = mapped_column(String(80))
    days_per_week: Mapped[int | None] = mapped_column(Integer)
    minutes_per_session: Mapped[int | None] = mapped_column(Integer)
    programme_type: Mapped[str | None] = mapped_column(String(40))

    aerobic_score: Mapped[int | None] = mapped_column(Integer)
    strength_upper: Mapped[int | None] = mapped_column(Integer)
    strength_lower: Mapped[int | None] = mapped_column(Integer)
    mobility_score: Mapped[int | None] = mapped_column(Integer)
    sleep_score: Mapped[int | None] = mapped_column(Integer)
    stress_level: Mapped[int | None] = mapped_column(Integer)

    readiness_score: Mapped[int | None] = mapped_column(Integer)
    fatigue_score: Mapped[int] = mapped_column(Integer, default=0)
    momentum: Mapped[str | None] = mapped_column(String(20))
    primary_limiter: Mapped[str | None] = mapped_column(String(20))

    current_week: Mapped[int] = mapped_column(Integer, default=1)
    deload_active: Mapped[bool] = mapped_column(Boolean, default=False)

    checkin_date: Mapped[dt.date | None] = mapped_column(Date)
    checkin_readiness: Mapped[int | None] = mapped_column(Integer)
    checkin_feel: Mapped[str | None] = mapped_column(String(10))
    checkin_energy: Mapped[str | None] = mapped_column(String(10))
    checkin_sleep: Mapped[str | None] = mapped_column(String(10))
    checkin_pain: Mapped[str | None] = mapped_column(String(10))
    checkin_pain_location: Mapped[str | None] = mapped_column(String(200))

    performance_benchmarks: Mapped[dict[str, Any]] = mapped_column(JSON, default=dict)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime, default=dt.datetime.utcnow)
    updated_at: Mapped[dt.datetime] = mapped_column(DateTime, default=dt.datetime.utcnow, onupdate=dt.datetime.utcnow)


class SessionLog(Base):
    __tablename__ = "session_logs"
    __table_args__ = (
        CheckConstraint(
            "perceived_exertion IS NULL OR (perceived_exertion >= 1 AND perceived_exertion <= 10)",
            name="ck_session_logs_rpe_range",
        ),
        Index("ix_session_logs_profile_created", "profile_id", "created_at"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    profile_id: Mapped[str] = mapped_column(ForeignKey("profiles.id"), index=True)
    week: Mapped[int] = mapped_column(Integer)
    session_name: Mapped[str] = mapped_column(String(120))
    perceived_exertion: Mapped[int | None] = mapped_column(Integer)
    completed: Mapped[bool] = mapped_column(Boolean, default=True)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime, default=dt.datetime.utcnow)


class ProgrammeDecision(Base):
    __tablename__ = "programme_decisions"
    __table_args__ = (Index("ix_programme_decisions_profile_created", "profile_id", "created_at"),)

    id: Mapped[int] = mapped_column(primary_key=True)
    profile_id: Mapped[str] = mapped_column(ForeignKey("profiles.id"), index=True)
    decision_type: Mapped[str] = mapped_column(String(40))
    adjustment_made: Mapped[str] = mapped_column(String(200))
    explanation: Mapped[str] = mapped_column(Text)
    trigger_variables: Mapped[dict[str, Any]] = mapped_column(JSON, default=dict)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime, default=dt.datetime.utcnow)
