from __future__ import annotations

from datetime import date as dt_date
from datetime import datetime as dt_datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class HealthOut(BaseModel):
    status: str = "ok"
    app_env: str


class ErrorOut(BaseModel):
    code: str
    message: Optional[str] = None
    retryable: bool = False


class IntakeOptionOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    label: str
    score: Optional[int] = None
    value: Optional[int] = None


class IntakeQuestionOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    kind: str
    prompt: str
    field: str
    required: bool
    options: list[IntakeOptionOut] = Field(default_factory=list)
    max_length: Optional[int] = None


class ProfileOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    goal: Optional[str] = None
    sport: Optional[str] = None
    experience: Optional[str] = None
    equipment: Optional[str] = None
    days_per_week: Optional[int] = None
    minutes_per_session: Optional[int] = None
    programme_type: Optional[str] = None
    aerobic_score: Optional[int] = None
    strength_upper: Optional[int] = None
    strength_lower: Optional[int] = None
    mobility_score: Optional[int] = None
    sleep_score: Optional[int] = None
    stress_level: Optional[int] = None
    readiness_score: Optional[int] = None
    fatigue_score: Optional[int] = 0
    momentum: Optional[str] = None
    primary_limiter: Optional[str] = None
    current_week: Optional[int] = 1
    deload_active: Optional[bool] = False
    checkin_date: Optional[dt_date] = None
    checkin_readiness: Optional[int] = None
    checkin_feel: Optional[str] = None
    checkin_energy: Optional[str] = None
    checkin_sleep: Optional[str] = None
    checkin_pain: Optional[str] = None
    checkin_pain_location: Optional[str] = None
    performance_benchmarks: Optional[dict[str, Any]] = None
    created_at: Optional[dt_datetime] = None
    updated_at: Optional[dt_datetime] = None


class MetricsOut(BaseModel):
    readiness_score: float
    readiness_band: str
    fatigue_score: float
    momentum: str
    primary_limiter: str
    avg_strength: float
    work_capacity: int
    training_load: float
    recovery: float
    programme_recovery: float


class CheckInOut(BaseModel):
    checkin_date: dt_date
    adaptation: str
    volume_scale: float
    intensity_multiplier: float


class ExerciseVideoOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    video_id: str
    label: str
    start_seconds: int
    end_seconds: int


class ExerciseOut(BaseModel):
    key: str
    name: str
    video: Optional[ExerciseVideoOut] = None


class BlockOut(BaseModel):
    section: str
    lines: list[str]
    notes: str
    exercises: list[ExerciseOut] = Field(default_factory=list)


class SessionOut(BaseModel):
    day_index: int
    title: str
    phase: str
    is_recovery: bool
    blocks: list[BlockOut]


class WeeklyBriefOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    week_number: int
    phase_intent: str
    system_bias: str
    primary_limiter: str
    recovery_bandwidth: str
    why_this_week: str


class ProgrammeOut(BaseModel):
    on: dt_date
    week_number: int
    phase: str
    adaptation: str
    deload: bool
    deload_triggers: list[str]
    deload_banner: Optional[str] = None
    strength_index: float
    aerobic_index: float
    recovery_index: float
    fatigue: float
    effective_intensity: float
    main_sets: int
    session_minutes: int
    brief: WeeklyBriefOut
    sessions: list[SessionOut]


class SessionLogOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    profile_id: str
    week: int
    session_name: str
    perceived_exertion: Optional[int] = None
    completed: bool
    created_at: dt_datetime


class SessionCompleteOut(BaseModel):
    log: SessionLogOut
    fatigue_score: int
    deload: bool


class EffectiveOneRMOut(BaseModel):
    key: str
    one_rm: Optional[float] = None
    estimated_one_rm: Optional[float] = None
    last_updated: Optional[str] = None
    effective: Optional[float] = None
    is_estimated: bool = False


class BenchmarksOut(BaseModel):
    exercises: list[EffectiveOneRMOut]
    aerobic_benchmarks: dict[str, float] = Field(default_factory=dict)
    power_benchmarks: dict[str, float] = Field(default_factory=dict)


class BenchmarkFieldOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    key: str
    label: str
    unit: str


class BenchmarkSectionOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    fields: list[BenchmarkFieldOut]


class DecisionOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    decision_type: str
    adjustment_made: str
    explanation: str
    trigger_variables: dict[str, Any] = Field(default_factory=dict)
    created_at: dt_datetime


class ChatReplyOut(BaseModel):
    reply: str
