from __future__ import annotations

from datetime import date
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from api.auth import AuthPrincipal, get_current_principal
from api.deps import get_app_settings, get_db
from api.schemas import (
    BenchmarkSectionOut,
    BenchmarksOut,
    BlockOut,
    CheckInOut,
    DecisionOut,
    EffectiveOneRMOut,
    ExerciseOut,
    ExerciseVideoOut,
    HealthOut,
    IntakeQuestionOut,
    MetricsOut,
    ProfileOut,
    ProgrammeOut,
    SessionCompleteOut,
    SessionLogOut,
    SessionOut,
    WeeklyBriefOut,
)
from core.config import Settings
from core.models import Profile
from core.services.adaptation import intensity_multiplier, volume_scale
from core.services.benchmarks import (
    BENCHMARK_SECTIONS,
    EXERCISE_BENCHMARK_KEYS,
    get_benchmarks,
    get_effective_one_rm,
    get_exercise_benchmark,
)
from core.services.exercise_library import EXERCISE_DISPLAY_NAMES, EXERCISE_VIDEOS, display_name, exercise_video
from core.services.intake import QUESTIONS, build_intake_profile
from core.services.periodization import deload_status
from core.services.profile import normalize_profile
from core.services.profile_store import (
    complete_session,
    fetch_profile,
    list_decisions,
    save_benchmarks,
    submit_checkin,
    upsert_intake_profile,
)
from core.services.readiness import derived_metrics, readiness_band
from core.services.session_builder import Block, Session as ProgrammeSession, build_programme
from core.services.weekly_brief import build_weekly_brief
from core.validators import BenchmarkUpdateInput, CheckInInput, IntakeSubmission, SessionCompleteInput

router = APIRouter(prefix="/api/v1")

Principal = Annotated[AuthPrincipal, Depends(get_current_principal)]
Db = Annotated[Session, Depends(get_db)]


def _require_profile(db: Session, user_id: str) -> Profile:
    profile = fetch_profile(db, user_id)
    if profile is None:
        raise HTTPException(status_code=404, detail={"code": "PROFILE_NOT_FOUND"})
    return profile


def _exercise_out(key: str) -> ExerciseOut:
    video = exercise_video(key)
    return ExerciseOut(
        key=key,
        name=display_name(key),
        video=ExerciseVideoOut.model_validate(video) if video else None,
    )


def _block_out(block: Block) -> BlockOut:
    return BlockOut(
        section=block.section,
        lines=list(block.lines),
        notes=block.notes,
        exercises=[_exercise_out(k) for k in block.exercise_keys],
    )


def _session_out(session: ProgrammeSession) -> SessionOut:
    return SessionOut(
        day_index=session.day_index,
        title=session.title,
        phase=session.phase,
        is_recovery=session.is_recovery,
        blocks=[_block_out(b) for b in session.blocks],
    )


@router.get("/health", response_model=HealthOut, tags=["system"])
def health(settings: Annotated[Settings, Depends(get_app_settings)]):
    return HealthOut(app_env=settings.app_env)


@router.get("/intake/questions", response_model=list[IntakeQuestionOut], tags=["intake"])
def intake_questions():
    return [IntakeQuestionOut.model_validate(q) for q in QUESTIONS]


@router.post("/intake", response_model=ProfileOut, tags=["intake"])
def submit_intake(body: IntakeSubmission, principal: Principal, db: Db):
    fields = build_intake_profile(body.answers)
    profile = upsert_intake_profile(db, principal.user_id, fields)
    return ProfileOut.model_validate(profile)


@router.get("/profiles/me", response_model=ProfileOut, tags=["profiles"])
def get_my_profile(principal: Principal, db: Db):
    return ProfileOut.model_validate(_require_profile(db, principal.user_id))


@router.get("/profiles/me/metrics", response_model=MetricsOut, tags=["profiles"])
def get_my_metrics(principal: Principal, db: Db):
    profile = normalize_profile(_require_profile(db, principal.user_id))
    metrics = derived_metrics(profile.domain_scores)
    return MetricsOut(
        readiness_score=profile.readiness_score,
        readiness_band=readiness_band(profile.readiness_score),
        fatigue_score=profile.fatigue_score,
        momentum=profile.momentum,
        primary_limiter=profile.primary_limiter,
        avg_strength=metrics.avg_strength,
        work_capacity=metrics.work_capacity,
        training_load=metrics.training_load,
        recovery=metrics.dashboard_recovery,
        programme_recovery=metrics.programme_recovery,
    )


@router.post("/profiles/me/checkin", response_model=CheckInOut, tags=["profiles"])
def post_checkin(body: CheckInInput, principal: Principal, db: Db):
    _, level = submit_checkin(db, principal.user_id, body, date.today())
    return CheckInOut(
        checkin_date=body.checkin_date,
        adaptation=level.value,
        volume_scale=volume_scale(level),
        intensity_multiplier=intensity_multiplier(level),
    )


@router.get("/programme", response_model=ProgrammeOut, tags=["programme"])
def get_programme(principal: Principal, db: Db, on: Optional[date] = Query(None)):
    today = on or date.today()
    profile = normalize_profile(_require_profile(db, principal.user_id))
    week = build_programme(profile, today)
    brief = build_weekly_brief(profile, week)
    return ProgrammeOut(
        on=today,
        week_number=week.week_number,
        phase=week.phase,
        adaptation=week.adaptation.value,
        deload=week.deload.active,
        deload_triggers=list(week.deload.triggers),
        deload_banner=week.deload_banner,
        strength_index=week.strength_index,
        aerobic_index=week.aerobic_index,
        recovery_index=week.recovery_index,
        fatigue=week.fatigue,
        effective_intensity=week.effective_intensity,
        main_sets=week.main_sets,
        session_minutes=week.session_minutes,
        brief=WeeklyBriefOut.model_validate(brief),
        sessions=[_session_out(s) for s in week.sessions],
    )


@router.post("/programme/sessions/complete", response_model=SessionCompleteOut, status_code=201, tags=["programme"])
def post_session_complete(
    body: SessionCompleteInput,
    principal: Principal,
    db: Db,
    settings: Annotated[Settings, Depends(get_app_settings)],
):
    profile = _require_profile(db, principal.user_id)
    log = complete_session(db, principal.user_id, body, settings.session_fatigue_increment)
    snapshot = normalize_profile(profile)
    deload = deload_status(snapshot.deload_active, snapshot.readiness_score, snapshot.fatigue_score)
    return SessionCompleteOut(
        log=SessionLogOut.model_validate(log),
        fatigue_score=profile.fatigue_score or 0,
        deload=deload.active,
    )


def _benchmarks_out(profile: Profile) -> BenchmarksOut:
    stored = get_benchmarks(profile)
    keys = list(EXERCISE_BENCHMARK_KEYS)
    keys.extend(k for k in (stored.get("exerciseBenchmarks") or {}) if k not in keys)
    exercises = []
    for key in keys:
        entry = get_exercise_benchmark(stored, key)
        effective = get_effective_one_rm(stored, key)
        exercises.append(
            EffectiveOneRMOut(
                key=key,
                one_rm=entry.one_rm,
                estimated_one_rm=entry.estimated_one_rm,
                last_updated=entry.last_updated,
                effective=effective.value if effective else None,
                is_estimated=effective.is_estimated if effective else False,
            )
        )
    return BenchmarksOut(
        exercises=exercises,
        aerobic_benchmarks=dict(stored.get("aerobicBenchmarks") or {}),
        power_benchmarks=dict(stored.get("powerBenchmarks") or {}),
    )


@router.get("/benchmarks", response_model=BenchmarksOut, tags=["benchmarks"])
def get_my_benchmarks(principal: Principal, db: Db):
    return _benchmarks_out(_require_profile(db, principal.user_id))


@router.put("/benchmarks", response_model=BenchmarksOut, tags=["benchmarks"])
def put_my_benchmarks(body: BenchmarkUpdateInput, principal: Principal, db: Db):
    _require_profile(db, principal.user_id)
    profile = save_benchmarks(db, principal.user_id, body, date.today())
    return _benchmarks_out(profile)


@router.get("/benchmarks/catalog", response_model=list[BenchmarkSectionOut], tags=["benchmarks"])
def benchmark_catalog(principal: Principal):
    return [BenchmarkSectionOut.model_validate(s) for s in BENCHMARK_SECTIONS]


@router.get("/decisions", response_model=list[DecisionOut], tags=["programme"])
def get_decisions(principal: Principal, db: Db, limit: int = Query(20, ge=1, le=100)):
    _require_profile(db, principal.user_id)
    return [DecisionOut.model_validate(d) for d in list_decisions(db, principal.user_id, limit)]


@router.get("/exercises/{key}", response_model=ExerciseOut, tags=["exercises"])
def get_exercise(key: str, principal: Principal):
    if key not in EXERCISE_DISPLAY_NAMES and key not in EXERCISE_VIDEOS:
        raise HTTPException(status_code=404, detail={"code": "EXERCISE_NOT_FOUND", "key": key})
    return _exercise_out(key)

