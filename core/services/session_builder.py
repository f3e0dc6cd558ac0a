"""Session builder: assembles the week's sessions from a normalized profile.

Every training day has six blocks in a fixed order (prep, main lift,
secondary lift, accessory, trunk or load carriage, energy system). The middle
day of the week is always a regeneration day. Loads come from the
prescription engine, scaled by one compounded intensity factor:

    readiness bias x fatigue bias x deload multiplier x adaptation multiplier

The builder is a pure function of (profile, adaptation): same inputs, same week.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Mapping, Optional

from core.services.adaptation import AdaptationLevel, intensity_multiplier, resolve_adaptation, volume_scale
from core.services.benchmarks import get_benchmarks
from core.services.exercise_library import display_name
from core.services.periodization import (
    DeloadStatus,
    deload_multiplier,
    deload_status,
    fatigue_bias,
    readiness_bias,
    select_phase,
)
from core.services.prescription import prescribe
from core.services.profile import NormalizedProfile
from core.services.readiness import programme_recovery
from core.services.rounding import round_half_up
from core.services.training_targets import AEROBIC_BIASED, STRENGTH_BIASED, ProgrammeType

MAIN_LIFT_PERCENT = 0.80
POWER_CLEAN_PERCENT = 0.75
SECONDARY_LIFT_PERCENT = 0.75
ACCESSORY_PERCENT = 0.60
ACCESSORY_BASE_SETS = 3
MIN_SETS = 2

DELOAD_BANNER = "Adaptive Deload Triggered · Intensity ↓ 15%"


@dataclass
class Block:
    section: str
    lines: list[str]
    notes: str
    exercise_keys: list[str] = field(default_factory=list)


@dataclass
class Session:
    day_index: int
    title: str
    phase: str
    is_recovery: bool
    blocks: list[Block]


@dataclass(frozen=True)
class DayScaling:
    """Per-day knobs shared by every block of a training day."""

    effective_intensity: float
    volume_scale: float
    main_sets: int
    accessory_sets: int
    rpe_target: str
    adaptation: AdaptationLevel


@dataclass
class ProgrammeWeek:
    week_number: int
    phase: str
    adaptation: AdaptationLevel
    deload: DeloadStatus
    deload_banner: Optional[str]
    strength_index: float
    aerobic_index: float
    recovery_index: float
    fatigue: float
    effective_intensity: float
    main_sets: int
    session_minutes: int
    sessions: list[Session]


def base_main_sets(experience: str) -> int:
    text = (experience or "").lower()
    if "advanced" in text:
        return 5
    if "intermediate" in text:
        return 4
    return 3


def rpe_target(experience: str) -> str:
    text = (experience or "").lower()
    if "advanced" in text:
        return "8–9"
    if "intermediate" in text:
        return "7–8"
    return "6–7"


def adapted_sets(base_sets: int, scale: float) -> int:
    return max(MIN_SETS, round_half_up(base_sets * scale))


def effective_intensity(profile: NormalizedProfile, adaptation: AdaptationLevel) -> float:
    deload = deload_status(profile.deload_active, profile.readiness_score, profile.fatigue_score)
    scale = (
        readiness_bias(profile.readiness_score)
        * fatigue_bias(profile.fatigue_score)
        * deload_multiplier(deload.active)
        * intensity_multiplier(adaptation)
    )
    return scale


def recovery_day_index(days_per_week: int) -> int:
    return days_per_week // 2


def day_scaling(profile: NormalizedProfile, adaptation: AdaptationLevel) -> DayScaling:
    scale = volume_scale(adaptation)
    return DayScaling(
        effective_intensity=effective_intensity(profile, adaptation),
        volume_scale=scale,
        main_sets=adapted_sets(base_main_sets(profile.experience), scale),
        accessory_sets=adapted_sets(ACCESSORY_BASE_SETS, scale),
        rpe_target=rpe_target(profile.experience),
        adaptation=adaptation,
    )


def _scaled_range(lo: int, hi: int, scale: float) -> str:
    return f"{round_half_up(lo * scale)}–{round_half_up(hi * scale)}"


# -- Blocks --


def _prep_block(programme_type: ProgrammeType) -> Block:
    if programme_type is ProgrammeType.POWER_SPEED:
        return Block(
            section="Prep",
            lines=["6 min progressive bike", "Dynamic mobility", "Pogos · 3×10", "Broad Jumps · 3×3"],
            notes="Prime the stretch-shortening cycle before the power work. Full recovery between jumps.",
            exercise_keys=["bike", "dynamic_mobility", "pogos", "broad_jump"],
        )
    return Block(
        section="Prep",
        lines=["6 min progressive bike", "Dynamic mobility", "Pogos · 3×5"],
        notes="Prime CNS without fatigue. Elevate core temp gradually.",
        exercise_keys=["bike", "dynamic_mobility", "pogos"],
    )


def _main_lift_block(profile: NormalizedProfile, scaling: DayScaling, benchmarks: Mapping[str, Any]) -> Block:
    if profile.programme_type is ProgrammeType.POWER_SPEED:
        rx = prescribe(
            benchmarks,
            "power_clean",
            sets=scaling.main_sets,
            reps="2–3",
            percentage=POWER_CLEAN_PERCENT * scaling.effective_intensity,
            rpe_fallback=scaling.rpe_target,
        )
        return Block(
            section="Main Lift",
            lines=[f"{display_name('power_clean')} · {rx.display} · Rest 2–3 min"],
            notes="Intent: maximal bar velocity. End the set when speed visibly drops.",
            exercise_keys=["power_clean"],
        )
    rx = prescribe(
        benchmarks,
        "back_squat",
        sets=scaling.main_sets,
        reps="3–5",
        percentage=MAIN_LIFT_PERCENT * scaling.effective_intensity,
        rpe_fallback=scaling.rpe_target,
    )
    return Block(
        section="Main Lift",
        lines=[f"{display_name('back_squat')} · {rx.display} · Tempo 31X1 · Rest 2–3 min"],
        notes="Intent: max force production. Terminate if bar speed drops >20%.",
        exercise_keys=["back_squat"],
    )


def _secondary_lift_block(scaling: DayScaling, benchmarks: Mapping[str, Any]) -> Block:
    rx = prescribe(
        benchmarks,
        "weighted_pull_up",
        sets=scaling.main_sets,
        reps="5–6",
        percentage=SECONDARY_LIFT_PERCENT * scaling.effective_intensity,
        rpe_fallback=scaling.rpe_target,
    )
    return Block(
        section="Secondary Lift",
        lines=[f"{display_name('weighted_pull_up')} · {rx.display} · Rest 2 min"],
        notes="Vertical pull strength. Full ROM. Controlled eccentric.",
        exercise_keys=["weighted_pull_up"],
    )


def _accessory_block(scaling: DayScaling, benchmarks: Mapping[str, Any]) -> Block:
    lines = []
    keys = []
    for key, reps in (("split_squat", "8 ea"), ("db_press", "10"), ("rdl", "8")):
        rx = prescribe(
            benchmarks,
            key,
            sets=scaling.accessory_sets,
            reps=reps,
            percentage=ACCESSORY_PERCENT * scaling.effective_intensity,
            rpe_fallback="7",
        )
        lines.append(f"{display_name(key)} · {rx.display}")
        keys.append(key)
    return Block(
        section="Accessory",
        lines=lines,
        notes="Hypertrophy stimulus + unilateral stability development. Rest 60–90s.",
        exercise_keys=keys,
    )


def _trunk_block(programme_type: ProgrammeType, scaling: DayScaling) -> Block:
    sets = scaling.accessory_sets
    throws = f"Med Ball Rotational Throws · {sets}×5 ea"
    plank = f"Side Plank · {sets}×30s"
    if programme_type is ProgrammeType.LOAD_CARRIAGE_ENDURANCE:
        march = _scaled_range(20, 30, scaling.volume_scale)
        return Block(
            section="Load Carriage Resilience",
            lines=[f"Loaded March · {march} min @ 15–20 kg", throws, plank],
            notes="Condition feet, hips and trunk for load over distance. Upright posture, short quick steps.",
            exercise_keys=["loaded_march", "med_ball_rotational_throw", "side_plank"],
        )
    return Block(
        section="Trunk Capacity",
        lines=[throws, plank],
        notes="Enhance rotational power and frontal plane stability.",
        exercise_keys=["med_ball_rotational_throw", "side_plank"],
    )


def _energy_system_block(profile: NormalizedProfile, scaling: DayScaling) -> Block:
    programme_type = profile.programme_type
    intervals = adapted_sets(4, scaling.volume_scale)

    if programme_type in AEROBIC_BIASED or profile.aerobic_index > profile.strength_index:
        if programme_type is ProgrammeType.AEROBIC_FIRST:
            return Block(
                section="Energy System",
                lines=[f"Aerobic Threshold Build · {intervals} × 8 min @ 80–85% HRmax · 2 min easy · bike, swim or run"],
                notes="Raise the aerobic threshold in your primary discipline without junk intensity.",
                exercise_keys=["zone2"],
            )
        if programme_type is ProgrammeType.LOAD_CARRIAGE_ENDURANCE:
            return Block(
                section="Energy System",
                lines=[f"Threshold Intervals · {intervals} × 6 min @ 85–90% HRmax · 2 min easy recovery · run, unloaded"],
                notes="Build the threshold that carries load over distance.",
                exercise_keys=["threshold_intervals"],
            )
        return Block(
            section="Energy System",
            lines=[f"Threshold Intervals · {intervals} × 6 min @ 85–90% HRmax · 2 min easy recovery"],
            notes="Improve lactate clearance and raise VT2 ceiling.",
            exercise_keys=["threshold_intervals"],
        )

    if programme_type in STRENGTH_BIASED:
        rounds = adapted_sets(10, scaling.volume_scale)
        return Block(
            section="Energy System",
            lines=[f"Minimal-Interference Conditioning · {rounds} × 30s on / 30s off · bike @ RPE 7"],
            notes="Keep the aerobic floor without blunting strength adaptation.",
            exercise_keys=["bike"],
        )

    return Block(
        section="Energy System",
        lines=[f"Zone 2 Aerobic Base · {_scaled_range(30, 40, scaling.volume_scale)} min @ 65–75% HRmax · nasal breathing focus"],
        notes="Expand mitochondrial density and aerobic base.",
        exercise_keys=["zone2"],
    )


# -- Sessions --


def regeneration_session(day_index: int, adaptation: AdaptationLevel) -> Session:
    reduced = adaptation is AdaptationLevel.REDUCE
    zone1 = "15–20" if reduced else "20–30"
    rounds = 2 if reduced else 3
    breathing = 5 if reduced else 10
    return Session(
        day_index=day_index,
        title=f"Day {day_index + 1} · Regeneration",
        phase="Regeneration",
        is_recovery=True,
        blocks=[
            Block(
                section="Zone 1 Flush",
                lines=[f"Zone 1 · {zone1} min · bike or walk · HR < 120 bpm"],
                notes="Purpose: downregulate CNS and promote blood flow.",
                exercise_keys=["zone1"],
            ),
            Block(
                section="Mobility Circuit",
                lines=[f"Mobility circuits · {rounds} rounds · hips, T-spine, ankles"],
                notes="Maintain movement quality between loaded days.",
                exercise_keys=["mobility_circuits"],
            ),
            Block(
                section="Breathing",
                lines=[f"Parasympathetic breathing · {breathing} min · 4s in / 6s out"],
                notes="Shift toward parasympathetic tone before sleep.",
                exercise_keys=["parasympathetic_breathing"],
            ),
        ],
    )


def training_session(
    day_index: int,
    profile: NormalizedProfile,
    scaling: DayScaling,
    phase: str,
    benchmarks: Mapping[str, Any],
) -> Session:
    return Session(
        day_index=day_index,
        title=f"Day {day_index + 1} · {phase}",
        phase=phase,
        is_recovery=False,
        blocks=[
            _prep_block(profile.programme_type),
            _main_lift_block(profile, scaling, benchmarks),
            _secondary_lift_block(scaling, benchmarks),
            _accessory_block(scaling, benchmarks),
            _trunk_block(profile.programme_type, scaling),
            _energy_system_block(profile, scaling),
        ],
    )


def build_week(profile: NormalizedProfile, adaptation: AdaptationLevel) -> list[Session]:
    """One session per training day; the middle day is regeneration."""
    days = max(1, profile.days_per_week)
    recovery_idx = recovery_day_index(days)
    phase = select_phase(profile.current_week)
    scaling = day_scaling(profile, adaptation)
    benchmarks = get_benchmarks(profile)

    sessions: list[Session] = []
    for day_index in range(days):
        if day_index == recovery_idx:
            sessions.append(regeneration_session(day_index, adaptation))
        else:
            sessions.append(training_session(day_index, profile, scaling, phase, benchmarks))
    return sessions


def build_programme(profile: NormalizedProfile, today: date) -> ProgrammeWeek:
    adaptation = resolve_adaptation(profile, today)
    deload = deload_status(profile.deload_active, profile.readiness_score, profile.fatigue_score)
    scaling = day_scaling(profile, adaptation)
    return ProgrammeWeek(
        week_number=profile.current_week,
        phase=select_phase(profile.current_week),
        adaptation=adaptation,
        deload=deload,
        deload_banner=DELOAD_BANNER if deload.active else None,
        strength_index=profile.strength_index,
        aerobic_index=profile.aerobic_index,
        recovery_index=programme_recovery(profile.sleep_score, profile.stress_level),
        fatigue=profile.fatigue_score,
        effective_intensity=scaling.effective_intensity,
        main_sets=scaling.main_sets,
        session_minutes=profile.minutes_per_session,
        sessions=build_week(profile, adaptation),
    )
