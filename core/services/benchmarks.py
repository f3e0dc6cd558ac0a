"""Benchmark accessor: read stored 1RMs and turn them into bar-loadable weights.

Benchmarks live on the profile as a JSON document:

    {"exerciseBenchmarks": {"back_squat": {"oneRM": 140, "estimatedOneRM": null,
                                           "lastUpdated": "2026-10-01"}},
     "aerobicBenchmarks": {...}, "powerBenchmarks": {...}}

The camelCase keys match rows written by the original web client. Everything
here is read-only apart from ``merge_benchmark_update``, which returns a new
document rather than mutating the stored one.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date
from typing import Any, Mapping, Optional

from core.services.rounding import is_positive_number

EXERCISE_BENCHMARK_KEYS = [
    "back_squat",
    "bench_press",
    "deadlift",
    "overhead_press",
    "weighted_pullup",
    "trap_bar_deadlift",
    "hip_thrust",
    "split_squat",
]

BAR_INCREMENT_KG = 2.5


@dataclass(frozen=True)
class ExerciseBenchmark:
    one_rm: Optional[float]
    estimated_one_rm: Optional[float]
    last_updated: Optional[str]


@dataclass(frozen=True)
class EffectiveOneRM:
    value: float
    is_estimated: bool


@dataclass(frozen=True)
class BenchmarkField:
    key: str
    label: str
    unit: str = "kg"


@dataclass(frozen=True)
class BenchmarkSection:
    id: str
    title: str
    fields: tuple[BenchmarkField, ...]


BENCHMARK_SECTIONS: tuple[BenchmarkSection, ...] = (
    BenchmarkSection(
        "strength",
        "Strength (1RM kg)",
        (
            BenchmarkField("back_squat", "Back Squat"),
            BenchmarkField("front_squat", "Front Squat"),
            BenchmarkField("bench_press", "Bench Press"),
            BenchmarkField("incline_bench_press", "Incline Bench Press"),
            BenchmarkField("overhead_press", "Overhead Press"),
            BenchmarkField("push_press", "Push Press"),
            BenchmarkField("deadlift", "Deadlift"),
            BenchmarkField("trap_bar_deadlift", "Trap Bar Deadlift"),
            BenchmarkField("rdl", "Romanian Deadlift"),
            BenchmarkField("power_clean", "Power Clean"),
            BenchmarkField("clean_and_jerk", "Clean & Jerk"),
            BenchmarkField("snatch", "Snatch"),
            BenchmarkField("weighted_pullup", "Weighted Pull-Up"),
            BenchmarkField("barbell_row", "Barbell Row"),
            BenchmarkField("hip_thrust", "Hip Thrust"),
            BenchmarkField("split_squat", "Rear-Foot Elevated Split Squat"),
            BenchmarkField("lunge", "Walking Lunge"),
            BenchmarkField("leg_press", "Leg Press"),
            BenchmarkField("lat_pulldown", "Lat Pulldown"),
            BenchmarkField("dip", "Weighted Dip"),
            BenchmarkField("goblet_squat", "Goblet Squat"),
            BenchmarkField("db_press", "Dumbbell Press"),
            BenchmarkField("db_row", "Dumbbell Row"),
            BenchmarkField("kettlebell_swing", "Kettlebell Swing"),
        ),
    ),
    BenchmarkSection(
        "cardiovascular",
        "Cardiovascular",
        (
            BenchmarkField("MAS", "MAS (m/s)", "m/s"),
            BenchmarkField("vo2max", "VO2 max (ml/kg/min)", "ml/kg/min"),
            BenchmarkField("vt1", "VT1 (bpm or pace)", ""),
            BenchmarkField("vt2", "VT2 (bpm or pace)", ""),
            BenchmarkField("two_mile_time", "2 Mile Time (sec)", "sec"),
            BenchmarkField("five_k_time", "5K Time (sec)", "sec"),
            BenchmarkField("ten_k_time", "10K Time (sec)", "sec"),
            BenchmarkField("row_2k", "2K Row (sec)", "sec"),
            BenchmarkField("bike_ftp", "FTP (watts)", "W"),
        ),
    ),
    BenchmarkSection(
        "power",
        "Power & Speed",
        (
            BenchmarkField("CMJ", "Countermovement Jump (cm)", "cm"),
            BenchmarkField("RSI", "RSI (reactive strength)", ""),
            BenchmarkField("sprint_10m", "10 m Sprint (sec)", "sec"),
            BenchmarkField("sprint_30m", "30 m Sprint (sec)", "sec"),
            BenchmarkField("broad_jump", "Broad Jump (cm)", "cm"),
            BenchmarkField("med_ball_throw", "Med Ball Throw (m)", "m"),
        ),
    ),
)


def get_benchmarks(profile: Any) -> dict[str, Any]:
    """Return the profile's benchmark document, or an empty one if unset."""
    if isinstance(profile, Mapping):
        raw = profile.get("performance_benchmarks")
    else:
        raw = getattr(profile, "performance_benchmarks", None)
    return dict(raw) if isinstance(raw, Mapping) else {}


def _number_or_none(value: Any) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if not math.isfinite(value):
        return None
    return float(value)


def get_exercise_benchmark(benchmarks: Mapping[str, Any], key: str) -> ExerciseBenchmark:
    exercises = benchmarks.get("exerciseBenchmarks") if isinstance(benchmarks, Mapping) else None
    entry = exercises.get(key) if isinstance(exercises, Mapping) else None
    if not isinstance(entry, Mapping):
        return ExerciseBenchmark(None, None, None)
    last_updated = entry.get("lastUpdated")
    return ExerciseBenchmark(
        one_rm=_number_or_none(entry.get("oneRM")),
        estimated_one_rm=_number_or_none(entry.get("estimatedOneRM")),
        last_updated=str(last_updated) if last_updated else None,
    )


def get_effective_one_rm(benchmarks: Mapping[str, Any], key: str) -> Optional[EffectiveOneRM]:
    """Best available 1RM: confirmed if positive, else estimated if positive, else None."""
    b = get_exercise_benchmark(benchmarks, key)
    if is_positive_number(b.one_rm):
        return EffectiveOneRM(value=float(b.one_rm), is_estimated=False)
    if is_positive_number(b.estimated_one_rm):
        return EffectiveOneRM(value=float(b.estimated_one_rm), is_estimated=True)
    return None


def round_to_nearest_2_5(kg: float) -> float:
    """Round to the nearest 2.5 kg for bar loading (halves round up)."""
    return math.floor(kg / BAR_INCREMENT_KG + 0.5) * BAR_INCREMENT_KG


def working_weight_from_1rm(one_rm: float, percentage: float) -> float:
    """Working weight for a fraction of 1RM, rounded to 2.5 kg and never below 2.5 kg."""
    return max(BAR_INCREMENT_KG, round_to_nearest_2_5(one_rm * percentage))


def merge_benchmark_update(
    existing: Mapping[str, Any],
    entries: Mapping[str, tuple[Optional[float], Optional[float]]],
    today: date,
    aerobic: Optional[Mapping[str, Optional[float]]] = None,
    power: Optional[Mapping[str, Optional[float]]] = None,
) -> dict[str, Any]:
    """Apply benchmark edits and return a new document.

    ``entries`` maps exercise key to ``(one_rm, estimated_one_rm)``. A key with
    neither value positive is cleared. Keys not mentioned are left untouched.
    """
    merged: dict[str, Any] = dict(existing or {})
    exercises = dict(merged.get("exerciseBenchmarks") or {})
    stamp = today.isoformat()
    for key, (one_rm, estimated) in entries.items():
        confirmed = float(one_rm) if is_positive_number(one_rm) else None
        est = float(estimated) if is_positive_number(estimated) else None
        if confirmed is None and est is None:
            exercises.pop(key, None)
            continue
        exercises[key] = {"oneRM": confirmed, "estimatedOneRM": est, "lastUpdated": stamp}
    merged["exerciseBenchmarks"] = exercises

    for section_key, values in (("aerobicBenchmarks", aerobic), ("powerBenchmarks", power)):
        if not values:
            continue
        section = dict(merged.get(section_key) or {})
        for key, value in values.items():
            if is_positive_number(value):
                section[key] = float(value)
            else:
                section.pop(key, None)
        merged[section_key] = section
    return merged
