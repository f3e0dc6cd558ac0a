"""Prescription: percentage of 1RM to a loaded line, or an RPE line when no 1RM is known.

Produces the "3×5 @ 70% (105kg)" / "3×5 @ RPE 7" strings shown on session cards.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from core.services.benchmarks import get_effective_one_rm, working_weight_from_1rm
from core.services.rounding import round_half_up

DEFAULT_PERCENTAGE = 0.7

# Programme exercise keys whose stored benchmark lives under another key.
EXERCISE_KEY_TO_BENCHMARK: dict[str, str] = {
    "back_squat": "back_squat",
    "weighted_pull_up": "weighted_pullup",
    "rdl": "deadlift",
    "split_squat": "split_squat",
    "bench_press": "bench_press",
    "overhead_press": "overhead_press",
    "deadlift": "deadlift",
    "trap_bar_deadlift": "trap_bar_deadlift",
    "hip_thrust": "hip_thrust",
}


@dataclass(frozen=True)
class PrescriptionResult:
    display: str
    is_estimated: bool = False


def benchmark_key_for(exercise_key: str) -> str:
    return EXERCISE_KEY_TO_BENCHMARK.get(exercise_key, exercise_key)


def format_kg(kg: float) -> str:
    """75.0 -> '75', 72.5 -> '72.5'."""
    if float(kg).is_integer():
        return str(int(kg))
    return f"{kg:.1f}".rstrip("0").rstrip(".")


def prescribe(
    benchmarks: Mapping[str, Any],
    exercise_key: str,
    *,
    sets: int,
    reps: str,
    percentage: Optional[float] = DEFAULT_PERCENTAGE,
    rpe_fallback: str = "7",
) -> PrescriptionResult:
    if percentage is None:
        percentage = DEFAULT_PERCENTAGE
    effective = get_effective_one_rm(benchmarks or {}, benchmark_key_for(exercise_key))

    if effective is not None and math.isfinite(percentage) and percentage > 0:
        kg = working_weight_from_1rm(effective.value, percentage)
        pct = round_half_up(percentage * 100)
        est_tag = " (estimated)" if effective.is_estimated else ""
        return PrescriptionResult(
            display=f"{sets}×{reps} @ {pct}% ({format_kg(kg)}kg){est_tag}",
            is_estimated=effective.is_estimated,
        )

    return PrescriptionResult(display=f"{sets}×{reps} @ RPE {rpe_fallback}")
