"""Macrocycle phase selection and deload detection.

The macrocycle is a fixed six-week table. Weeks past the table fall back to
Accumulation; the cycle does not wrap.
"""

from __future__ import annotations

from dataclasses import dataclass, field

MACROCYCLE: tuple[str, ...] = (
    "Accumulation",
    "Accumulation",
    "Intensification",
    "Intensification",
    "Overreach",
    "Deload",
)
DEFAULT_PHASE = "Accumulation"

PHASE_INTENT: dict[str, str] = {
    "Accumulation": "Build work capacity and volume tolerance at moderate intensity",
    "Intensification": "Convert accumulated volume into strength with heavier, lower-rep work",
    "Overreach": "Short planned spike in load to drive supercompensation",
    "Deload": "Shed fatigue while keeping movement quality and intent",
}

DELOAD_READINESS_FLOOR = 55
DELOAD_FATIGUE_CEILING = 75
DELOAD_INTENSITY_MULTIPLIER = 0.85


@dataclass(frozen=True)
class DeloadStatus:
    active: bool
    triggers: tuple[str, ...] = field(default_factory=tuple)


def select_phase(week_number: int) -> str:
    if 1 <= week_number <= len(MACROCYCLE):
        return MACROCYCLE[week_number - 1]
    return DEFAULT_PHASE


def deload_status(deload_active: bool, readiness: float, fatigue: float) -> DeloadStatus:
    triggers: list[str] = []
    if deload_active:
        triggers.append("flag")
    if readiness < DELOAD_READINESS_FLOOR:
        triggers.append("readiness")
    if fatigue > DELOAD_FATIGUE_CEILING:
        triggers.append("fatigue")
    return DeloadStatus(active=bool(triggers), triggers=tuple(triggers))


def is_deload(deload_active: bool, readiness: float, fatigue: float) -> bool:
    return deload_status(deload_active, readiness, fatigue).active


def readiness_bias(readiness: float) -> float:
    if readiness > 75:
        return 1.05
    if readiness > 65:
        return 1.0
    return 0.9


def fatigue_bias(fatigue: float) -> float:
    return 0.85 if fatigue > 60 else 1.0


def deload_multiplier(deload: bool) -> float:
    return DELOAD_INTENSITY_MULTIPLIER if deload else 1.0
