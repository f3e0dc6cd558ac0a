"""Daily adaptation: turn today's check-in into reduce / normal / increase.

Reduce triggers are checked first and short-circuit; increase is only
considered when none fired. A check-in dated any day other than ``today`` is
ignored entirely.
"""

from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Optional

from core.services.profile import CheckInSnapshot, NormalizedProfile


class AdaptationLevel(str, Enum):
    REDUCE = "reduce"
    NORMAL = "normal"
    INCREASE = "increase"


VOLUME_SCALE: dict[AdaptationLevel, float] = {
    AdaptationLevel.REDUCE: 0.6,
    AdaptationLevel.NORMAL: 1.0,
    AdaptationLevel.INCREASE: 1.2,
}

INTENSITY_MULTIPLIER: dict[AdaptationLevel, float] = {
    AdaptationLevel.REDUCE: 0.85,
    AdaptationLevel.NORMAL: 1.0,
    AdaptationLevel.INCREASE: 1.05,
}

LOW_CHECKIN_READINESS = 5
HIGH_CHECKIN_READINESS = 7


def active_checkin(profile: NormalizedProfile, today: date) -> Optional[CheckInSnapshot]:
    checkin = profile.checkin
    if checkin is None or checkin.checkin_date != today:
        return None
    return checkin


def reduce_triggers(checkin: CheckInSnapshot) -> list[str]:
    """Names of every reduce condition the check-in fires, in check order."""
    fired: list[str] = []
    if checkin.pain == "yes":
        fired.append("pain")
    if checkin.feel == "poor":
        fired.append("feel")
    if checkin.energy == "low":
        fired.append("energy")
    if checkin.sleep == "poor":
        fired.append("sleep")
    if checkin.readiness is not None and checkin.readiness < LOW_CHECKIN_READINESS:
        fired.append("readiness")
    return fired


def _qualifies_for_increase(checkin: CheckInSnapshot) -> bool:
    return (
        checkin.feel == "good"
        and (checkin.energy == "high" or checkin.sleep == "good")
        and checkin.readiness is not None
        and checkin.readiness >= HIGH_CHECKIN_READINESS
        and checkin.pain == "none"
    )


def resolve_checkin(checkin: CheckInSnapshot) -> AdaptationLevel:
    if reduce_triggers(checkin):
        return AdaptationLevel.REDUCE
    if _qualifies_for_increase(checkin):
        return AdaptationLevel.INCREASE
    return AdaptationLevel.NORMAL


def resolve_adaptation(profile: NormalizedProfile, today: date) -> AdaptationLevel:
    checkin = active_checkin(profile, today)
    if checkin is None:
        return AdaptationLevel.NORMAL
    return resolve_checkin(checkin)


def volume_scale(level: AdaptationLevel) -> float:
    return VOLUME_SCALE[level]


def intensity_multiplier(level: AdaptationLevel) -> float:
    return INTENSITY_MULTIPLIER[level]
