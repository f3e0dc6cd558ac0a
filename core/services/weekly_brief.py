"""Weekly strategic brief: a coach-voice summary shown above the week's sessions."""

from __future__ import annotations

from dataclasses import dataclass

from core.services.adaptation import AdaptationLevel
from core.services.periodization import PHASE_INTENT
from core.services.profile import NormalizedProfile
from core.services.session_builder import ProgrammeWeek
from core.services.training_targets import AEROBIC_BIASED, STRENGTH_BIASED


@dataclass(frozen=True)
class WeeklyBrief:
    week_number: int
    phase_intent: str
    system_bias: str
    primary_limiter: str
    recovery_bandwidth: str
    why_this_week: str


def recovery_bandwidth(recovery_index: float) -> str:
    if recovery_index >= 70:
        return "High"
    if recovery_index >= 50:
        return "Adequate"
    return "Limited"


def system_bias(profile: NormalizedProfile) -> str:
    if profile.programme_type in AEROBIC_BIASED:
        return "Aerobic-dominant; strength maintained for durability"
    if profile.programme_type in STRENGTH_BIASED:
        return "Strength-dominant; minimal-interference conditioning"
    if profile.aerobic_index > profile.strength_index:
        return "Hybrid; aerobic engine leading, strength catching up"
    return "Hybrid; strength leading, aerobic floor building"


def _why_this_week(programme: ProgrammeWeek, bandwidth: str) -> str:
    if programme.deload.active:
        return (
            "Readiness and fatigue signals call for a deload. Intensity is pulled back so you "
            "arrive at the next block fresh."
        )
    if programme.adaptation is AdaptationLevel.REDUCE:
        return "Today's check-in flagged reduced capacity, so volume and intensity are scaled down for today only."
    if programme.adaptation is AdaptationLevel.INCREASE:
        return "You checked in strong today. Volume and intensity are nudged up to take advantage."
    return (
        f"This week follows the {programme.phase.lower()} plan at planned load. "
        f"Recovery bandwidth is {bandwidth.lower()}."
    )


def build_weekly_brief(profile: NormalizedProfile, programme: ProgrammeWeek) -> WeeklyBrief:
    bandwidth = recovery_bandwidth(programme.recovery_index)
    return WeeklyBrief(
        week_number=programme.week_number,
        phase_intent=PHASE_INTENT.get(programme.phase, PHASE_INTENT["Accumulation"]),
        system_bias=system_bias(profile),
        primary_limiter=profile.primary_limiter or "—",
        recovery_bandwidth=bandwidth,
        why_this_week=_why_this_week(programme, bandwidth),
    )
