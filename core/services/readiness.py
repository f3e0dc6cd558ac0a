"""Readiness and derived composite metrics computed from the six domain scores.

All inputs are 0-100. ``stress_level`` is inverted (higher = worse); the intake
readiness formula takes the stress *quality* score, i.e. ``100 - stress_level``.
"""

from __future__ import annotations

from dataclasses import dataclass

from core.config import get_settings
from core.services.rounding import round_half_up

# Fixed iteration order also decides ties for the primary limiter.
LIMITER_DOMAINS = ("Aerobic", "Strength", "Mobility", "Sleep")


@dataclass(frozen=True)
class DomainScores:
    aerobic: float
    strength_upper: float
    strength_lower: float
    mobility: float
    sleep: float
    stress_level: float


@dataclass(frozen=True)
class DerivedMetrics:
    avg_strength: float
    work_capacity: int
    training_load: float
    dashboard_recovery: float
    programme_recovery: float


def avg_strength(strength_upper: float, strength_lower: float) -> float:
    return (strength_upper + strength_lower) / 2


def work_capacity(aerobic: float, strength_upper: float, strength_lower: float) -> int:
    return round_half_up(aerobic * 0.5 + avg_strength(strength_upper, strength_lower) * 0.5)


def training_load(aerobic: float, strength_upper: float, strength_lower: float) -> float:
    return (aerobic + strength_upper + strength_lower) / 3


def dashboard_recovery(sleep: float, mobility: float) -> float:
    """Recovery as shown on the dashboard: sleep and mobility in equal parts."""
    return (sleep + mobility) / 2


def programme_recovery(sleep: float, stress_level: float) -> float:
    """Recovery as used by the programme page: sleep weighted against stress."""
    return sleep * 0.6 + (100 - stress_level) * 0.4


def intake_readiness(aerobic: float, strength: float, mobility: float, sleep: float, stress_quality: float) -> int:
    return round_half_up(aerobic * 0.25 + strength * 0.25 + mobility * 0.15 + sleep * 0.20 + stress_quality * 0.15)


def primary_limiter(aerobic: float, strength: float, mobility: float, sleep: float) -> str:
    """Name of the lowest-scoring domain; the first in LIMITER_DOMAINS wins a tie."""
    values = dict(zip(LIMITER_DOMAINS, (aerobic, strength, mobility, sleep)))
    lowest = LIMITER_DOMAINS[0]
    for name in LIMITER_DOMAINS[1:]:
        if values[name] < values[lowest]:
            lowest = name
    return lowest


def derived_metrics(scores: DomainScores) -> DerivedMetrics:
    return DerivedMetrics(
        avg_strength=avg_strength(scores.strength_upper, scores.strength_lower),
        work_capacity=work_capacity(scores.aerobic, scores.strength_upper, scores.strength_lower),
        training_load=training_load(scores.aerobic, scores.strength_upper, scores.strength_lower),
        dashboard_recovery=dashboard_recovery(scores.sleep, scores.mobility),
        programme_recovery=programme_recovery(scores.sleep, scores.stress_level),
    )


def readiness_band(score: float) -> str:
    settings = get_settings()
    if score > settings.readiness_primed_threshold:
        return "primed"
    return "stabilising"
