"""Training targets: goal options offered at intake and their programme type.

The programme type is the single dimension that drives exercise selection and
conditioning bias in the session builder.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ProgrammeType(str, Enum):
    LOAD_CARRIAGE_ENDURANCE = "load_carriage_endurance"  # P Company, All Arms, selection courses
    PURE_ENDURANCE = "pure_endurance"  # marathon, ultra, long-distance
    STRENGTH = "strength"  # powerlifting, strongman, max strength
    HYBRID = "hybrid"  # general fitness, tactical, cross-training
    POWER_SPEED = "power_speed"  # sprinting, jumping, RFD
    TEAM_SPORT = "team_sport"  # rugby, football, field sports
    COMBAT = "combat"  # boxing, BJJ, MMA
    AEROBIC_FIRST = "aerobic_first"  # triathlon, cycling, swimming


AEROBIC_BIASED = frozenset(
    {ProgrammeType.PURE_ENDURANCE, ProgrammeType.AEROBIC_FIRST, ProgrammeType.LOAD_CARRIAGE_ENDURANCE}
)
STRENGTH_BIASED = frozenset({ProgrammeType.STRENGTH, ProgrammeType.POWER_SPEED})


@dataclass(frozen=True)
class TrainingOption:
    label: str
    programme_type: ProgrammeType
    tag: str = ""


_P = ProgrammeType

TRAINING_TARGET_GROUPS: list[tuple[str, list[TrainingOption]]] = [
    (
        "Military & Selection",
        [
            TrainingOption("P Company (Paras)", _P.LOAD_CARRIAGE_ENDURANCE, "Load carriage · Endurance"),
            TrainingOption("All Arms Commando Course", _P.LOAD_CARRIAGE_ENDURANCE, "Load carriage · Endurance"),
            TrainingOption("Royal Marines Commando", _P.LOAD_CARRIAGE_ENDURANCE, "Load carriage · Endurance"),
            TrainingOption("UKSF Selection", _P.LOAD_CARRIAGE_ENDURANCE, "Load carriage · Endurance"),
            TrainingOption("Infantry Phase 1/2", _P.LOAD_CARRIAGE_ENDURANCE, "Load carriage · Hybrid"),
            TrainingOption("Officer Selection (e.g. AOSB)", _P.HYBRID, "Hybrid · Fitness standards"),
            TrainingOption("Other military / tactical course", _P.LOAD_CARRIAGE_ENDURANCE, "Tactical"),
        ],
    ),
    (
        "Endurance & Running",
        [
            TrainingOption("Marathon", _P.PURE_ENDURANCE, "Aerobic · Threshold"),
            TrainingOption("Half marathon", _P.PURE_ENDURANCE, "Aerobic · Threshold"),
            TrainingOption("10K / 5K", _P.PURE_ENDURANCE, "Aerobic · Speed"),
            TrainingOption("Ultra / trail", _P.PURE_ENDURANCE, "Aerobic · Durability"),
            TrainingOption("Triathlon (sprint / standard)", _P.AEROBIC_FIRST, "Multi-discipline"),
            TrainingOption("Ironman / long-course tri", _P.AEROBIC_FIRST, "Aerobic first"),
            TrainingOption("Cycling (road / sportive)", _P.AEROBIC_FIRST, "Aerobic"),
            TrainingOption("Swimming (distance / open water)", _P.AEROBIC_FIRST, "Aerobic"),
            TrainingOption("Rowing (2K / 5K)", _P.HYBRID, "Hybrid · Power-endurance"),
        ],
    ),
    (
        "Strength & Power",
        [
            TrainingOption("Powerlifting", _P.STRENGTH, "Max strength"),
            TrainingOption("Strongman", _P.STRENGTH, "Strength · Conditioning"),
            TrainingOption("Weightlifting (Olympic)", _P.POWER_SPEED, "Power · RFD"),
            TrainingOption("CrossFit / functional fitness", _P.HYBRID, "Hybrid"),
            TrainingOption("Bodybuilding / hypertrophy", _P.STRENGTH, "Hypertrophy"),
            TrainingOption("Sprinting (track / field)", _P.POWER_SPEED, "Power · Speed"),
            TrainingOption("Jumping / plyometrics", _P.POWER_SPEED, "RFD · Power"),
        ],
    ),
    (
        "Team & Field Sports",
        [
            TrainingOption("Rugby (union / league)", _P.TEAM_SPORT, "Power · Endurance"),
            TrainingOption("Football / soccer", _P.TEAM_SPORT, "Repeat sprint · Aerobic"),
            TrainingOption("Hockey (field)", _P.TEAM_SPORT, "Hybrid"),
            TrainingOption("Basketball", _P.TEAM_SPORT, "Power · Agility"),
            TrainingOption("American football", _P.TEAM_SPORT, "Power · Speed"),
            TrainingOption("Netball", _P.TEAM_SPORT, "Agility · Endurance"),
            TrainingOption("Lacrosse", _P.TEAM_SPORT, "Hybrid"),
        ],
    ),
    (
        "Combat & Martial Arts",
        [
            TrainingOption("Boxing", _P.COMBAT, "Power · Conditioning"),
            TrainingOption("BJJ / grappling", _P.COMBAT, "Strength-endurance"),
            TrainingOption("MMA", _P.COMBAT, "Hybrid · Conditioning"),
            TrainingOption("Judo", _P.COMBAT, "Power · Grips"),
            TrainingOption("Muay Thai / kickboxing", _P.COMBAT, "Power · Conditioning"),
            TrainingOption("Wrestling", _P.COMBAT, "Strength · Power"),
        ],
    ),
    (
        "General & Lifestyle",
        [
            TrainingOption("General fitness", _P.HYBRID, "Hybrid"),
            TrainingOption("Fat loss", _P.HYBRID, "Hybrid · Conditioning"),
            TrainingOption("Hybrid performance (strength + cardio)", _P.HYBRID, "Hybrid"),
            TrainingOption("Long-term health & resilience", _P.HYBRID, "Human-first"),
            TrainingOption("Return from injury / rebuild", _P.HYBRID, "Durability first"),
            TrainingOption("Other (describe in next steps)", _P.HYBRID, "Custom"),
        ],
    ),
]

ALL_TRAINING_OPTIONS: list[TrainingOption] = [opt for _, options in TRAINING_TARGET_GROUPS for opt in options]

_BY_LABEL: dict[str, TrainingOption] = {opt.label.lower(): opt for opt in ALL_TRAINING_OPTIONS}


def find_training_option(goal_label: Optional[str]) -> Optional[TrainingOption]:
    if not goal_label:
        return None
    return _BY_LABEL.get(goal_label.strip().lower())


def programme_type_for_goal(goal_label: Optional[str]) -> ProgrammeType:
    """Case-insensitive goal label lookup. Unknown or empty goals are hybrid."""
    option = find_training_option(goal_label)
    return option.programme_type if option else ProgrammeType.HYBRID


def coerce_programme_type(value: object, goal_label: Optional[str] = None) -> ProgrammeType:
    """Parse a stored programme type, falling back to the goal lookup."""
    if isinstance(value, ProgrammeType):
        return value
    try:
        return ProgrammeType(str(value))
    except ValueError:
        return programme_type_for_goal(goal_label)
