"""Exercise display names and short demo clips for every key the builder emits."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

CLIP_SECONDS = 30


@dataclass(frozen=True)
class ExerciseVideo:
    video_id: str
    label: str
    start_seconds: int = 0
    end_seconds: int = CLIP_SECONDS


EXERCISE_DISPLAY_NAMES: dict[str, str] = {
    "back_squat": "Back Squat",
    "bench_press": "Bench Press",
    "deadlift": "Deadlift",
    "overhead_press": "Overhead Press",
    "weighted_pullup": "Weighted Pull-Up",
    "weighted_pull_up": "Weighted Pull-Up",
    "trap_bar_deadlift": "Trap Bar Deadlift",
    "hip_thrust": "Hip Thrust",
    "split_squat": "Rear-Foot Elevated Split Squat",
    "rdl": "Romanian Deadlift",
    "power_clean": "Power Clean",
    "db_press": "Dumbbell Press",
    "med_ball_rotational_throw": "Med Ball Rotational Throw",
    "side_plank": "Side Plank",
    "loaded_march": "Loaded March",
    "loaded_carry": "Loaded Carry",
    "jump_rope": "Jump Rope",
    "dynamic_mobility": "Dynamic Mobility",
    "pogos": "Pogos",
    "broad_jump": "Broad Jump",
    "bike": "Bike / Cycling",
    "zone1": "Zone 1 Cardio",
    "zone2": "Zone 2 Conditioning",
    "mobility_circuits": "Mobility Circuits",
    "parasympathetic_breathing": "Recovery Breathing",
    "threshold_intervals": "Threshold Intervals",
}

EXERCISE_VIDEOS: dict[str, ExerciseVideo] = {
    "back_squat": ExerciseVideo("BeM2oyJ0W0E", "Back Squat"),
    "power_clean": ExerciseVideo("p2ytaRB3l1E", "Power Clean"),
    "weighted_pull_up": ExerciseVideo("eGo4IYlbE5g", "Weighted Pull-Up"),
    "loaded_carry": ExerciseVideo("pSHjTRCQxIw", "Loaded Carry"),
    "split_squat": ExerciseVideo("ggjWqAi0AAc", "Split Squat"),
    "db_press": ExerciseVideo("VKIGahyqO2s", "Dumbbell Press"),
    "rdl": ExerciseVideo("eHLuROg0FSI", "RDL"),
    "med_ball_rotational_throw": ExerciseVideo("lPt8hGynNn0", "Med Ball Rotational Throw"),
    "side_plank": ExerciseVideo("K2VljzCC16g", "Side Plank"),
    "loaded_march": ExerciseVideo("pSHjTRCQxIw", "Loaded March"),
    "jump_rope": ExerciseVideo("cfnqZhB0dEM", "Jump Rope"),
    "dynamic_mobility": ExerciseVideo("gL145LmJRvM", "Dynamic Mobility"),
    "pogos": ExerciseVideo("_XJyhqPS-PI", "Pogos"),
    "broad_jump": ExerciseVideo("T3Npnu7kGgg", "Broad Jump"),
    "bike": ExerciseVideo("Mn3L5VwLvnc", "Bike / Cycling"),
    "zone1": ExerciseVideo("Mn3L5VwLvnc", "Zone 1 Cardio"),
    "mobility_circuits": ExerciseVideo("gL145LmJRvM", "Mobility Circuits"),
    "parasympathetic_breathing": ExerciseVideo("pSHjTRCQxIw", "Recovery Breathing"),
    "threshold_intervals": ExerciseVideo("Mn3L5VwLvnc", "Threshold Intervals"),
    "zone2": ExerciseVideo("Mn3L5VwLvnc", "Zone 2 Conditioning"),
}


def display_name(key: str) -> str:
    return EXERCISE_DISPLAY_NAMES.get(key) or key.replace("_", " ").title()


def exercise_video(key: str) -> Optional[ExerciseVideo]:
    return EXERCISE_VIDEOS.get(key)


def exercise_videos(keys: list[str]) -> list[ExerciseVideo]:
    """Videos for the given keys in order, skipping keys without a clip."""
    return [EXERCISE_VIDEOS[k] for k in keys if k in EXERCISE_VIDEOS]
