"""Local development seeder.

Runs migrations, then creates a demo profile by pushing a canned intake through
the same scoring path the API uses, with a few benchmarks so prescriptions
show kilograms.
"""
from __future__ import annotations

import os
from datetime import date

from alembic import command
from alembic.config import Config

from core.db import session_scope
from core.services.intake import build_intake_profile
from core.services.profile_store import fetch_profile, save_benchmarks, upsert_intake_profile
from core.validators import BenchmarkEntryInput, BenchmarkUpdateInput, SelectAnswer, TextAnswer

DEMO_PROFILE_ID = os.getenv("SEED_PROFILE_ID", "00000000-0000-0000-0000-000000000001")

DEMO_ANSWERS = [
    SelectAnswer(question_id="goal", option="Hybrid performance (strength + cardio)"),
    TextAnswer(question_id="sport", text="Hyrox"),
    SelectAnswer(question_id="experience", option="Intermediate"),
    SelectAnswer(question_id="days_per_week", option="4"),
    SelectAnswer(question_id="minutes_per_session", option="60"),
    SelectAnswer(question_id="equipment", option="Full gym"),
    SelectAnswer(question_id="aerobic", option="20-40 minutes"),
    SelectAnswer(question_id="strength_upper", option="10-20"),
    SelectAnswer(question_id="strength_lower", option="About bodyweight"),
    SelectAnswer(question_id="mobility", option="Shins"),
    SelectAnswer(question_id="sleep", option="7-8"),
    SelectAnswer(question_id="stress", option="Moderate"),
]

DEMO_BENCHMARKS = BenchmarkUpdateInput(
    exercise_benchmarks={
        "back_squat": BenchmarkEntryInput(one_rm=120),
        "weighted_pullup": BenchmarkEntryInput(estimated_one_rm=20),
        "deadlift": BenchmarkEntryInput(one_rm=160),
    },
    aerobic_benchmarks={"five_k_time": 1410},
)


def run_migrations() -> None:
    cfg = Config("alembic.ini")
    command.upgrade(cfg, "head")


def seed_demo_profile() -> None:
    with session_scope() as s:
        if fetch_profile(s, DEMO_PROFILE_ID) is not None:
            return
        upsert_intake_profile(s, DEMO_PROFILE_ID, build_intake_profile(DEMO_ANSWERS))
        save_benchmarks(s, DEMO_PROFILE_ID, DEMO_BENCHMARKS, date.today())


def main() -> None:
    run_migrations()
    seed_demo_profile()
    print("Seeding complete")


if __name__ == "__main__":
    main()
