"""initial schema: profiles, session logs, programme decisions"""

from alembic import op
import sqlalchemy as sa


revision = "20261019_0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "profiles",
        sa.Column("id", sa.String(length=64), primary_key=True),
        sa.Column("goal", sa.String(length=120), nullable=True),
        sa.Column("sport", sa.String(length=120), nullable=True),
        sa.Column("experience", sa.String(length=40), nullable=True),
        sa.Column("equipment", sa.String(length=80), nullable=True),
        sa.Column("days_per_week", sa.Integer(), nullable=True),
        sa.Column("minutes_per_session", sa.Integer(), nullable=True),
        sa.Column("programme_type", sa.String(length=40), nullable=True),
        sa.Column("aerobic_score", sa.Integer(), nullable=True),
        sa.Column("strength_upper", sa.Integer(), nullable=True),
        sa.Column("strength_lower", sa.Integer(), nullable=True),
        sa.Column("mobility_score", sa.Integer(), nullable=True),
        sa.Column("sleep_score", sa.Integer(), nullable=True),
        sa.Column("stress_level", sa.Integer(), nullable=True),
        sa.Column("readiness_score", sa.Integer(), nullable=True),
        sa.Column("fatigue_score", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("momentum", sa.String(length=20), nullable=True),
        sa.Column("primary_limiter", sa.String(length=20), nullable=True),
        sa.Column("current_week", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("deload_active", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("checkin_date", sa.Date(), nullable=True),
        sa.Column("checkin_readiness", sa.Integer(), nullable=True),
        sa.Column("checkin_feel", sa.String(length=10), nullable=True),
        sa.Column("checkin_energy", sa.String(length=10), nullable=True),
        sa.Column("checkin_sleep", sa.String(length=10), nullable=True),
        sa.Column("checkin_pain", sa.String(length=10), nullable=True),
        sa.Column("checkin_pain_location", sa.String(length=200), nullable=True),
        sa.Column("performance_benchmarks", sa.JSON(), nullable=False, server_default="{}"),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.text("CURRENT_TIMESTAMP")),
        sa.Column("updated_at", sa.DateTime(), nullable=False, server_default=sa.text("CURRENT_TIMESTAMP")),
        sa.CheckConstraint("current_week >= 1", name="ck_profiles_current_week"),
        sa.CheckConstraint("fatigue_score >= 0", name="ck_profiles_fatigue_nonneg"),
    )

    op.create_table(
        "session_logs",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("profile_id", sa.String(length=64), sa.ForeignKey("profiles.id"), nullable=False),
        sa.Column("week", sa.Integer(), nullable=False),
        sa.Column("session_name", sa.String(length=120), nullable=False),
        sa.Column("perceived_exertion", sa.Integer(), nullable=True),
        sa.Column("completed", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.text("CURRENT_TIMESTAMP")),
        sa.CheckConstraint(
            "perceived_exertion IS NULL OR (perceived_exertion >= 1 AND perceived_exertion <= 10)",
            name="ck_session_logs_rpe_range",
        ),
    )
    op.create_index("ix_session_logs_profile_id", "session_logs", ["profile_id"])
    op.create_index("ix_session_logs_profile_created", "session_logs", ["profile_id", "created_at"])

    op.create_table(
        "programme_decisions",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("profile_id", sa.String(length=64), sa.ForeignKey("profiles.id"), nullable=False),
        sa.Column("decision_type", sa.String(length=40), nullable=False),
        sa.Column("adjustment_made", sa.String(length=200), nullable=False),
        sa.Column("explanation", sa.Text(), nullable=False),
        sa.Column("trigger_variables", sa.JSON(), nullable=False, server_default="{}"),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.text("CURRENT_TIMESTAMP")),
    )
    op.create_index("ix_programme_decisions_profile_id", "programme_decisions", ["profile_id"])
    op.create_index("ix_programme_decisions_profile_created", "programme_decisions", ["profile_id", "created_at"])


def downgrade() -> None:
    op.drop_index("ix_programme_decisions_profile_created", table_name="programme_decisions")
    op.drop_index("ix_programme_decisions_profile_id", table_name="programme_decisions")
    op.drop_table("programme_decisions")
    op.drop_index("ix_session_logs_profile_created", table_name="session_logs")
    op.drop_index("ix_session_logs_profile_id", table_name="session_logs")
    op.drop_table("session_logs")
    op.drop_table("profiles")
