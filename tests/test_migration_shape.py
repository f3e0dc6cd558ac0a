from pathlib import Path

from alembic import command
from alembic.config import Config
from sqlalchemy import create_engine, inspect

from core.models import Base

ROOT = Path(__file__).resolve().parents[1]
INITIAL = ROOT / "alembic" / "versions" / "20261019_0001_initial.py"


def test_required_tables_present_in_migration():
    text = INITIAL.read_text()
    for t in ("profiles", "session_logs", "programme_decisions"):
        assert f'"{t}"' in text


def test_migrations_avoid_postgres_now_function_for_portability():
    for migration_file in (ROOT / "alembic" / "versions").glob("*.py"):
        text = migration_file.read_text(encoding="utf-8").lower()
        assert "now()" not in text, f"Non-portable now() found in {migration_file.name}"


def test_alembic_upgrade_head_matches_models_on_sqlite(tmp_path, monkeypatch):
    db_path = tmp_path / "migration_smoke.db"
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{db_path}")
    monkeypatch.chdir(ROOT)

    command.upgrade(Config("alembic.ini"), "head")

    inspector = inspect(create_engine(f"sqlite:///{db_path}"))
    tables = set(inspector.get_table_names())
    assert {"profiles", "session_logs", "programme_decisions"} <= tables
    for table in Base.metadata.sorted_tables:
        migrated = {c["name"] for c in inspector.get_columns(table.name)}
        assert migrated == {c.name for c in table.columns}, table.name
