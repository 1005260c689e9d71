"""Tests for Alembic migrations."""

from __future__ import annotations

import sqlite3

import pytest
from alembic import command
from alembic.config import Config

from qanda.store.models import Base


@pytest.fixture
def alembic_config(tmp_path):
    """Create an Alembic config pointing to a temp SQLite DB."""
    db_path = tmp_path / "test.db"
    cfg = Config("alembic.ini")
    cfg.set_main_option("sqlalchemy.url", f"sqlite:///{db_path}")
    return cfg, db_path


def _columns(db_path, table: str) -> set[str]:
    conn = sqlite3.connect(str(db_path))
    columns = {row[1] for row in conn.execute(f"PRAGMA table_info({table})")}
    conn.close()
    return columns


class TestMigrations:
    def test_upgrade_to_001(self, alembic_config) -> None:
        cfg, db_path = alembic_config
        command.upgrade(cfg, "001")

        conn = sqlite3.connect(str(db_path))
        cursor = conn.cursor()
        cursor.execute("SELECT name FROM sqlite_master WHERE type='table'")
        tables = {row[0] for row in cursor.fetchall()}
        conn.close()

        assert {"questions", "answers", "question_votes", "answer_votes"} <= tables

    def test_schema_matches_models(self, alembic_config) -> None:
        cfg, db_path = alembic_config
        command.upgrade(cfg, "head")

        for name, table in Base.metadata.tables.items():
            assert _columns(db_path, name) == {c.name for c in table.columns}

    def test_downgrade_to_base(self, alembic_config) -> None:
        cfg, db_path = alembic_config
        command.upgrade(cfg, "head")
        command.downgrade(cfg, "base")

        conn = sqlite3.connect(str(db_path))
        cursor = conn.cursor()
        cursor.execute("SELECT name FROM sqlite_master WHERE type='table'")
        tables = {row[0] for row in cursor.fetchall()}
        conn.close()

        assert tables <= {"alembic_version"}
