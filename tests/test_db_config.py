"""
tests/test_db_config.py

Database URL resolution and .env loading.
"""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from db.config import (
    load_database_settings,
    load_env_files,
    normalize_database_url,
    resolve_database_url,
)

_URL_VARS = ("DATABASE_URL", "CLOUD_DATABASE_URL", "LOCAL_DATABASE_URL", "ENVIRONMENT")


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch) -> None:
    for name in _URL_VARS + ("DB_POOL_SIZE", "SQL_ECHO"):
        monkeypatch.delenv(name, raising=False)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("postgres://u:p@h/db", "postgresql+psycopg://u:p@h/db"),
        ("postgresql://u:p@h/db", "postgresql+psycopg://u:p@h/db"),
        ("postgresql+psycopg2://u:p@h/db", "postgresql+psycopg://u:p@h/db"),
        ("postgresql+psycopg://u:p@h/db", "postgresql+psycopg://u:p@h/db"),
        ("sqlite:///local.db", "sqlite:///local.db"),
    ],
)
def test_normalize_database_url(raw: str, expected: str) -> None:
    assert normalize_database_url(raw) == expected


def test_direct_url_wins(monkeypatch) -> None:
    monkeypatch.setenv("DATABASE_URL", "postgres://direct/db")
    monkeypatch.setenv("LOCAL_DATABASE_URL", "postgres://local/db")

    assert resolve_database_url() == "postgresql+psycopg://direct/db"


def test_cloud_url_only_in_cloud_environments(monkeypatch) -> None:
    monkeypatch.setenv("CLOUD_DATABASE_URL", "postgres://cloud/db")
    monkeypatch.setenv("LOCAL_DATABASE_URL", "postgres://local/db")

    assert resolve_database_url() == "postgresql+psycopg://local/db"

    monkeypatch.setenv("ENVIRONMENT", "Production")
    assert resolve_database_url() == "postgresql+psycopg://cloud/db"


def test_missing_url_raises() -> None:
    with pytest.raises(RuntimeError, match="No database URL configured"):
        resolve_database_url()


def test_settings_read_pool_options(monkeypatch) -> None:
    monkeypatch.setenv("DATABASE_URL", "postgresql://h/db")
    monkeypatch.setenv("DB_POOL_SIZE", "not-a-number")
    monkeypatch.setenv("SQL_ECHO", "yes")

    settings = load_database_settings()

    assert settings.is_postgres
    assert settings.pool_size == 5
    assert settings.echo is True


def test_load_env_files_keeps_existing_values(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("LOCAL_DATABASE_URL", "postgres://from-process/db")
    monkeypatch.delenv("CSV_TEST_FLAG", raising=False)
    (tmp_path / ".env").write_text(
        "# comment\n"
        "export CSV_TEST_FLAG='on'\n"
        "LOCAL_DATABASE_URL=postgres://from-file/db\n"
        "not a pair\n",
        encoding="utf-8",
    )

    load_env_files(tmp_path)

    assert os.environ["CSV_TEST_FLAG"] == "on"
    assert os.environ["LOCAL_DATABASE_URL"] == "postgres://from-process/db"
    monkeypatch.delenv("CSV_TEST_FLAG")
