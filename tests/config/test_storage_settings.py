from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from repokit.config import StorageBackend, StorageSettings


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    # Keep a developer's .env file out of the picture
    monkeypatch.chdir(tmp_path)
    for name in ("BACKEND", "JSON_PATH", "DATABASE_URL", "TABLE_NAME", "ECHO_SQL"):
        monkeypatch.delenv(f"REPOKIT_STORAGE_{name}", raising=False)


def test_defaults() -> None:
    settings = StorageSettings.load()

    assert settings.backend is StorageBackend.MEMORY
    assert settings.json_path == Path("repokit.json")
    assert settings.database_url == "sqlite:///repokit.db"
    assert settings.table_name == "repokit_records"
    assert settings.echo_sql is False


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("REPOKIT_STORAGE_BACKEND", " SQL ")
    monkeypatch.setenv("REPOKIT_STORAGE_DATABASE_URL", "sqlite:///other.db")
    monkeypatch.setenv("REPOKIT_STORAGE_ECHO_SQL", "1")

    settings = StorageSettings.load()

    assert settings.backend is StorageBackend.SQL
    assert settings.database_url == "sqlite:///other.db"
    assert settings.echo_sql is True


def test_dotenv_file(tmp_path: Path) -> None:
    (tmp_path / ".env").write_text(
        "REPOKIT_STORAGE_BACKEND=json\nREPOKIT_STORAGE_JSON_PATH=data/store.json\n",
        encoding="utf-8",
    )

    settings = StorageSettings.load()

    assert settings.backend is StorageBackend.JSON
    assert settings.json_path == Path("data/store.json")


def test_unknown_backend() -> None:
    with pytest.raises(ValidationError):
        StorageSettings(backend="mongo")


def test_blank_table_name() -> None:
    with pytest.raises(ValidationError, match="table_name must not be empty"):
        StorageSettings(table_name="  ")
