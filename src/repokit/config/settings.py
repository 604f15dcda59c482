# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: repokit
"""
Storage configuration for repokit.

Values are read from ``REPOKIT_STORAGE_*`` environment variables (or a
``.env`` file) through pydantic-settings.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageBackend(str, Enum):
    """Storage engines shipped with repokit."""

    MEMORY = "memory"
    JSON = "json"
    SQL = "sql"


class StorageSettings(BaseSettings):
    """Configuration settings for the storage layer."""

    model_config = SettingsConfigDict(
        env_prefix="REPOKIT_STORAGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    backend: StorageBackend = Field(
        default=StorageBackend.MEMORY, description="Storage engine to use"
    )
    json_path: Path = Field(
        default=Path("repokit.json"),
        description="Document path used by the JSON file engine",
    )
    database_url: str = Field(
        default="sqlite:///repokit.db",
        description="SQLAlchemy database URL used by the SQL engine",
    )
    table_name: str = Field(
        default="repokit_records",
        description="SQL table holding every collection's records",
    )
    echo_sql: bool = Field(default=False, description="Echo SQL statements")

    @field_validator("backend", mode="before")
    @classmethod
    def normalize_backend(cls, v: object) -> object:
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator("table_name")
    @classmethod
    def validate_table_name(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("table_name must not be empty")
        return v

    @classmethod
    def load(cls) -> StorageSettings:
        """Load storage settings from environment variables or defaults."""
        return cls()
