# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: repokit
"""
Storage construction from settings.
"""

from __future__ import annotations

from repokit.config import StorageBackend, StorageSettings
from repokit.storage.json_file import JsonFileStorage
from repokit.storage.memory import InMemoryStorage
from repokit.storage.protocols import StorageProtocol
from repokit.storage.sql import SqlAlchemyStorage


def create_storage(settings: StorageSettings | None = None) -> StorageProtocol:
    """Build the storage engine selected by ``settings.backend``.

    Args:
        settings: Storage settings; loaded from the environment if omitted

    Returns:
        A ready-to-use storage engine
    """
    settings = settings or StorageSettings.load()
    match settings.backend:
        case StorageBackend.MEMORY:
            return InMemoryStorage()
        case StorageBackend.JSON:
            return JsonFileStorage(settings.json_path)
        case StorageBackend.SQL:
            return SqlAlchemyStorage(
                settings.database_url,
                table_name=settings.table_name,
                echo=settings.echo_sql,
            )
    raise ValueError(f"Unsupported storage backend: {settings.backend}")
