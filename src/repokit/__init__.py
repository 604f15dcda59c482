# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: repokit

"""
repokit: typed repositories with change tracking over pluggable storage.
"""

from __future__ import annotations

from repokit.config import StorageBackend, StorageSettings
from repokit.di import Container, RestorationError
from repokit.domain import (
    Entity,
    EntityProxy,
    InvalidTypeNameError,
    MissingIdentityError,
    Repository,
    UnknownFieldError,
    derive_table_name,
)
from repokit.domain.di import register_repokit_services, repository_for
from repokit.storage import (
    InMemoryStorage,
    JsonFileStorage,
    SqlAlchemyStorage,
    StorageError,
    StorageProtocol,
    create_storage,
)

__version__ = "0.1.0"

__all__ = [
    "Container",
    "Entity",
    "EntityProxy",
    "InMemoryStorage",
    "InvalidTypeNameError",
    "JsonFileStorage",
    "MissingIdentityError",
    "Repository",
    "RestorationError",
    "SqlAlchemyStorage",
    "StorageBackend",
    "StorageError",
    "StorageProtocol",
    "StorageSettings",
    "UnknownFieldError",
    "create_storage",
    "derive_table_name",
    "register_repokit_services",
    "repository_for",
]
