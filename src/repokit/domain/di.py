# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: repokit
"""
Dependency injection registration for repokit.

This module registers the storage layer with a container and builds
repositories from the registered services.
"""

from __future__ import annotations

from typing import TypeVar

from repokit.config import StorageSettings
from repokit.di.container import Container
from repokit.domain.repository import Repository
from repokit.storage.factory import create_storage
from repokit.storage.protocols import StorageProtocol

T = TypeVar("T")


def register_repokit_services(
    container: Container, settings: StorageSettings | None = None
) -> None:
    """
    Register storage services with the DI container.

    Args:
        container: The DI container to register services with
        settings: Storage settings; loaded from the environment if omitted
    """
    settings = settings or StorageSettings.load()
    container.register_singleton(StorageSettings, settings)
    container.register_singleton(
        StorageProtocol, lambda c: create_storage(c.resolve(StorageSettings))
    )
    container.register_singleton(Container, container)


def repository_for(
    container: Container, entity_type: type[T], table_name: str | None = None
) -> Repository[T]:
    """Build a repository for ``entity_type`` over the container's storage."""
    return Repository(
        entity_type,
        container.resolve(StorageProtocol),
        container,
        table_name=table_name,
    )
