# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: repokit
"""
domain.protocols
Domain protocols for repokit
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Generic, Protocol, TypeVar

from repokit.domain.entity import EntityId

T = TypeVar("T")


class RepositoryProtocol(Protocol, Generic[T]):
    """Protocol defining the standard interface for a repository.

    A repository manages the persistence of one entity type in one named
    collection: it restores entities for queries and serializes them for
    writes.
    """

    @property
    def table_name(self) -> str: ...

    def find_all(self) -> list[T]:
        """Restore every entity in the collection."""
        ...

    def first(self, predicate: Callable[[T], bool] | None = None) -> T | None: ...

    def any(self, predicate: Callable[[T], bool] | None = None) -> bool: ...

    def where(self, predicate: Callable[[T], bool]) -> list[T]: ...

    def contains(self, value: T) -> bool: ...

    def find(self, id: EntityId) -> T | None:
        """Retrieve an entity by its unique id.

        Args:
            id: The identifier of the entity to retrieve

        Returns:
            The entity if found, None otherwise
        """
        ...

    def find_by(self, field: str, value: Any) -> T | None: ...

    def add(self, entity: T) -> None:
        """Add a new entity to the repository."""
        ...

    def update(self, entity: T) -> None:
        """Write an existing entity back when it has pending changes."""
        ...

    def delete(self, entity: T) -> None:
        """Remove an entity from the repository."""
        ...
