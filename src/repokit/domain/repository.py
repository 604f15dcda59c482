# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: repokit
"""Repository pattern implementation for domain entities.

A ``Repository`` exposes query and mutation operations over one named
collection. Raw I/O is delegated to a storage engine and raw records are
turned back into entities by the container's restore operation. Every query
reads storage afresh; nothing is cached between calls.
"""

from __future__ import annotations

import functools
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from repokit.domain.errors import InvalidTypeNameError, MissingIdentityError
from repokit.domain.fields import entity_fields
from repokit.domain.naming import qualified_name, table_name_for
from repokit.domain.proxy import EntityProxy
from repokit.logging import get_logger

if TYPE_CHECKING:
    from repokit.di.protocols import RestorerProtocol
    from repokit.domain.entity import EntityId
    from repokit.logging.protocols import LoggerProtocol
    from repokit.storage.protocols import StorageProtocol

T = TypeVar("T")

Predicate = Callable[[T], bool]


def _strict_equal(left: Any, right: Any) -> bool:
    # No coercion: 1 != "1", 1 != True, 1 != 1.0
    return type(left) is type(right) and left == right


class Repository(Generic[T]):
    """Query and mutate one collection of ``entity_type`` records.

    The repository shares, and never disposes, its storage and container.
    """

    def __init__(
        self,
        entity_type: type[T],
        storage: StorageProtocol,
        container: RestorerProtocol,
        table_name: str | None = None,
        logger: LoggerProtocol | None = None,
    ) -> None:
        """Initialize the repository.

        Args:
            entity_type: The entity class this repository restores
            storage: Storage engine holding the raw records
            container: Restores entities from raw records
            table_name: Collection name; derived from ``entity_type`` if omitted
            logger: Optional logger instance. If not provided, a default one will be created.

        Raises:
            InvalidTypeNameError: If the table name must be derived and the
                type name is not fully qualified, or if it is empty
        """
        if table_name is None:
            table_name = table_name_for(entity_type)
        elif not table_name:
            raise InvalidTypeNameError(
                qualified_name(entity_type), message="Table name must not be empty"
            )

        self._entity_type = entity_type
        self._storage = storage
        self._container = container
        self._table_name = table_name
        self._logger = logger or get_logger(f"repokit.repository.{table_name}")

    @property
    def entity_type(self) -> type[T]:
        return self._entity_type

    @property
    def table_name(self) -> str:
        return self._table_name

    @property
    def storage(self) -> StorageProtocol:
        return self._storage

    @property
    def container(self) -> RestorerProtocol:
        return self._container

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def find_all(self) -> list[T]:
        """Restore every record of the collection, in storage order."""
        records = self._storage.all(self._table_name)
        self._logger.debug(
            "Loaded records", table=self._table_name, count=len(records)
        )
        return [self._container.restore(self._entity_type, raw) for raw in records]

    def first(self, predicate: Predicate[T] | None = None) -> T | None:
        """Return the first entity matching ``predicate`` (or the first at all)."""
        for entity in self.find_all():
            if predicate is None or predicate(entity):
                return entity
        return None

    def any(self, predicate: Predicate[T] | None = None) -> bool:
        return self.first(predicate) is not None

    def where(self, predicate: Predicate[T]) -> list[T]:
        return [entity for entity in self.find_all() if predicate(entity)]

    def contains(self, value: T) -> bool:
        return value in self.find_all()

    def find(self, id: EntityId) -> T | None:
        """Return the entity whose unique id equals ``id`` (same type, no coercion)."""
        return self.first(lambda entity: _strict_equal(entity.get_unique_id(), id))

    def find_by(self, field: str, value: Any) -> T | None:
        """Return the first entity whose ``field`` equals ``value`` (same type, no coercion).

        Raises:
            UnknownFieldError: If the entity type declares no such field
        """
        accessor = entity_fields(self._entity_type)[field]
        return self.first(lambda entity: _strict_equal(accessor.get(entity), value))

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def track(self, entity: T) -> EntityProxy[T]:
        """Start tracking changes to ``entity`` across several calls."""
        return EntityProxy(entity)

    @functools.singledispatchmethod
    def add(self, entity: T) -> None:
        """Insert ``entity``; dirty state is never consulted."""
        self._add(EntityProxy(entity))

    @add.register(EntityProxy)
    def _add_tracked(self, entity: EntityProxy[T]) -> None:
        self._add(entity)

    def _add(self, proxy: EntityProxy[T]) -> None:
        self._storage.add(self._table_name, proxy.to_map())
        self._logger.debug(
            "Added entity", table=self._table_name, id=proxy.get_unique_id()
        )

    @functools.singledispatchmethod
    def update(self, entity: T) -> None:
        """Write ``entity`` back; an untracked entity is always treated as changed."""
        self._update(EntityProxy(entity, dirty=True))

    @update.register(EntityProxy)
    def _update_tracked(self, entity: EntityProxy[T]) -> None:
        self._update(entity)

    def _update(self, proxy: EntityProxy[T]) -> None:
        unique_id = proxy.get_unique_id()
        if not proxy.is_dirty:
            self._logger.debug(
                "Skipped update of clean entity", table=self._table_name, id=unique_id
            )
            return

        key = self._storage_key(unique_id, "update")
        # A failing write leaves the proxy dirty so the update can be retried
        self._storage.set(self._table_name, key, proxy.to_map())
        self._logger.debug(
            "Updated entity",
            table=self._table_name,
            id=unique_id,
            fields=sorted(proxy.dirty_fields),
        )
        proxy.reset_dirty()

    def delete(self, entity: T | EntityProxy[T]) -> None:
        """Remove ``entity`` unconditionally."""
        unique_id = entity.get_unique_id()
        self._storage.delete(self._table_name, self._storage_key(unique_id, "delete"))
        self._logger.debug("Deleted entity", table=self._table_name, id=unique_id)

    def _storage_key(self, unique_id: EntityId | None, operation: str) -> str:
        if unique_id is None:
            raise MissingIdentityError(self._entity_type, operation)
        return str(unique_id)

    def __repr__(self) -> str:
        return f"Repository({self._entity_type.__name__}, table={self._table_name!r})"
