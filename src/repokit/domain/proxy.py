# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: repokit
"""
Change-tracking proxy around a single entity.

Writes made through an ``EntityProxy`` go straight to the wrapped entity and
record the field name in a dirty set. Repositories consult that state to
skip storage writes for entities that have not changed.

Tracking is shallow: mutating a nested object or collection in place does
not mark its field dirty; assign the field again through the proxy instead.

The proxy's own attribute names (see ``RESERVED_FIELD_NAMES``) cannot be
used as entity field names.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from repokit.domain.fields import EntityFields, entity_fields

if TYPE_CHECKING:
    from repokit.di.protocols import RestorerProtocol

T = TypeVar("T")


class EntityProxy(Generic[T]):
    """Wraps one entity and records which of its fields were written."""

    def __init__(self, entity: T, dirty: bool = False) -> None:
        """Wrap ``entity``.

        Args:
            entity: The entity to track; the reference never changes
            dirty: Start with every declared field marked dirty, for callers
                that know the entity differs from its persisted form
        """
        fields = entity_fields(type(entity))
        object.__setattr__(self, "_entity", entity)
        object.__setattr__(self, "_fields", fields)
        object.__setattr__(
            self, "_dirty_fields", set(fields) if dirty else set()
        )
        object.__setattr__(self, "_dirty", dirty)

    @classmethod
    def wrap(cls, entity: T, dirty: bool = False) -> EntityProxy[T]:
        return cls(entity, dirty=dirty)

    @classmethod
    def from_map(
        cls,
        entity_type: type[T],
        raw: Mapping[str, Any],
        restorer: RestorerProtocol,
    ) -> EntityProxy[T]:
        """Restore an entity from a raw record and wrap it clean."""
        return cls(restorer.restore(entity_type, raw))

    @property
    def fields(self) -> EntityFields:
        return self._fields

    @property
    def is_dirty(self) -> bool:
        return self._dirty

    @property
    def dirty_fields(self) -> frozenset[str]:
        return frozenset(self._dirty_fields)

    def get(self, name: str) -> Any:
        """Read a declared field; has no effect on dirty state."""
        return self._fields.read(self._entity, name)

    def set(self, name: str, value: Any) -> None:
        """Write a declared field through to the entity and mark it dirty."""
        self._fields.write(self._entity, name, value)
        self._dirty_fields.add(name)
        object.__setattr__(self, "_dirty", True)

    def reset_dirty(self) -> None:
        """Forget pending changes after a successful persisted write."""
        self._dirty_fields.clear()
        object.__setattr__(self, "_dirty", False)

    def to_map(self) -> dict[str, Any]:
        """Return every declared field and its current value, in declaration order."""
        entity = self._entity
        return {name: accessor.get(entity) for name, accessor in self._fields.items()}

    def unwrap(self) -> T:
        return self._entity

    def __getattr__(self, name: str) -> Any:
        # Only reached when normal lookup fails
        if name.startswith("_"):
            raise AttributeError(name)
        return getattr(self._entity, name)

    def __setattr__(self, name: str, value: Any) -> None:
        if name.startswith("_"):
            object.__setattr__(self, name, value)
        else:
            self.set(name, value)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, EntityProxy):
            other = other.unwrap()
        return self._entity == other

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        state = "dirty" if self._dirty else "clean"
        return f"EntityProxy({self._entity!r}, {state})"
