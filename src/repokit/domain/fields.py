# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: repokit
"""
Per-type field accessor tables.

Each entity type is resolved once into an ordered table of field name to
getter/setter pair. Proxies and repositories go through this table instead
of looking attributes up by arbitrary strings, so an undeclared name fails
with ``UnknownFieldError`` rather than silently reading or writing an
attribute the type never declared.
"""

from __future__ import annotations

import dataclasses
import functools
import operator
from collections.abc import Callable, Iterator, Mapping
from typing import Any, NamedTuple

from pydantic import BaseModel

from repokit.domain.errors import UnknownFieldError, UnsupportedEntityTypeError

# Attribute names of EntityProxy; a field with one of these names could be
# written through a proxy but never read back through it
RESERVED_FIELD_NAMES = frozenset(
    {
        "dirty_fields",
        "fields",
        "from_map",
        "get",
        "is_dirty",
        "reset_dirty",
        "set",
        "to_map",
        "unwrap",
        "wrap",
    }
)


class FieldAccessor(NamedTuple):
    """Getter/setter pair for one declared field."""

    name: str
    get: Callable[[Any], Any]
    set: Callable[[Any, Any], None]


def _setter(name: str) -> Callable[[Any, Any], None]:
    def set_field(entity: Any, value: Any) -> None:
        setattr(entity, name, value)

    return set_field


class EntityFields(Mapping[str, FieldAccessor]):
    """Ordered, read-only accessor table for one entity type."""

    def __init__(self, entity_type: type, names: tuple[str, ...]) -> None:
        self.entity_type = entity_type
        self._accessors = {
            name: FieldAccessor(name, operator.attrgetter(name), _setter(name))
            for name in names
        }

    def __getitem__(self, name: str) -> FieldAccessor:
        try:
            return self._accessors[name]
        except KeyError:
            raise UnknownFieldError(self.entity_type, name) from None

    def __iter__(self) -> Iterator[str]:
        return iter(self._accessors)

    def __len__(self) -> int:
        return len(self._accessors)

    def __repr__(self) -> str:
        return f"EntityFields({self.entity_type.__name__}, {list(self._accessors)})"

    def read(self, entity: Any, name: str) -> Any:
        return self[name].get(entity)

    def write(self, entity: Any, name: str, value: Any) -> None:
        self[name].set(entity, value)


@functools.cache
def entity_fields(entity_type: type) -> EntityFields:
    """Return the accessor table for ``entity_type``, building it on first use.

    Raises:
        UnsupportedEntityTypeError: If the type is neither a pydantic model
            nor a dataclass, or declares a field whose name is reserved by
            the proxy or starts with an underscore
    """
    if isinstance(entity_type, type) and issubclass(entity_type, BaseModel):
        names = tuple(entity_type.model_fields)
    elif dataclasses.is_dataclass(entity_type) and isinstance(entity_type, type):
        names = tuple(field.name for field in dataclasses.fields(entity_type))
    else:
        raise UnsupportedEntityTypeError(entity_type)

    clashing = sorted(
        name for name in names if name in RESERVED_FIELD_NAMES or name.startswith("_")
    )
    if clashing:
        raise UnsupportedEntityTypeError(
            entity_type,
            message=f"{entity_type.__name__} declares reserved field names: {clashing}",
            fields=clashing,
        )
    return EntityFields(entity_type, names)
