# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: repokit
"""
Entity restoration for the repokit DI container.

Restoration turns a raw record (a plain mapping read from storage) back into
a typed entity. Pydantic models are validated from the mapping; any other
class is constructed by matching its constructor parameters against the
record, falling back to services registered in the container. Dataclass
entities are then validated by pydantic, so values stored in JSON form
(ISO timestamps, lists standing in for tuples) come back with their declared
types.
"""

from __future__ import annotations

import dataclasses
import functools
import inspect
import typing
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, TypeVar

from pydantic import (
    BaseModel,
    PydanticSchemaGenerationError,
    PydanticUndefinedAnnotation,
    TypeAdapter,
    ValidationError,
)

from repokit.di.errors import RestorationError

if TYPE_CHECKING:
    from repokit.di.container import Container

T = TypeVar("T")

_SKIPPED_KINDS = (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)


def restore_entity(
    container: Container, entity_type: type[T], raw: Mapping[str, Any]
) -> T:
    """Build an ``entity_type`` instance from ``raw``.

    Args:
        container: Container used to resolve constructor dependencies
        entity_type: Type to instantiate
        raw: Field name to value mapping

    Returns:
        The restored entity

    Raises:
        RestorationError: If the record cannot be turned into an entity
    """
    if not isinstance(raw, Mapping):
        raise RestorationError(
            entity_type, f"expected a mapping, got {type(raw).__name__}"
        )

    if isinstance(entity_type, type) and issubclass(entity_type, BaseModel):
        try:
            return entity_type.model_validate(dict(raw))
        except ValidationError as exc:
            raise RestorationError(
                entity_type, str(exc), errors=exc.errors(include_url=False)
            ) from exc

    kwargs = _constructor_arguments(container, entity_type, raw)
    adapter = _dataclass_adapter(entity_type)
    try:
        if adapter is not None:
            return adapter.validate_python(kwargs)
        return entity_type(**kwargs)
    except ValidationError as exc:
        raise RestorationError(
            entity_type, str(exc), errors=exc.errors(include_url=False)
        ) from exc
    except Exception as exc:
        raise RestorationError(entity_type, str(exc)) from exc


@functools.cache
def _dataclass_adapter(entity_type: type[Any]) -> TypeAdapter[Any] | None:
    """Return a validating adapter for a dataclass entity, or None.

    Dataclasses with fields pydantic has no schema for (arbitrary service
    objects) are constructed directly instead.
    """
    if not dataclasses.is_dataclass(entity_type):
        return None
    try:
        return TypeAdapter(entity_type)
    except (PydanticSchemaGenerationError, PydanticUndefinedAnnotation):
        return None


def _constructor_arguments(
    container: Container, entity_type: type[Any], raw: Mapping[str, Any]
) -> dict[str, Any]:
    try:
        signature = inspect.signature(entity_type)
    except (TypeError, ValueError) as exc:
        raise RestorationError(entity_type, "constructor is not introspectable") from exc

    hints = _type_hints(entity_type)
    kwargs: dict[str, Any] = {}
    for name, parameter in signature.parameters.items():
        if parameter.kind in _SKIPPED_KINDS:
            continue
        if name in raw:
            kwargs[name] = raw[name]
            continue
        annotation = hints.get(name)
        if isinstance(annotation, type) and container.is_registered(annotation):
            kwargs[name] = container.resolve(annotation)
            continue
        if parameter.default is inspect.Parameter.empty:
            raise RestorationError(
                entity_type, f"missing value for {name!r}", field=name
            )
    return kwargs


def _type_hints(entity_type: type[Any]) -> dict[str, Any]:
    targets: list[Any] = [entity_type.__init__]
    if dataclasses.is_dataclass(entity_type):
        targets.insert(0, entity_type)
    for target in targets:
        try:
            return typing.get_type_hints(target)
        except (NameError, TypeError, AttributeError):
            continue
    return {}
