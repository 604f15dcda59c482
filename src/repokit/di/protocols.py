# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: repokit
"""
Protocol definitions for the repokit DI system.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from enum import Enum
from typing import Any, Protocol, TypeVar, runtime_checkable

T = TypeVar("T")


class ServiceLifetime(str, Enum):
    """Service lifetime options for dependency injection."""

    SINGLETON = "singleton"
    SCOPED = "scoped"
    TRANSIENT = "transient"


ServiceFactoryProtocol = Callable[["ContainerProtocol"], T]


@runtime_checkable
class RestorerProtocol(Protocol):
    """Anything able to rebuild a typed entity from a raw record."""

    def restore(self, entity_type: type[T], raw: Mapping[str, Any]) -> T:
        """Construct an ``entity_type`` instance from ``raw``."""
        ...


@runtime_checkable
class ContainerProtocol(RestorerProtocol, Protocol):
    """Protocol for dependency injection containers."""

    def register_singleton(
        self,
        interface: type[T],
        implementation: type[T] | ServiceFactoryProtocol[T] | T,
        replace: bool = False,
    ) -> None: ...

    def register_scoped(
        self,
        interface: type[T],
        implementation: type[T] | ServiceFactoryProtocol[T] | T,
        replace: bool = False,
    ) -> None: ...

    def register_transient(
        self,
        interface: type[T],
        implementation: type[T] | ServiceFactoryProtocol[T] | T,
        replace: bool = False,
    ) -> None: ...

    def resolve(self, interface: type[T]) -> T: ...

    def resolve_optional(self, interface: type[T]) -> T | None: ...

    def is_registered(self, interface: type[Any]) -> bool: ...
