# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: repokit
"""
Scope implementation for the repokit DI system.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, TypeVar, cast

from repokit.di.errors import ContainerDisposedError

if TYPE_CHECKING:
    from types import TracebackType

    from repokit.di.container import Container

T = TypeVar("T")


class Scope:
    """Holds the instances created for one lifetime boundary."""

    def __init__(self, container: Container, parent: Scope | None = None) -> None:
        self.container = container
        self.parent = parent
        self._services: dict[Any, object] = {}
        self._children: list[Scope] = []
        self._disposed = False

    @classmethod
    def singleton(cls, container: Container) -> Scope:
        """Create the root scope with no parent."""
        return cls(container)

    @property
    def root(self) -> Scope:
        scope = self
        while scope.parent is not None:
            scope = scope.parent
        return scope

    @property
    def is_disposed(self) -> bool:
        return self._disposed

    def __enter__(self) -> Scope:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.dispose()

    def _check_not_disposed(self, operation: str) -> None:
        if self._disposed:
            raise ContainerDisposedError(operation=operation, scope_id=str(id(self)))

    def resolve(self, interface: type[T]) -> T:
        """Resolve a service with this scope as the active one."""
        self._check_not_disposed("resolve")
        return cast("T", self.container._resolve_in(interface, self))

    def create_scope(self) -> Scope:
        """Create a nested scope."""
        self._check_not_disposed("create_scope")
        scope = type(self)(self.container, parent=self)
        self._children.append(scope)
        return scope

    def dispose(self) -> None:
        """Dispose of all services in this scope and its children (idempotent)."""
        if self._disposed:
            return
        for child in reversed(self._children):
            child.dispose()
        self._children.clear()
        for service in reversed(list(self._services.values())):
            if service is not self.container:
                _dispose_service(service)
        self._services.clear()
        if self.parent is not None and self in self.parent._children:
            self.parent._children.remove(self)
        self._disposed = True

    def get_service_keys(self) -> list[str]:
        """Get the names of the services cached in this scope."""
        self._check_not_disposed("get_service_keys")
        return [getattr(t, "__name__", str(t)) for t in self._services]


def _dispose_service(service: Any) -> None:
    """Dispose a service if it supports disposal."""
    for name in ("dispose", "close"):
        method = getattr(service, name, None)
        if callable(method):
            method()
            return
