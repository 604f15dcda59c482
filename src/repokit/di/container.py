# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: repokit
"""
DI container implementation for repokit.

This module implements the DI container that provides service registration,
resolution and entity restoration.
"""

from __future__ import annotations

import contextlib
import contextvars
from collections.abc import Generator, Mapping
from typing import TYPE_CHECKING, Any, TypeVar, cast

from repokit.di.errors import (
    CircularDependencyError,
    ContainerDisposedError,
    DIError,
    DuplicateRegistrationError,
    ScopeError,
    ServiceCreationError,
    ServiceNotRegisteredError,
)
from repokit.di.protocols import ServiceLifetime
from repokit.di.registration import ServiceRegistration
from repokit.di.resolution import Scope
from repokit.di.restoration import restore_entity
from repokit.logging import get_logger

if TYPE_CHECKING:
    from repokit.domain.repository import Repository
    from repokit.logging.protocols import LoggerProtocol

T = TypeVar("T")

# Context variable for dependency chain tracking
_DI_DEPENDENCY_CHAIN: contextvars.ContextVar[tuple[str, ...]] = contextvars.ContextVar(
    "_DI_DEPENDENCY_CHAIN", default=()
)


class Container:
    """Dependency Injection container for managing service lifetimes.

    This container supports three service lifetimes:
    - Singleton: One instance per container
    - Scoped: One instance per scope
    - Transient: New instance per resolution

    It also restores typed entities from raw storage records, resolving
    constructor dependencies from its own registrations.
    """

    def __init__(self, logger: LoggerProtocol | None = None) -> None:
        self._singleton_scope = Scope.singleton(self)
        self._current_scope: Scope | None = None
        self._registrations: dict[Any, ServiceRegistration[Any]] = {}
        self._disposed = False
        self._logger = logger or get_logger("repokit.di.container")

    def _check_not_disposed(self, operation: str) -> None:
        if self._disposed:
            raise ContainerDisposedError(operation=operation)

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register_singleton(
        self, interface: type[T], implementation: Any, replace: bool = False
    ) -> None:
        self._register(interface, implementation, ServiceLifetime.SINGLETON, replace)

    def register_scoped(
        self, interface: type[T], implementation: Any, replace: bool = False
    ) -> None:
        self._register(interface, implementation, ServiceLifetime.SCOPED, replace)

    def register_transient(
        self, interface: type[T], implementation: Any, replace: bool = False
    ) -> None:
        self._register(interface, implementation, ServiceLifetime.TRANSIENT, replace)

    def _register(
        self,
        interface: type[Any],
        implementation: Any,
        lifetime: ServiceLifetime,
        replace: bool,
    ) -> None:
        self._check_not_disposed("register")
        if interface in self._registrations:
            if not replace:
                raise DuplicateRegistrationError(interface)
            self._forget_instances(interface)
        self._registrations[interface] = ServiceRegistration(
            interface, implementation, lifetime
        )
        self._logger.debug(
            "Registered service",
            service_type=getattr(interface, "__name__", str(interface)),
            lifetime=lifetime.value,
        )

    def _forget_instances(self, interface: Any) -> None:
        scope: Scope | None = self._current_scope
        while scope is not None:
            scope._services.pop(interface, None)
            scope = scope.parent
        self._singleton_scope._services.pop(interface, None)

    def is_registered(self, interface: type[Any]) -> bool:
        return interface in self._registrations

    def get_registration_keys(self) -> list[str]:
        """Get the names of all registered services."""
        self._check_not_disposed("get_registration_keys")
        return [getattr(t, "__name__", str(t)) for t in self._registrations]

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def resolve(self, interface: type[T]) -> T:
        """Resolve a service instance.

        Args:
            interface: The interface type of the service to resolve

        Returns:
            An instance of the requested service

        Raises:
            ScopeError: If trying to resolve a scoped service outside of a scope
            ServiceNotRegisteredError: If the service is not registered
            CircularDependencyError: If a circular dependency is detected
            ServiceCreationError: If the implementation or factory fails
        """
        return cast("T", self._resolve_in(interface, self._current_scope))

    def resolve_optional(self, interface: type[T]) -> T | None:
        """Resolve a service instance or return None if not registered."""
        self._check_not_disposed("resolve_optional")
        if interface not in self._registrations:
            return None
        return self.resolve(interface)

    def _resolve_in(self, interface: Any, scope: Scope | None) -> Any:
        self._check_not_disposed("resolve")
        registration = self._registrations.get(interface)
        if registration is None:
            raise ServiceNotRegisteredError(interface)

        service_type_name = getattr(interface, "__name__", str(interface))
        dependency_chain = _DI_DEPENDENCY_CHAIN.get()
        if service_type_name in dependency_chain:
            raise CircularDependencyError([*dependency_chain, service_type_name])

        if registration.lifetime is ServiceLifetime.SCOPED and scope is None:
            raise ScopeError.outside_scope(interface)

        token = _DI_DEPENDENCY_CHAIN.set((*dependency_chain, service_type_name))
        previous_scope = self._current_scope
        self._current_scope = scope
        try:
            return registration.lifetime_policy.get_instance(
                scope or self._singleton_scope,
                lambda: self._create_service(registration),
                interface,
            )
        finally:
            self._current_scope = previous_scope
            _DI_DEPENDENCY_CHAIN.reset(token)

    def _create_service(self, registration: ServiceRegistration[Any]) -> Any:
        implementation = registration.implementation
        if not (registration.is_type or registration.is_factory):
            return implementation
        try:
            if registration.is_type:
                return implementation()
            return implementation(self)
        except DIError:
            raise
        except Exception as exc:
            raise ServiceCreationError(registration.interface, exc) from exc

    # ------------------------------------------------------------------
    # Restoration
    # ------------------------------------------------------------------

    def restore(self, entity_type: type[T], raw: Mapping[str, Any]) -> T:
        """Construct a typed entity from a raw record.

        Args:
            entity_type: Type to instantiate
            raw: Field name to value mapping read from storage

        Returns:
            The restored entity

        Raises:
            RestorationError: If the record cannot be turned into an entity
        """
        self._check_not_disposed("restore")
        return restore_entity(self, entity_type, raw)

    def repository(
        self, entity_type: type[T], table_name: str | None = None
    ) -> Repository[T]:
        """Build a repository for ``entity_type`` backed by the registered storage."""
        from repokit.domain.di import repository_for

        return repository_for(self, entity_type, table_name)

    # ------------------------------------------------------------------
    # Scopes and disposal
    # ------------------------------------------------------------------

    @contextlib.contextmanager
    def create_scope(self) -> Generator[Scope]:
        """Create a new scope for scoped services.

        The scope is disposed when the context exits.

        Example:
            ```python
            with container.create_scope() as scope:
                service = scope.resolve(IService)
            ```
        """
        self._check_not_disposed("create_scope")
        parent = self._current_scope or self._singleton_scope
        scope = parent.create_scope()
        previous_scope = self._current_scope
        self._current_scope = scope
        try:
            yield scope
        finally:
            self._current_scope = previous_scope
            scope.dispose()

    def dispose(self) -> None:
        """Dispose the container and all its services.

        After disposal the container raises ContainerDisposedError when used.
        """
        if self._disposed:
            return
        self._disposed = True
        self._singleton_scope.dispose()
        self._logger.debug("Container disposed")

    def __enter__(self) -> Container:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.dispose()
