# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: repokit
"""
Service registration module for the repokit DI container.

This module defines the ServiceRegistration class used to track service
registrations, and the lifetime policies that decide where instances live.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from repokit.di.protocols import ServiceLifetime

if TYPE_CHECKING:
    from repokit.di.resolution import Scope

T = TypeVar("T")


class SingletonPolicy:
    """Instances live in the root scope for the container's lifetime."""

    def get_instance(self, scope: Scope, factory: Callable[[], Any], key: Any) -> Any:
        root = scope.root
        if key not in root._services:
            root._services[key] = factory()
        return root._services[key]


class ScopedPolicy:
    """One instance per scope."""

    def get_instance(self, scope: Scope, factory: Callable[[], Any], key: Any) -> Any:
        if key not in scope._services:
            scope._services[key] = factory()
        return scope._services[key]


class TransientPolicy:
    """A new instance for every resolution; never cached."""

    def get_instance(self, scope: Scope, factory: Callable[[], Any], key: Any) -> Any:
        return factory()


LIFETIME_POLICY_MAP = {
    ServiceLifetime.SINGLETON: SingletonPolicy(),
    ServiceLifetime.SCOPED: ScopedPolicy(),
    ServiceLifetime.TRANSIENT: TransientPolicy(),
}


class ServiceRegistration(Generic[T]):
    """Represents a service registration in the DI container.

    A registration contains the interface type, its implementation or factory,
    and the lifetime scope for the service.
    """

    def __init__(
        self,
        interface: type[T],
        implementation: Any,
        lifetime: ServiceLifetime,
    ) -> None:
        """Initialize a service registration.

        Args:
            interface: The interface type that will be used to resolve the service
            implementation: A concrete type, a factory taking the container, or
                a ready-made instance
            lifetime: The lifetime of the service
        """
        self.interface = interface
        self.implementation = implementation
        self.lifetime = lifetime
        self.lifetime_policy = LIFETIME_POLICY_MAP[lifetime]

    @property
    def is_type(self) -> bool:
        return isinstance(self.implementation, type)

    @property
    def is_factory(self) -> bool:
        """Check if the implementation is a factory rather than a concrete type.

        Returns:
            bool: True if implementation is a factory function, False otherwise
        """
        return not self.is_type and callable(self.implementation)

    def __repr__(self) -> str:
        name = getattr(self.interface, "__name__", str(self.interface))
        return f"ServiceRegistration({name}, lifetime={self.lifetime.value})"
