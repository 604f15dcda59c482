# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: repokit
"""
Error classes for the repokit DI system.

This module contains specialized error classes for the dependency injection system,
providing detailed error messages and context for DI-related failures.
"""

from __future__ import annotations

from typing import Any

from repokit.errors.base import ErrorSeverity, RepokitError


def _type_name(interface: Any) -> str:
    return getattr(interface, "__name__", str(interface))


class DIError(RepokitError):
    """Base class for all DI-related errors."""

    code_prefix = "DI"


class ServiceNotRegisteredError(DIError, LookupError):
    """Raised when resolving a service that was never registered."""

    def __init__(self, interface: Any, **context: Any) -> None:
        self.interface = interface
        super().__init__(
            message=f"Service not registered: {_type_name(interface)}",
            code="SERVICE_NOT_REGISTERED",
            service_type=_type_name(interface),
            **context,
        )


class DuplicateRegistrationError(DIError):
    """Raised when registering a service twice without ``replace=True``."""

    def __init__(self, interface: Any, **context: Any) -> None:
        self.interface = interface
        super().__init__(
            message=f"Service already registered: {_type_name(interface)}",
            code="DUPLICATE_REGISTRATION",
            service_type=_type_name(interface),
            **context,
        )


class ScopeError(DIError):
    """Raised on invalid scope usage."""

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message=message, code="SCOPE_ERROR", **context)

    @classmethod
    def outside_scope(cls, interface: Any) -> ScopeError:
        """Create an error for resolving a scoped service outside of a scope."""
        return cls(
            f"Cannot resolve scoped service {_type_name(interface)} outside of a scope",
            service_type=_type_name(interface),
        )


class ServiceCreationError(DIError):
    """Raised when a registered implementation or factory fails."""

    def __init__(
        self, interface: Any, original_error: BaseException, **context: Any
    ) -> None:
        self.interface = interface
        self.original_error = original_error
        super().__init__(
            message=f"Failed to create service {_type_name(interface)}: {original_error}",
            code="SERVICE_CREATION_FAILED",
            service_type=_type_name(interface),
            **context,
        )


class CircularDependencyError(DIError):
    """Raised when a resolution re-enters a service already being resolved."""

    def __init__(self, dependency_chain: list[str], **context: Any) -> None:
        self.dependency_chain = dependency_chain
        super().__init__(
            message="Circular dependency detected: " + " -> ".join(dependency_chain),
            code="CIRCULAR_DEPENDENCY",
            severity=ErrorSeverity.CRITICAL,
            dependency_chain=dependency_chain,
            **context,
        )


class ContainerDisposedError(DIError):
    """Raised when a disposed container or scope is used."""

    def __init__(self, operation: str, **context: Any) -> None:
        self.operation = operation
        super().__init__(
            message=f"Container is disposed; cannot {operation}",
            code="CONTAINER_DISPOSED",
            operation=operation,
            **context,
        )


class RestorationError(DIError):
    """Raised when an entity cannot be built from a raw record."""

    def __init__(
        self, entity_type: type, reason: str, **context: Any
    ) -> None:
        self.entity_type = entity_type
        super().__init__(
            message=f"Cannot restore {entity_type.__name__}: {reason}",
            code="RESTORATION_FAILED",
            entity_type=entity_type.__name__,
            **context,
        )
