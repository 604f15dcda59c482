# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: repokit

"""
Domain-specific error classes for repokit.
"""

from __future__ import annotations

from typing import Any

from repokit.errors.base import ErrorSeverity, RepokitError


class DomainError(RepokitError):
    """Base class for all domain-related errors."""

    code_prefix = "DOM"


class InvalidTypeNameError(DomainError, ValueError):
    """Raised when a table name cannot be derived from a type name."""

    def __init__(
        self,
        type_name: str,
        message: str | None = None,
        code: str | None = "INVALID_TYPE_NAME",
        **context: Any,
    ) -> None:
        self.type_name = type_name
        super().__init__(
            message=message
            or f"Type name must be fully qualified to derive a table name: {type_name!r}",
            code=code,
            severity=ErrorSeverity.CRITICAL,
            type_name=type_name,
            **context,
        )


class UnknownFieldError(DomainError, AttributeError):
    """Raised when a field is not declared on the entity type."""

    def __init__(
        self,
        entity_type: type,
        field: str,
        code: str | None = "UNKNOWN_FIELD",
        **context: Any,
    ) -> None:
        self.entity_type = entity_type
        self.field = field
        super().__init__(
            message=f"{entity_type.__name__} has no field {field!r}",
            code=code,
            entity_type=entity_type.__name__,
            field=field,
            **context,
        )


class UnsupportedEntityTypeError(DomainError, TypeError):
    """Raised when a type exposes no declared fields repokit can enumerate."""

    def __init__(
        self,
        entity_type: type,
        message: str | None = None,
        code: str | None = "UNSUPPORTED_ENTITY_TYPE",
        **context: Any,
    ) -> None:
        self.entity_type = entity_type
        super().__init__(
            message=message
            or (
                f"{getattr(entity_type, '__name__', entity_type)!s} is neither a "
                "pydantic model nor a dataclass"
            ),
            code=code,
            entity_type=getattr(entity_type, "__name__", str(entity_type)),
            **context,
        )


class MissingIdentityError(DomainError, ValueError):
    """Raised when writing back or deleting an entity that has no unique id."""

    def __init__(
        self,
        entity_type: type,
        operation: str,
        code: str | None = "MISSING_IDENTITY",
        **context: Any,
    ) -> None:
        self.entity_type = entity_type
        self.operation = operation
        super().__init__(
            message=(
                f"Cannot {operation} {entity_type.__name__} without a unique id; "
                "assign one before adding it"
            ),
            code=code,
            entity_type=entity_type.__name__,
            operation=operation,
            **context,
        )
