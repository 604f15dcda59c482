# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: repokit
"""
Base error classes for repokit.

Every error raised by the package carries a prefixed code, a severity and a
structured context so that it can be logged or serialized without losing
information.
"""

from __future__ import annotations

from datetime import UTC, datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class ErrorSeverity(str, Enum):
    """Severity levels for repokit errors."""

    CRITICAL = "critical"
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class ErrorContext(BaseModel):
    """Context model attached to every repokit error."""

    code: str
    severity: ErrorSeverity = ErrorSeverity.ERROR
    context: dict[str, Any] = Field(default_factory=dict)


class RepokitError(Exception):
    """
    Base error class for repokit errors.
    Should only be subclassed for package-specific errors, not instantiated directly.
    """

    code_prefix: str = "REPOKIT"

    def __new__(cls, *args: Any, **kwargs: Any) -> RepokitError:
        if cls is RepokitError:
            raise TypeError(
                "Do not instantiate RepokitError directly; subclass it for specific errors."
            )
        return super().__new__(cls)

    def __init__(
        self,
        message: str,
        code: str | None = None,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        **context: Any,
    ) -> None:
        """Initialize a repokit error.

        Args:
            message: Human-readable error message
            code: Error code without prefix (will be prefixed automatically)
            severity: How severe this error is
            **context: Additional context information
        """
        self.message = message
        self.context = ErrorContext(
            code=f"{self.code_prefix}_{code}" if code else f"{self.code_prefix}_ERROR",
            severity=severity,
            context=context,
        )
        self.timestamp = datetime.now(UTC)
        super().__init__(message)

    @property
    def code(self) -> str:
        return self.context.code

    @property
    def severity(self) -> ErrorSeverity:
        return self.context.severity

    def add_context(self, key: str, value: Any) -> RepokitError:
        """Add a key-value pair to the error context and return self for chaining."""
        self.context.context[key] = value
        return self

    def __str__(self) -> str:
        """Get string representation of the error.

        Returns:
            String in format 'code: message'
        """
        return f"{self.code}: {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """Return a dictionary representation of the error.

        Returns:
            Dictionary with all error properties
        """
        return {
            "code": self.code,
            "message": self.message,
            "severity": self.severity.value,
            "context": {k: str(v) for k, v in self.context.context.items()},
            "timestamp": self.timestamp.isoformat(),
        }
