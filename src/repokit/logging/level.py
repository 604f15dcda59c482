# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: repokit
"""
Log level names understood by repokit settings.
"""

from __future__ import annotations

import logging
from enum import Enum


class LogLevel(str, Enum):
    """Level names, matching the stdlib ``logging`` constants."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

    def to_stdlib_level(self) -> int:
        return logging.getLevelNamesMapping()[self.value]

    @classmethod
    def from_string(cls, value: str) -> LogLevel:
        """Parse a level name case-insensitively.

        Raises:
            ValueError: If ``value`` names no known level
        """
        try:
            return cls(value.strip().upper())
        except ValueError:
            raise ValueError(f"Invalid log level: {value}") from None
