# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: repokit

"""
Public API for repokit logging.
"""

from __future__ import annotations

from repokit.logging.config import LoggingSettings
from repokit.logging.level import LogLevel
from repokit.logging.logger import RepokitLogger, StructuredFormatter, get_logger
from repokit.logging.protocols import LoggerProtocol

__all__ = [
    "LoggerProtocol",
    "LogLevel",
    "RepokitLogger",
    "StructuredFormatter",
    "LoggingSettings",
    "get_logger",
]
