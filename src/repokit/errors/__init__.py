# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: repokit

"""
Error handling for repokit.
"""

from __future__ import annotations

from repokit.errors.base import ErrorContext, ErrorSeverity, RepokitError

__all__ = [
    "ErrorContext",
    "ErrorSeverity",
    "RepokitError",
]
