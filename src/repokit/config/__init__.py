# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: repokit

"""
Configuration for repokit.
"""

from __future__ import annotations

from repokit.config.settings import StorageBackend, StorageSettings

__all__ = ["StorageBackend", "StorageSettings"]
