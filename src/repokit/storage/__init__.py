# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: repokit

"""
Storage engines for repokit.
"""

from __future__ import annotations

from repokit.storage.errors import (
    DuplicateRecordError,
    RecordNotFoundError,
    StorageError,
)
from repokit.storage.factory import create_storage
from repokit.storage.json_file import JsonFileStorage
from repokit.storage.memory import InMemoryStorage
from repokit.storage.protocols import RawRecord, StorageProtocol
from repokit.storage.sql import SqlAlchemyStorage

__all__ = [
    "DuplicateRecordError",
    "InMemoryStorage",
    "JsonFileStorage",
    "RawRecord",
    "RecordNotFoundError",
    "SqlAlchemyStorage",
    "StorageError",
    "StorageProtocol",
    "create_storage",
]
