# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: repokit
"""
In-memory storage engine.
"""

from __future__ import annotations

import copy
import threading
from collections.abc import Mapping
from typing import Any

from repokit.logging import LoggerProtocol, get_logger
from repokit.storage.errors import RecordNotFoundError
from repokit.storage.protocols import RawRecord
from repokit.storage.records import prepare_insert


class InMemoryStorage:
    """Keeps collections in process memory.

    Records are deep-copied on the way in and on the way out, so callers
    never share state with the store.
    """

    def __init__(self, logger: LoggerProtocol | None = None) -> None:
        self._collections: dict[str, dict[str, RawRecord]] = {}
        self._lock = threading.RLock()
        self._logger = logger or get_logger("repokit.storage.memory")

    def all(self, collection: str) -> list[RawRecord]:
        with self._lock:
            records = self._collections.get(collection, {})
            return [copy.deepcopy(record) for record in records.values()]

    def add(self, collection: str, record: Mapping[str, Any]) -> None:
        with self._lock:
            records = self._collections.setdefault(collection, {})
            key, stored = prepare_insert(collection, records, record)
            records[key] = stored
        self._logger.debug("Inserted record", collection=collection, id=key)

    def set(self, collection: str, id: str, record: Mapping[str, Any]) -> None:
        with self._lock:
            records = self._collections.setdefault(collection, {})
            records[id] = copy.deepcopy(dict(record))
        self._logger.debug("Stored record", collection=collection, id=id)

    def delete(self, collection: str, id: str) -> None:
        with self._lock:
            records = self._collections.get(collection, {})
            if id not in records:
                raise RecordNotFoundError(collection, id)
            del records[id]
        self._logger.debug("Deleted record", collection=collection, id=id)

    def collections(self) -> list[str]:
        with self._lock:
            return list(self._collections)

    def clear(self, collection: str | None = None) -> None:
        """Drop one collection, or every collection when none is named."""
        with self._lock:
            if collection is None:
                self._collections.clear()
            else:
                self._collections.pop(collection, None)
