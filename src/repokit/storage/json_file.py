# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: repokit
"""
JSON file storage engine.

All collections live in one JSON document shaped
``{collection: {id: record}}``. The document is read on every call and
rewritten atomically after every mutation.
"""

from __future__ import annotations

import json
import os
import tempfile
import threading
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from repokit.logging import LoggerProtocol, get_logger
from repokit.storage.errors import RecordNotFoundError, StorageError
from repokit.storage.protocols import RawRecord
from repokit.storage.records import prepare_insert, to_jsonable

Document = dict[str, dict[str, RawRecord]]


class JsonFileStorage:
    """Persists collections to a single JSON file."""

    def __init__(
        self, path: str | os.PathLike[str], logger: LoggerProtocol | None = None
    ) -> None:
        self.path = Path(path)
        self._lock = threading.RLock()
        self._logger = logger or get_logger("repokit.storage.json")

    def _load(self) -> Document:
        if not self.path.exists():
            return {}
        try:
            with self.path.open(encoding="utf-8") as fh:
                document = json.load(fh)
        except (OSError, json.JSONDecodeError) as exc:
            raise StorageError(
                f"Cannot read storage file {self.path}: {exc}",
                code="READ_FAILED",
                path=str(self.path),
            ) from exc
        if not isinstance(document, dict):
            raise StorageError(
                f"Storage file {self.path} does not hold a JSON object",
                code="READ_FAILED",
                path=str(self.path),
            )
        return document

    def _save(self, document: Document) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(document, fh, ensure_ascii=False, indent=2)
            os.replace(tmp_name, self.path)
        except OSError as exc:
            Path(tmp_name).unlink(missing_ok=True)
            raise StorageError(
                f"Cannot write storage file {self.path}: {exc}",
                code="WRITE_FAILED",
                path=str(self.path),
            ) from exc

    def all(self, collection: str) -> list[RawRecord]:
        with self._lock:
            return list(self._load().get(collection, {}).values())

    def add(self, collection: str, record: Mapping[str, Any]) -> None:
        with self._lock:
            document = self._load()
            records = document.setdefault(collection, {})
            key, stored = prepare_insert(collection, records, record)
            records[key] = to_jsonable(stored)
            self._save(document)
        self._logger.debug("Inserted record", collection=collection, id=key)

    def set(self, collection: str, id: str, record: Mapping[str, Any]) -> None:
        with self._lock:
            document = self._load()
            document.setdefault(collection, {})[id] = to_jsonable(record)
            self._save(document)
        self._logger.debug("Stored record", collection=collection, id=id)

    def delete(self, collection: str, id: str) -> None:
        with self._lock:
            document = self._load()
            records = document.get(collection, {})
            if id not in records:
                raise RecordNotFoundError(collection, id)
            del records[id]
            self._save(document)
        self._logger.debug("Deleted record", collection=collection, id=id)
