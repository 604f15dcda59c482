# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: repokit
"""
Storage error classes.
"""

from __future__ import annotations

from typing import Any

from repokit.errors.base import RepokitError


class StorageError(RepokitError):
    """Base class for storage failures."""

    code_prefix = "STORAGE"

    def __init__(
        self, message: str, code: str | None = None, **context: Any
    ) -> None:
        super().__init__(message=message, code=code, **context)


class RecordNotFoundError(StorageError, KeyError):
    """Raised when a record id is not present in a collection."""

    def __init__(self, collection: str, record_id: str, **context: Any) -> None:
        self.collection = collection
        self.record_id = record_id
        super().__init__(
            f"No record {record_id!r} in collection {collection!r}",
            code="RECORD_NOT_FOUND",
            collection=collection,
            record_id=record_id,
            **context,
        )

    def __str__(self) -> str:
        # KeyError.__str__ would repr the message
        return f"{self.code}: {self.message}"


class DuplicateRecordError(StorageError):
    """Raised when adding a record whose id is already taken."""

    def __init__(self, collection: str, record_id: str, **context: Any) -> None:
        self.collection = collection
        self.record_id = record_id
        super().__init__(
            f"Record {record_id!r} already exists in collection {collection!r}",
            code="DUPLICATE_RECORD",
            collection=collection,
            record_id=record_id,
            **context,
        )
