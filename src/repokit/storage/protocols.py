# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: repokit
"""
Storage contract.

A storage engine is oblivious to entity types: it keeps named collections of
raw records, each record a plain mapping of field name to value, keyed by the
stringified unique id.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable

RawRecord = dict[str, Any]


@runtime_checkable
class StorageProtocol(Protocol):
    """Raw persistence backend used by repositories."""

    def all(self, collection: str) -> list[RawRecord]:
        """Return every record of ``collection``; empty if it does not exist."""
        ...

    def add(self, collection: str, record: Mapping[str, Any]) -> None:
        """Insert ``record``, assigning or validating its id."""
        ...

    def set(self, collection: str, id: str, record: Mapping[str, Any]) -> None:
        """Insert or fully replace the record stored under ``id``."""
        ...

    def delete(self, collection: str, id: str) -> None:
        """Remove the record stored under ``id``."""
        ...
