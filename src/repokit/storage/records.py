# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: repokit
"""
Record helpers shared by the built-in storage engines.
"""

from __future__ import annotations

import copy
from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import TypeAdapter

from repokit.storage.errors import DuplicateRecordError

ID_FIELD = "id"

_json_adapter: TypeAdapter[Any] = TypeAdapter(Any)


def to_jsonable(record: Mapping[str, Any]) -> dict[str, Any]:
    """Convert a record into JSON-compatible primitives."""
    return _json_adapter.dump_python(dict(record), mode="json")


def next_integer_id(records: Iterable[Mapping[str, Any]]) -> int:
    """Return one more than the largest integer id present, starting at 1."""
    ids = [
        record_id
        for record_id in (record.get(ID_FIELD) for record in records)
        if isinstance(record_id, int) and not isinstance(record_id, bool)
    ]
    return max(ids, default=0) + 1


def prepare_insert(
    collection: str,
    existing: Mapping[str, Mapping[str, Any]],
    record: Mapping[str, Any],
) -> tuple[str, dict[str, Any]]:
    """Copy ``record`` for insertion, assigning an id when it has none.

    Args:
        collection: Collection name, for error reporting
        existing: Records already stored, keyed by stringified id
        record: Record to insert

    Returns:
        The storage key and the record copy to store

    Raises:
        DuplicateRecordError: If the record's id is already taken
    """
    stored = copy.deepcopy(dict(record))
    record_id = stored.get(ID_FIELD)
    if record_id is None:
        record_id = next_integer_id(existing.values())
        stored[ID_FIELD] = record_id
    key = str(record_id)
    if key in existing:
        raise DuplicateRecordError(collection, key)
    return key, stored
