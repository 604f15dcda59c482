# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: repokit
"""
SQLAlchemy storage engine.

Every collection shares one table; a row holds one record as a JSON
document keyed by (collection, record id). Rows keep an insertion position
so that ``all`` returns records in the order they were first stored.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from sqlalchemy import (
    JSON,
    Column,
    Engine,
    Integer,
    MetaData,
    String,
    Table,
    create_engine,
    delete,
    func,
    insert,
    select,
    update,
)
from sqlalchemy.engine import Connection
from sqlalchemy.exc import SQLAlchemyError

from repokit.logging import LoggerProtocol, get_logger
from repokit.storage.errors import RecordNotFoundError, StorageError
from repokit.storage.protocols import RawRecord
from repokit.storage.records import prepare_insert, to_jsonable

DEFAULT_TABLE_NAME = "repokit_records"


class SqlAlchemyStorage:
    """Stores records as JSON rows in a relational database."""

    def __init__(
        self,
        engine: Engine | str,
        table_name: str = DEFAULT_TABLE_NAME,
        logger: LoggerProtocol | None = None,
        echo: bool = False,
    ) -> None:
        """Initialize the engine and create the records table if needed.

        Args:
            engine: SQLAlchemy engine, or a database URL to build one from
            table_name: Name of the table holding every collection
            logger: Optional logger instance
            echo: Echo SQL when the engine is built from a URL
        """
        self._owns_engine = isinstance(engine, str)
        self.engine = create_engine(engine, echo=echo) if isinstance(engine, str) else engine
        self._logger = logger or get_logger("repokit.storage.sql")

        self.metadata = MetaData()
        self.table = Table(
            table_name,
            self.metadata,
            Column("collection", String(255), primary_key=True),
            Column("record_id", String(255), primary_key=True),
            Column("position", Integer, nullable=False),
            Column("data", JSON, nullable=False),
        )
        try:
            self.metadata.create_all(self.engine)
        except SQLAlchemyError as exc:
            raise StorageError(
                f"Cannot create table {table_name}: {exc}",
                code="SCHEMA_FAILED",
                table=table_name,
            ) from exc

    def _next_position(self, conn: Connection, collection: str) -> int:
        current = conn.execute(
            select(func.max(self.table.c.position)).where(
                self.table.c.collection == collection
            )
        ).scalar()
        return (current or 0) + 1

    def _wrap(self, operation: str, collection: str, exc: SQLAlchemyError) -> StorageError:
        return StorageError(
            f"{operation} on collection {collection!r} failed: {exc}",
            code=f"{operation.upper()}_FAILED",
            collection=collection,
        )

    def all(self, collection: str) -> list[RawRecord]:
        stmt = (
            select(self.table.c.data)
            .where(self.table.c.collection == collection)
            .order_by(self.table.c.position)
        )
        try:
            with self.engine.connect() as conn:
                return [dict(row.data) for row in conn.execute(stmt)]
        except SQLAlchemyError as exc:
            raise self._wrap("read", collection, exc) from exc

    def add(self, collection: str, record: Mapping[str, Any]) -> None:
        try:
            with self.engine.begin() as conn:
                rows = conn.execute(
                    select(self.table.c.record_id, self.table.c.data).where(
                        self.table.c.collection == collection
                    )
                )
                existing = {row.record_id: row.data for row in rows}
                key, stored = prepare_insert(collection, existing, record)
                conn.execute(
                    insert(self.table).values(
                        collection=collection,
                        record_id=key,
                        position=self._next_position(conn, collection),
                        data=to_jsonable(stored),
                    )
                )
        except SQLAlchemyError as exc:
            raise self._wrap("insert", collection, exc) from exc
        self._logger.debug("Inserted record", collection=collection, id=key)

    def set(self, collection: str, id: str, record: Mapping[str, Any]) -> None:
        key_clause = (self.table.c.collection == collection) & (
            self.table.c.record_id == id
        )
        data = to_jsonable(record)
        try:
            with self.engine.begin() as conn:
                result = conn.execute(update(self.table).where(key_clause).values(data=data))
                if result.rowcount == 0:
                    conn.execute(
                        insert(self.table).values(
                            collection=collection,
                            record_id=id,
                            position=self._next_position(conn, collection),
                            data=data,
                        )
                    )
        except SQLAlchemyError as exc:
            raise self._wrap("write", collection, exc) from exc
        self._logger.debug("Stored record", collection=collection, id=id)

    def delete(self, collection: str, id: str) -> None:
        stmt = delete(self.table).where(
            (self.table.c.collection == collection) & (self.table.c.record_id == id)
        )
        try:
            with self.engine.begin() as conn:
                deleted = conn.execute(stmt).rowcount
        except SQLAlchemyError as exc:
            raise self._wrap("delete", collection, exc) from exc
        if deleted == 0:
            raise RecordNotFoundError(collection, id)
        self._logger.debug("Deleted record", collection=collection, id=id)

    def close(self) -> None:
        """Release the connection pool when this storage built the engine."""
        if self._owns_engine:
            self.engine.dispose()
