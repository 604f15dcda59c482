"""Top-level pytest configuration for repokit."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from typing import Any

import pytest

from repokit.di import Container
from repokit.domain import Entity, Repository
from repokit.storage import InMemoryStorage, StorageError


class User(Entity):
    name: str


class Person(Entity):
    name: str
    age: int


@dataclass
class Gadget:
    id: int
    label: str
    tags: list[str]

    def get_unique_id(self) -> int:
        return self.id


class RecordingStorage(InMemoryStorage):
    """In-memory storage that records every call made to it."""

    def __init__(self) -> None:
        super().__init__()
        self.calls: list[tuple[Any, ...]] = []
        self.fail_writes = False

    def writes(self) -> list[tuple[Any, ...]]:
        return [call for call in self.calls if call[0] != "all"]

    def all(self, collection: str) -> list[dict[str, Any]]:
        self.calls.append(("all", collection))
        return super().all(collection)

    def add(self, collection: str, record: Mapping[str, Any]) -> None:
        self.calls.append(("add", collection, dict(record)))
        super().add(collection, record)

    def set(self, collection: str, id: str, record: Mapping[str, Any]) -> None:
        self.calls.append(("set", collection, id, dict(record)))
        if self.fail_writes:
            raise StorageError("disk full", code="WRITE_FAILED")
        super().set(collection, id, record)

    def delete(self, collection: str, id: str) -> None:
        self.calls.append(("delete", collection, id))
        super().delete(collection, id)


@pytest.fixture
def storage() -> RecordingStorage:
    return RecordingStorage()


@pytest.fixture
def container() -> Iterator[Container]:
    container = Container()
    yield container
    container.dispose()


@pytest.fixture
def user_repo(storage: RecordingStorage, container: Container) -> Repository[User]:
    return Repository(User, storage, container)


@pytest.fixture
def person_repo(storage: RecordingStorage, container: Container) -> Repository[Person]:
    repo = Repository(Person, storage, container)
    for person_id, name, age in ((1, "Ann", 31), (2, "Bob", 45), (3, "Cid", 31)):
        storage.add(repo.table_name, {"id": person_id, "name": name, "age": age})
    storage.calls.clear()
    return repo
