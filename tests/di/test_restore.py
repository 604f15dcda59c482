"""Tests for restoring entities from raw records."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

import pytest

from conftest import Gadget, Person, User
from repokit.di import Container, RestorationError, RestorerProtocol
from repokit.domain import Repository
from repokit.storage import JsonFileStorage


class Clock:
    def __init__(self, now: int = 100) -> None:
        self.now = now


@dataclass
class Shipment:
    id: int
    shipped_at: datetime
    size: tuple[int, int]

    def get_unique_id(self) -> int:
        return self.id


class Invoice:
    def __init__(self, id: int, total: float, clock: Clock, note: str = "") -> None:
        self.id = id
        self.total = total
        self.clock = clock
        self.note = note

    def get_unique_id(self) -> int:
        return self.id


def test_container_is_a_restorer(container: Container) -> None:
    assert isinstance(container, RestorerProtocol)


def test_restore_pydantic_entity(container: Container) -> None:
    user = container.restore(User, {"id": 1, "name": "Ann"})

    assert user == User(id=1, name="Ann")


def test_restore_ignores_unknown_keys(container: Container) -> None:
    person = container.restore(Person, {"id": 1, "name": "Ann", "age": 30, "extra": True})

    assert person == Person(id=1, name="Ann", age=30)


def test_restore_validation_failure(container: Container) -> None:
    with pytest.raises(RestorationError) as exc_info:
        container.restore(Person, {"id": 1, "name": "Ann", "age": "old"})

    assert exc_info.value.code == "DI_RESTORATION_FAILED"
    assert exc_info.value.entity_type is Person
    assert exc_info.value.context.context["errors"][0]["loc"] == ("age",)


def test_restore_dataclass(container: Container) -> None:
    gadget = container.restore(Gadget, {"id": 3, "label": "fan", "tags": []})

    assert gadget == Gadget(id=3, label="fan", tags=[])


def test_restore_missing_value(container: Container) -> None:
    with pytest.raises(RestorationError, match="missing value for 'label'"):
        container.restore(Gadget, {"id": 3, "tags": []})


def test_restore_rejects_non_mapping(container: Container) -> None:
    with pytest.raises(RestorationError, match="expected a mapping"):
        container.restore(User, [("id", 1)])


def test_restore_resolves_registered_dependencies(container: Container) -> None:
    clock = Clock(now=7)
    container.register_singleton(Clock, clock)

    invoice = container.restore(Invoice, {"id": 9, "total": 12.5})

    assert invoice.clock is clock
    assert invoice.total == 12.5
    assert invoice.note == ""


def test_record_values_win_over_container(container: Container) -> None:
    container.register_singleton(Clock, Clock())
    own_clock = Clock(now=1)

    invoice = container.restore(
        Invoice, {"id": 9, "total": 1.0, "clock": own_clock, "note": "paid"}
    )

    assert invoice.clock is own_clock
    assert invoice.note == "paid"


def test_unregistered_dependency_is_missing(container: Container) -> None:
    with pytest.raises(RestorationError) as exc_info:
        container.restore(Invoice, {"id": 9, "total": 1.0})

    assert exc_info.value.context.context["field"] == "clock"


def test_constructor_failure_is_chained(container: Container) -> None:
    class Picky:
        def __init__(self, id: int) -> None:
            if id < 0:
                raise ValueError("negative id")
            self.id = id

    with pytest.raises(RestorationError) as exc_info:
        container.restore(Picky, {"id": -1})

    assert isinstance(exc_info.value.__cause__, ValueError)


def test_dataclass_values_regain_declared_types(container: Container) -> None:
    shipment = container.restore(
        Shipment, {"id": 1, "shipped_at": "2024-05-01T12:30:00", "size": [3, 4]}
    )

    assert shipment == Shipment(id=1, shipped_at=datetime(2024, 5, 1, 12, 30), size=(3, 4))


def test_dataclass_round_trip_through_json_storage(
    container: Container, tmp_path: Path
) -> None:
    repo = Repository(Shipment, JsonFileStorage(tmp_path / "store.json"), container)
    shipment = Shipment(id=1, shipped_at=datetime(2024, 5, 1, 12, 30), size=(3, 4))

    repo.add(shipment)

    assert repo.find(1) == shipment


def test_dataclass_validation_failure(container: Container) -> None:
    with pytest.raises(RestorationError) as exc_info:
        container.restore(Shipment, {"id": 1, "shipped_at": "soon", "size": [3, 4]})

    assert exc_info.value.context.context["errors"][0]["loc"] == ("shipped_at",)
