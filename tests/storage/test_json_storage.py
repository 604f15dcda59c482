from __future__ import annotations

import json
from datetime import date
from pathlib import Path

import pytest

from repokit.storage import JsonFileStorage, StorageError

pytestmark = pytest.mark.integration


def test_missing_file_reads_empty(tmp_path: Path) -> None:
    storage = JsonFileStorage(tmp_path / "absent.json")

    assert storage.all("users") == []
    assert not (tmp_path / "absent.json").exists()


def test_document_layout(tmp_path: Path) -> None:
    path = tmp_path / "store.json"
    storage = JsonFileStorage(path)

    storage.add("users", {"id": 1, "name": "Ann"})

    assert json.loads(path.read_text(encoding="utf-8")) == {
        "users": {"1": {"id": 1, "name": "Ann"}}
    }


def test_data_survives_new_instance(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "store.json"
    JsonFileStorage(path).add("users", {"id": 1, "name": "Ann"})

    assert JsonFileStorage(path).all("users") == [{"id": 1, "name": "Ann"}]


def test_values_are_stored_as_json(tmp_path: Path) -> None:
    storage = JsonFileStorage(tmp_path / "store.json")

    storage.add("events", {"id": 1, "on": date(2024, 5, 1)})

    assert storage.all("events") == [{"id": 1, "on": "2024-05-01"}]


def test_no_temporary_files_left_behind(tmp_path: Path) -> None:
    storage = JsonFileStorage(tmp_path / "store.json")

    storage.add("users", {"id": 1, "name": "Ann"})
    storage.set("users", "1", {"id": 1, "name": "Ada"})

    assert [p.name for p in tmp_path.iterdir()] == ["store.json"]


def test_corrupt_file(tmp_path: Path) -> None:
    path = tmp_path / "store.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(StorageError) as exc_info:
        JsonFileStorage(path).all("users")

    assert exc_info.value.code == "STORAGE_READ_FAILED"


def test_non_object_document(tmp_path: Path) -> None:
    path = tmp_path / "store.json"
    path.write_text("[1, 2]", encoding="utf-8")

    with pytest.raises(StorageError, match="does not hold a JSON object"):
        JsonFileStorage(path).all("users")
