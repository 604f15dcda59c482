import pytest

from conftest import Person, RecordingStorage
from repokit.domain import Repository, UnknownFieldError


def test_find_all_in_storage_order(person_repo: Repository[Person]) -> None:
    people = person_repo.find_all()

    assert [person.name for person in people] == ["Ann", "Bob", "Cid"]
    assert all(isinstance(person, Person) for person in people)


def test_find_all_empty_collection(storage: RecordingStorage, container) -> None:
    repo = Repository(Person, storage, container, table_name="nobody")

    assert repo.find_all() == []
    assert repo.first() is None
    assert not repo.any()


def test_queries_read_storage_every_time(
    person_repo: Repository[Person], storage: RecordingStorage
) -> None:
    person_repo.find_all()
    person_repo.find(1)

    assert storage.calls == [("all", "person"), ("all", "person")]


def test_find(person_repo: Repository[Person]) -> None:
    assert person_repo.find(2) == Person(id=2, name="Bob", age=45)
    assert person_repo.find(99) is None


def test_find_does_not_coerce_ids(person_repo: Repository[Person]) -> None:
    assert person_repo.find("2") is None
    assert person_repo.find(True) is None


def test_find_by(person_repo: Repository[Person]) -> None:
    assert person_repo.find_by("name", "Cid").id == 3
    assert person_repo.find_by("age", 31).id == 1
    assert person_repo.find_by("name", "Zed") is None


def test_find_by_does_not_coerce_values(person_repo: Repository[Person]) -> None:
    assert person_repo.find_by("age", 31.0) is None
    assert person_repo.find_by("id", True) is None
    assert person_repo.find_by("id", "1") is None
    assert person_repo.find_by("id", 1).name == "Ann"


def test_find_by_unknown_field(person_repo: Repository[Person]) -> None:
    with pytest.raises(UnknownFieldError):
        person_repo.find_by("email", "ann@example.com")


def test_first_and_any(person_repo: Repository[Person]) -> None:
    assert person_repo.first().id == 1
    assert person_repo.first(lambda person: person.age > 40).name == "Bob"
    assert person_repo.first(lambda person: person.age > 90) is None
    assert person_repo.any()
    assert person_repo.any(lambda person: person.name == "Cid")
    assert not person_repo.any(lambda person: person.name == "Zed")


def test_where(person_repo: Repository[Person]) -> None:
    matches = person_repo.where(lambda person: person.age == 31)

    assert [person.id for person in matches] == [1, 3]
    assert person_repo.where(lambda person: False) == []


def test_contains(person_repo: Repository[Person]) -> None:
    assert person_repo.contains(Person(id=1, name="Ann", age=31))
    assert not person_repo.contains(Person(id=1, name="Ann", age=32))
