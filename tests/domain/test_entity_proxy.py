import pytest

from conftest import Gadget, Person, User
from repokit.domain import EntityProxy, UnknownFieldError


def test_proxy_starts_clean() -> None:
    proxy = EntityProxy(User(id=1, name="Ann"))

    assert not proxy.is_dirty
    assert proxy.dirty_fields == frozenset()


def test_constructed_dirty_marks_every_field() -> None:
    proxy = EntityProxy.wrap(Person(id=1, name="Ann", age=30), dirty=True)

    assert proxy.is_dirty
    assert proxy.dirty_fields == {"id", "name", "age"}


def test_get_reads_through_without_marking_dirty() -> None:
    proxy = EntityProxy(Person(id=1, name="Ann", age=30))

    assert proxy.get("name") == "Ann"
    assert proxy.name == "Ann"
    assert proxy.get_unique_id() == 1
    assert not proxy.is_dirty


def test_set_writes_through_and_marks_field_dirty() -> None:
    person = Person(id=1, name="Ann", age=30)
    proxy = EntityProxy(person)

    proxy.set("name", "Bob")

    assert person.name == "Bob"
    assert proxy.is_dirty
    assert proxy.dirty_fields == {"name"}


def test_attribute_assignment_is_tracked() -> None:
    person = Person(id=1, name="Ann", age=30)
    proxy = EntityProxy(person)

    proxy.age = 31

    assert person.age == 31
    assert proxy.dirty_fields == {"age"}


def test_repeated_writes_count_once_and_last_value_wins() -> None:
    proxy = EntityProxy(Person(id=1, name="Ann", age=30))

    proxy.name = "Bob"
    proxy.name = "Cid"

    assert proxy.dirty_fields == {"name"}
    assert proxy.get("name") == "Cid"


def test_same_value_write_still_marks_dirty() -> None:
    proxy = EntityProxy(User(id=1, name="Ann"))

    proxy.name = "Ann"

    assert proxy.is_dirty


def test_reset_dirty_keeps_values() -> None:
    proxy = EntityProxy(Person(id=1, name="Ann", age=30))
    proxy.name = "Bob"

    proxy.reset_dirty()

    assert not proxy.is_dirty
    assert proxy.dirty_fields == frozenset()
    assert proxy.get("name") == "Bob"


def test_unknown_field_access() -> None:
    proxy = EntityProxy(User(id=1, name="Ann"))

    with pytest.raises(UnknownFieldError):
        proxy.get("email")
    with pytest.raises(UnknownFieldError):
        proxy.set("email", "ann@example.com")
    with pytest.raises(UnknownFieldError):
        proxy.email = "ann@example.com"
    assert not proxy.is_dirty


@pytest.mark.parametrize("dirty", [False, True])
def test_to_map_is_complete_and_ordered(dirty: bool) -> None:
    proxy = EntityProxy(Person(id=1, name="x", age=30), dirty=dirty)

    data = proxy.to_map()

    assert data == {"id": 1, "name": "x", "age": 30}
    assert list(data) == ["id", "name", "age"]


def test_to_map_after_partial_write_still_returns_all_fields() -> None:
    proxy = EntityProxy(Person(id=1, name="x", age=30))
    proxy.age = 31

    assert proxy.to_map() == {"id": 1, "name": "x", "age": 31}


def test_to_map_is_shallow() -> None:
    gadget = Gadget(id=1, label="lamp", tags=["a"])
    proxy = EntityProxy(gadget)

    assert proxy.to_map()["tags"] is gadget.tags

    gadget.tags.append("b")
    assert not proxy.is_dirty


def test_unwrap_returns_same_instance() -> None:
    user = User(id=1, name="Ann")

    assert EntityProxy(user).unwrap() is user


def test_from_map_restores_clean_proxy(container) -> None:
    proxy = EntityProxy.from_map(User, {"id": 7, "name": "a"}, container)

    assert isinstance(proxy.unwrap(), User)
    assert proxy.to_map() == {"id": 7, "name": "a"}
    assert not proxy.is_dirty


def test_round_trip_through_restore(container) -> None:
    person = Person(id=5, name="Dee", age=52)

    restored = container.restore(Person, EntityProxy(person).to_map())

    assert restored == person
    assert restored is not person


def test_round_trip_dataclass(container) -> None:
    gadget = Gadget(id=2, label="fan", tags=["x", "y"])

    restored = container.restore(Gadget, EntityProxy(gadget).to_map())

    assert restored == gadget


def test_proxy_equality_compares_wrapped_entities() -> None:
    assert EntityProxy(User(id=1, name="Ann")) == User(id=1, name="Ann")
    assert EntityProxy(User(id=1, name="Ann")) == EntityProxy(User(id=1, name="Ann"))
    assert EntityProxy(User(id=1, name="Ann")) != User(id=2, name="Ann")
