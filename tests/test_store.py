import pytest

from city_registry.db.store import (
    CityNotFoundError,
    CityStore,
    SAMPLE_CITIES,
    parse_city_id,
)


@pytest.mark.parametrize(
    "raw, expected",
    [("1", 1), ("42", 42), ("-3", -3), ("+7", 7), (5, 5),
     ("1abc", 1), ("1.5", 1), (" 1", 1), ("01", 1), ("-2x", -2),
     ("abc", None), ("", None), ("+", None), ("x1", None), (None, None), (True, None)],
)
def test_parse_city_id(raw, expected):
    assert parse_city_id(raw) == expected


def test_new_store_is_empty():
    store = CityStore()
    assert store.list() == []
    assert len(store) == 0
    assert store.next_id == 1


def test_create_assigns_sequential_ids():
    store = CityStore()
    first = store.create({"name": "A"})
    second = store.create({"name": "B"})
    assert (first["id"], second["id"]) == (1, 2)
    assert store.list() == [first, second]


def test_create_drops_client_id():
    store = CityStore()
    assert store.create({"id": 9, "name": "A"}) == {"id": 1, "name": "A"}
    assert store.next_id == 2


def test_create_does_not_alias_payload():
    store = CityStore()
    payload = {"name": "A"}
    city = store.create(payload)
    payload["name"] = "changed"
    assert city["name"] == "A"


def test_update_replaces_fields_in_place():
    store = CityStore()
    store.create({"name": "A"})
    b = store.create({"name": "B", "population": 1, "country": "X"})
    store.create({"name": "C"})

    updated = store.update(b["id"], {"id": 100, "name": "B2"})

    assert updated == {"id": b["id"], "name": "B2"}
    assert [c["name"] for c in store.list()] == ["A", "B2", "C"]


def test_delete_removes_one_record():
    store = CityStore()
    a = store.create({"name": "A"})
    b = store.create({"name": "B"})
    c = store.create({"name": "C"})
    store.delete(b["id"])
    assert store.list() == [a, c]


def test_ids_are_never_reused():
    store = CityStore()
    city = store.create({"name": "A"})
    store.delete(city["id"])
    assert store.create({"name": "B"})["id"] == city["id"] + 1


@pytest.mark.parametrize("operation", ["get", "update", "delete"])
def test_missing_city_raises(operation):
    store = CityStore()
    store.create({"name": "A"})
    args = (999999, {"name": "X"}) if operation == "update" else (999999,)
    with pytest.raises(CityNotFoundError) as excinfo:
        getattr(store, operation)(*args)
    assert excinfo.value.city_id == 999999


def test_unparseable_id_is_not_found():
    store = CityStore()
    store.create({"name": "A"})
    with pytest.raises(CityNotFoundError):
        store.get(parse_city_id("abc"))


def test_seeded_store_continues_after_highest_id():
    store = CityStore(SAMPLE_CITIES)
    assert [c["name"] for c in store.list()] == ["Addis Ababa", "New York"]
    assert store.next_id == 3
    assert store.create({"name": "Nairobi"})["id"] == 3


def test_seeded_store_copies_records():
    store = CityStore(SAMPLE_CITIES)
    store.update(1, {"name": "Renamed"})
    assert SAMPLE_CITIES[0]["name"] == "Addis Ababa"


def test_seed_records_without_id_get_one():
    store = CityStore([{"name": "A"}, {"id": 5, "name": "B"}, {"id": 5, "name": "C"}])
    assert [c["id"] for c in store.list()] == [1, 5, 6]
    assert store.next_id == 7
