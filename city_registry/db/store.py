"""In-memory city store.

The store owns an ordered list of city records (plain dicts) and the id
counter. It lives for the lifetime of the process and is discarded on exit.
Handlers run on the event loop thread, so mutations are never interleaved
and no lock is taken.
"""
import re
from typing import Any, Dict, Iterable, List, Optional

from fastapi import Request

from city_registry.core.logging import get_logger

logger = get_logger("city_registry.store")

CityRecord = Dict[str, Any]

# Leading integer of a path segment: "12abc" and "1.5" both read as a number
_CITY_ID_PREFIX = re.compile(r"\s*([+-]?[0-9]+)")

SAMPLE_CITIES: List[CityRecord] = [
    {"id": 1, "name": "Addis Ababa", "population": 5000000, "country": "Ethiopia"},
    {"id": 2, "name": "New York", "population": 8400000, "country": "USA"},
]


class CityNotFoundError(LookupError):
    """No stored city has the requested id."""

    def __init__(self, city_id: Optional[int]):
        self.city_id = city_id
        super().__init__(f"City {city_id} not found")


def parse_city_id(raw: Any) -> Optional[int]:
    """
    Parse a path segment into a city id.

    Reads the leading (optionally signed) integer and ignores whatever
    follows it. A segment with no leading integer gives None, which
    matches no record.
    """
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if not isinstance(raw, str):
        return None
    match = _CITY_ID_PREFIX.match(raw)
    return int(match.group(1)) if match else None


def _without_id(payload: Dict[str, Any]) -> Dict[str, Any]:
    return {key: value for key, value in payload.items() if key != "id"}


class CityStore:
    """Ordered in-memory collection of cities plus the next-id counter."""

    def __init__(self, initial: Optional[Iterable[CityRecord]] = None):
        self._cities: List[CityRecord] = []
        self._next_id = 1

        for record in initial or ():
            city_id = parse_city_id(record.get("id"))
            if city_id is None or self._find_index(city_id) is not None:
                city_id = self._next_id
            self._cities.append({"id": city_id, **_without_id(record)})
            self._next_id = max(self._next_id, city_id + 1)

    def __len__(self) -> int:
        return len(self._cities)

    @property
    def next_id(self) -> int:
        return self._next_id

    def _find_index(self, city_id: Optional[int]) -> Optional[int]:
        if city_id is None:
            return None
        for index, city in enumerate(self._cities):
            if city["id"] == city_id:
                return index
        return None

    def _index_or_raise(self, city_id: Optional[int]) -> int:
        index = self._find_index(city_id)
        if index is None:
            raise CityNotFoundError(city_id)
        return index

    def list(self) -> List[CityRecord]:
        """Return all cities in insertion order."""
        return self._cities

    def get(self, city_id: Optional[int]) -> CityRecord:
        return self._cities[self._index_or_raise(city_id)]

    def create(self, payload: Dict[str, Any]) -> CityRecord:
        """
        Append a new city built from the payload.

        The server-assigned id always wins: any `id` in the payload is dropped.
        """
        city = {"id": self._next_id, **_without_id(payload)}
        self._next_id += 1
        self._cities.append(city)
        logger.info("City created", extra={"city_id": city["id"]})
        return city

    def update(self, city_id: Optional[int], payload: Dict[str, Any]) -> CityRecord:
        """
        Replace every field of a city except its id.

        Fields missing from the payload are dropped from the record.
        """
        index = self._index_or_raise(city_id)
        city = {"id": self._cities[index]["id"], **_without_id(payload)}
        self._cities[index] = city
        logger.info("City updated", extra={"city_id": city["id"]})
        return city

    def delete(self, city_id: Optional[int]) -> None:
        index = self._index_or_raise(city_id)
        del self._cities[index]
        logger.info("City deleted", extra={"city_id": city_id})


def get_store(request: Request) -> CityStore:
    """FastAPI dependency returning the store owned by the application."""
    return request.app.state.store
