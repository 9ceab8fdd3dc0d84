import pytest
from fastapi.testclient import TestClient

from city_registry.core.config import Settings
from city_registry.db.store import CityStore
from city_registry.main import create_app


@pytest.fixture
def settings():
    """Settings isolated from the environment and any .env file."""
    return Settings(_env_file=None, app_env="test", port=3000)


@pytest.fixture
def store():
    return CityStore()


@pytest.fixture
def app(settings, store):
    return create_app(settings=settings, store=store)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def strict_client(settings):
    """Client for an app that enforces the documented payload schema."""
    strict = settings.model_copy(update={"validate_payloads": True})
    with TestClient(create_app(settings=strict, store=CityStore())) as c:
        yield c


@pytest.fixture
def addis_ababa():
    return {"name": "Addis Ababa", "population": 5000000, "country": "Ethiopia"}
