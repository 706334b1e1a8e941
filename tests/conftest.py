import pytest
from fastapi.testclient import TestClient

from flights_api.app.core.store import FlightStore
from flights_api.app.main import create_app
from flights_api.app.services.flight_service import FlightService


@pytest.fixture
def store():
    """A fresh store holding the ten sample flights."""
    return FlightStore()


@pytest.fixture
def empty_store():
    return FlightStore(seed=False)


@pytest.fixture
def service(store):
    return FlightService(store)


@pytest.fixture
def client(store):
    return TestClient(create_app(store=store))
