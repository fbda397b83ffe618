from __future__ import annotations

from typing import Any

import pytest
from starlette.testclient import TestClient

from employee_management.core.cosmos import CosmosStore
from employee_management.main import app
from employee_management.models.employee import Employee
from tests.fakes import InMemoryContainer, make_cosmos_client

TEST_CONNECTION_STRING = "AccountEndpoint=https://localhost:8081/;AccountKey=dGVzdC1rZXk=;"
TEST_FUNCTION_KEY = "test-function-key"


def make_employee_payload(**overrides: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "id": "",
        "employeeId": 1001,
        "firstName": "Joe",
        "lastName": "Shenfield",
        "position": "Engineer",
        "department": {"departmentId": "ENG", "departmentName": "Engineering"},
        "address": {"street": "1 Main St", "city": "Springfield", "state": "IL", "zipCode": "62701"},
    }
    payload.update(overrides)
    return payload


def make_employee(**overrides: Any) -> Employee:
    return Employee.model_validate(make_employee_payload(**overrides))


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture(autouse=True)
def _cosmos_settings():
    from employee_management.core.config import settings

    original_connection = settings.COSMOS_DB_CONNECTION_STRING
    original_key = settings.FUNCTION_KEY
    settings.COSMOS_DB_CONNECTION_STRING = TEST_CONNECTION_STRING
    settings.FUNCTION_KEY = ""
    yield
    settings.COSMOS_DB_CONNECTION_STRING = original_connection
    settings.FUNCTION_KEY = original_key


@pytest.fixture
def container() -> InMemoryContainer:
    return InMemoryContainer()


@pytest.fixture
def cosmos_store(container) -> CosmosStore:
    return CosmosStore(client=make_cosmos_client(container))


@pytest.fixture
def initialized_store(cosmos_store, container) -> CosmosStore:
    cosmos_store._container = container
    cosmos_store.initialized = True
    return cosmos_store


@pytest.fixture
def client(cosmos_store, monkeypatch):
    monkeypatch.setattr(CosmosStore, "from_settings", lambda _settings: cosmos_store)
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def keyed_client(client):
    from employee_management.core.config import settings

    settings.FUNCTION_KEY = TEST_FUNCTION_KEY
    return client
