"""
Shared fixtures: a fresh in-memory portal per test and a client wired to it.
"""

import os

# Keep the SQL engine off disk before any app imports
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient

from app.core.storage import InMemoryKeyValueStore
from app.main import app
from app.portal.dependencies import get_portal_state, get_view_controller
from app.portal.state import PortalState
from app.portal.view import ViewController


@pytest.fixture
def storage():
    return InMemoryKeyValueStore()


@pytest.fixture
def state(storage):
    return PortalState.load(storage)


@pytest.fixture
def view():
    return ViewController()


@pytest.fixture
def client(state, view):
    app.dependency_overrides[get_portal_state] = lambda: state
    app.dependency_overrides[get_view_controller] = lambda: view
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def register_form():
    """A registration form that passes every check."""
    return {
        "fullName": "Иванов Иван Иванович",
        "login": "ivan_42",
        "email": "ivan@mail.ru",
        "phone": "+7 (912)345-67-89",
        "password": "secret1",
        "confirmPassword": "secret1",
    }


@pytest.fixture
def resident(client, register_form):
    r = client.post("/auth/register", json=register_form)
    assert r.status_code == 201
    return r.json()["user"]


@pytest.fixture
def login_as(client):
    def _login(login: str, password: str = "password"):
        client.post("/auth/logout")
        r = client.post("/auth/login", json={"login": login, "password": password})
        assert r.status_code == 200
        return r.json()["user"]

    return _login
