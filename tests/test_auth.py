# tests/test_auth.py
import json
import time
from concurrent.futures import ThreadPoolExecutor

import pytest

from app.core.errors import PortalError
from app.core.storage import StorageKey
from app.user import services as user_service
from app.user.schemas import RegisterForm


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"


def test_seeded_admin_exists(state):
    assert len(state.users) == 1
    admin = state.users[0]
    assert admin.id == 1
    assert admin.login == "admin"
    assert admin.is_admin is True


@pytest.mark.parametrize("password", ["password", "123456"])
def test_admin_login_succeeds(client, state, storage, password):
    r = client.post("/auth/login", json={"login": "admin", "password": password})
    assert r.status_code == 200
    data = r.json()
    assert data["user"]["login"] == "admin"
    assert data["user"]["isAdmin"] is True
    assert data["notification"]["severity"] == "success"
    assert "Администратор" in data["notification"]["message"]

    assert state.current_user.id == 1
    assert json.loads(storage.get(StorageKey.CURRENT_USER.value))["login"] == "admin"


def test_wrong_password_fails_and_leaves_session_unset(client, state, storage):
    r = client.post("/auth/login", json={"login": "admin", "password": "wrong"})
    assert r.status_code == 401
    body = r.json()
    assert body["error"] == "AUTH_ERROR"
    assert body["details"] is None
    assert body["notification"]["severity"] == "error"
    assert state.current_user is None
    assert storage.get(StorageKey.CURRENT_USER.value) is None


def test_unknown_login_gets_same_error_as_wrong_password(client):
    unknown = client.post("/auth/login", json={"login": "ghost", "password": "password"})
    wrong = client.post("/auth/login", json={"login": "admin", "password": "nope"})
    assert unknown.status_code == wrong.status_code == 401
    assert unknown.json() == wrong.json()


def test_register_appends_user_and_opens_session(client, state, storage, register_form):
    r = client.post("/auth/register", json=register_form)
    assert r.status_code == 201
    user = r.json()["user"]
    assert user["id"] == 2
    assert user["fullName"] == register_form["fullName"]
    assert user["phone"] == register_form["phone"]
    assert user["isAdmin"] is False
    assert "password" not in user

    assert len(state.users) == 2
    assert state.current_user.login == "ivan_42"

    stored_users = json.loads(storage.get(StorageKey.USERS.value))
    assert [u["login"] for u in stored_users] == ["admin", "ivan_42"]
    assert json.loads(storage.get(StorageKey.CURRENT_USER.value))["id"] == 2


def test_register_with_taken_login_appends_nothing(client, state, storage, register_form):
    register_form["login"] = "admin"
    r = client.post("/auth/register", json=register_form)
    assert r.status_code == 422
    body = r.json()
    assert body["error"] == "VALIDATION_ERROR"
    assert body["details"] == {"login": "Этот логин уже занят"}
    assert body["notification"]["message"] == "Проверьте правильность заполнения полей"

    assert len(state.users) == 1
    assert state.current_user is None
    assert storage.get(StorageKey.USERS.value) is None


def test_register_twice_with_same_login(client, register_form):
    assert client.post("/auth/register", json=register_form).status_code == 201
    client.post("/auth/logout")
    r = client.post("/auth/register", json=register_form)
    assert r.status_code == 422
    assert "login" in r.json()["details"]


def test_registered_user_can_log_back_in(client, resident, login_as):
    client.post("/auth/logout")
    user = login_as("ivan_42", "123456")
    assert user["id"] == resident["id"]


def test_logout_clears_session(client, state, storage, login_as):
    login_as("admin")
    r = client.post("/auth/logout")
    assert r.status_code == 200
    assert r.json()["title"] == "Вы вышли"
    assert state.current_user is None
    assert storage.get(StorageKey.CURRENT_USER.value) is None


def test_session_endpoint(client, login_as):
    assert client.get("/auth/session").json()["user"] is None
    login_as("admin")
    assert client.get("/auth/session").json()["user"]["login"] == "admin"


def test_login_while_signed_in_is_refused(client, state, resident):
    r = client.post("/auth/login", json={"login": "admin", "password": "password"})
    assert r.status_code == 409
    assert r.json()["error"] == "ALREADY_AUTHENTICATED"
    assert r.json()["notification"]["severity"] == "error"
    assert state.current_user.id == resident["id"]


def test_register_while_signed_in_is_refused(client, state, login_as, register_form):
    login_as("admin")
    r = client.post("/auth/register", json=register_form)
    assert r.status_code == 409
    assert len(state.users) == 1
    assert state.current_user.login == "admin"


def test_concurrent_registrations_keep_login_unique(state, monkeypatch):
    original = user_service.validate_registration

    def slow_validate(form, users):
        errors = original(form, users)
        time.sleep(0.2)
        return errors

    monkeypatch.setattr(user_service, "validate_registration", slow_validate)
    # both attempts start signed out, so only the login check can stop the second
    monkeypatch.setattr(user_service, "ensure_signed_out", lambda state: None)
    form = RegisterForm(
        full_name="Иванов Иван",
        login="ivan_42",
        email="ivan@mail.ru",
        phone="+7 (912)345-67-89",
        password="secret1",
        confirm_password="secret1",
    )

    def attempt(_):
        try:
            user_service.register(state, form)
            return "ok"
        except PortalError as e:
            return e.code

    with ThreadPoolExecutor(max_workers=2) as pool:
        outcomes = list(pool.map(attempt, range(2)))

    assert sorted(outcomes) == ["VALIDATION_ERROR", "ok"]
    assert [u.login for u in state.users] == ["admin", "ivan_42"]
    assert [u.id for u in state.users] == [1, 2]
