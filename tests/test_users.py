from datetime import datetime
from types import SimpleNamespace
import itertools

import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.modules.users.repository import get_users_repository
from app.shared.database.list_query import Page

USERS_URL = "/api/v1/users"


class InMemoryUsersRepository:
    """Dict-backed stand-in for the SQL repository"""

    def __init__(self):
        self.rows = {}
        self._ids = itertools.count(1)

    def list_users(self, params, search=None, role=None):
        rows = list(self.rows.values())
        if search:
            term = search.lower()
            rows = [r for r in rows if term in r.name.lower() or term in r.email.lower()]
        if role:
            rows = [r for r in rows if r.role == role]
        rows.sort(key=lambda r: r.created_at, reverse=params.sort_order == "desc")
        start = params.offset
        return Page(items=rows[start:start + params.limit], total_items=len(rows), page=params.page, limit=params.limit)

    def get_user(self, user_id):
        return self.rows.get(user_id)

    def create_user(self, user_data):
        user_id = f"u{next(self._ids)}"
        user = SimpleNamespace(id=user_id, created_at=datetime(2024, 1, len(self.rows) + 1), **user_data)
        self.rows[user_id] = user
        return user

    def update_user(self, user, changes):
        for field, value in changes.items():
            setattr(user, field, value)
        return user

    def delete_user(self, user):
        del self.rows[user.id]


@pytest.fixture()
def repository():
    return InMemoryUsersRepository()


@pytest.fixture()
def users_client(repository):
    app.dependency_overrides[get_users_repository] = lambda: repository
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_create_user_defaults_role(users_client):
    response = users_client.post(USERS_URL, json={"name": "Ada", "email": "ADA@example.com"})

    assert response.status_code == 201
    body = response.json()
    assert body["role"] == "user"
    assert body["email"] == "ada@example.com"


def test_create_user_requires_name_and_email(users_client):
    assert users_client.post(USERS_URL, json={"email": "ada@example.com"}).status_code == 400
    assert users_client.post(USERS_URL, json={"name": "Ada", "email": "nope"}).status_code == 400


def test_update_merges_fields(users_client, repository):
    user_id = users_client.post(USERS_URL, json={"name": "Ada", "email": "ada@example.com"}).json()["id"]

    response = users_client.put(f"{USERS_URL}/{user_id}", json={"role": "admin"})

    assert response.status_code == 200
    assert response.json()["name"] == "Ada"
    assert response.json()["role"] == "admin"
    assert repository.rows[user_id].email == "ada@example.com"


def test_get_and_delete(users_client):
    user_id = users_client.post(USERS_URL, json={"name": "Ada", "email": "ada@example.com"}).json()["id"]

    assert users_client.get(f"{USERS_URL}/{user_id}").status_code == 200
    assert users_client.delete(f"{USERS_URL}/{user_id}").status_code == 200
    assert users_client.get(f"{USERS_URL}/{user_id}").status_code == 404
    assert users_client.delete(f"{USERS_URL}/{user_id}").status_code == 404


def test_list_users(users_client):
    for name in ("Ada", "Grace", "Alan"):
        users_client.post(USERS_URL, json={"name": name, "email": f"{name.lower()}@example.com"})

    body = users_client.get(USERS_URL, params={"search": "gra", "limit": 2}).json()

    assert body["pagination"]["totalItems"] == 1
    assert body["items"][0]["name"] == "Grace"


def test_sql_repository(client):
    created = client.post(USERS_URL, json={"name": "Ada", "email": "ada@example.com", "role": "admin"})
    user_id = created.json()["id"]

    body = client.get(USERS_URL, params={"role": "admin"}).json()

    assert body["pagination"]["totalItems"] == 1
    assert body["items"][0]["id"] == user_id
