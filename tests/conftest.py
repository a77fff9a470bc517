"""Pytest configuration and shared fixtures"""

import os

# must be set before the application modules read their configuration
os.environ.setdefault("APP_CONFIG_PATH", os.path.join(os.path.dirname(__file__), "test_application.conf"))

import pytest
from typing import Generator
from fastapi.testclient import TestClient

from app_constants.app_configurations import Demo
from app_constants.connectors import get_storage
from main import app
from scripts.handlers.demo_data_handler import seed_demo_account
from scripts.handlers.user_management_handler import create_user, get_user_by_username
from scripts.models.user_management import User, UserCreate
from scripts.utils.db_util import DatabaseUtil
from scripts.utils.storage_util import SQLStorage


@pytest.fixture
def database() -> Generator[DatabaseUtil, None, None]:
    """A fresh in-memory database per test"""
    database = DatabaseUtil("sqlite://")
    database.create_tables()
    yield database
    database.drop_tables()
    database.engine.dispose()


@pytest.fixture
def storage(database) -> Generator[SQLStorage, None, None]:
    with database.get_db_context() as db:
        yield SQLStorage(db)


@pytest.fixture
def demo_user(storage) -> User:
    seed_demo_account(storage)
    return get_user_by_username(storage, Demo.USERNAME)


@pytest.fixture
def make_user(storage):
    """Factory registering plain accounts straight through the handler"""
    def _make_user(username: str, providers=None) -> User:
        user = create_user(storage, UserCreate(username=username, password="secret-pass",
                                               email=f"{username}@syncvault.io", providers=providers))
        storage.commit()
        return user
    return _make_user


@pytest.fixture
def api(database) -> Generator[None, None, None]:
    """Route the app to the test database, seeded with the demo account"""
    with database.get_db_context() as db:
        seed_demo_account(SQLStorage(db))

    def override_storage():
        with database.get_db_context() as db:
            yield SQLStorage(db)

    app.dependency_overrides[get_storage] = override_storage
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def anonymous_client(api) -> TestClient:
    return TestClient(app)


@pytest.fixture
def demo_client(api) -> TestClient:
    client = TestClient(app)
    response = client.post("/api/auth/login", json={"username": Demo.USERNAME, "password": Demo.PASSWORD})
    assert response.status_code == 200
    return client


@pytest.fixture
def other_client(api) -> TestClient:
    """A second, freshly signed-up account with an empty drive"""
    client = TestClient(app)
    response = client.post("/api/auth/signup", json={
        "username": "bob",
        "password": "secret-pass",
        "email": "bob@syncvault.io",
        "fullName": "Bob Builder",
    })
    assert response.status_code == 201
    return client
