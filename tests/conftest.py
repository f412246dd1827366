"""Shared fixtures: every test gets its own store, app and HTTP client."""
from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from chatrooms.main import create_app
from chatrooms.services.room_store import RoomStore


@pytest.fixture
def store() -> RoomStore:
    return RoomStore()


@pytest.fixture
def app(store):
    return create_app(store)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client
