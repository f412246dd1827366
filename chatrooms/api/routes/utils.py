# chatrooms/api/routes/utils.py

from __future__ import annotations

from fastapi import Request

from chatrooms.services.room_store import RoomStore


def get_store(request: Request) -> RoomStore:
    """
    Dependency returning the store owned by the running app.

    The store lives on ``app.state`` rather than in a module global, so every
    app built by ``create_app`` (one per test, usually) has its own rooms.
    """
    return request.app.state.store
