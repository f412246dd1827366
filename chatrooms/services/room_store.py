# chatrooms/services/room_store.py

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional, Tuple

from chatrooms.core.logging import get_logger
from chatrooms.models.models import ChatMessage, Room
from chatrooms.services.locks import ReadWriteLock

logger = get_logger(__name__)


def _new_id() -> str:
    return str(uuid.uuid4())


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class RoomNotFoundError(LookupError):
    """Raised when an operation targets a room id the store has never issued."""

    def __init__(self, room_id: str) -> None:
        super().__init__(f"Room not found: {room_id}")
        self.room_id = room_id


# ============================================================================
# IN-MEMORY ROOM STORE
# ============================================================================

class RoomStore:
    """
    Owns every room and every message, in memory only.

    Nothing survives a restart. One instance is created per application
    (see ``create_app``) and tests build as many independent ones as they like.

    Data Structures:
        rooms: Maps room_id -> Room
               Example: {"uuid-123": Room(id="uuid-123", name="General", ...)}

        messages: Maps room_id -> List[ChatMessage] in insertion order
                  Example: {"uuid-123": [m1, m2]}

    Both maps always hold the same keys: a room and its (possibly empty)
    message list are inserted together under the write lock, and no
    operation removes either.

    Ordering:
        Insertion order is authoritative. ``sent_at`` is informational and
        two messages may share a timestamp on a coarse clock.

    Concurrency:
        A single ReadWriteLock guards both maps. Lookups and snapshots take
        the shared side, room creation and message appends the exclusive
        side. The lock is never held across I/O or while taking another lock.

    Usage:
        store = RoomStore()
        room = store.create_room("General")
        store.add_message(room.id, "alice", "hi")
        history = store.get_messages(room.id)
    """

    def __init__(
        self,
        id_factory: Callable[[], str] = _new_id,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        """
        Args:
            id_factory: Returns a fresh, never reused identifier per call
            clock: Returns the current time for created_at / sent_at
        """
        self._id_factory = id_factory
        self._clock = clock
        self._lock = ReadWriteLock()
        self._rooms: Dict[str, Room] = {}
        self._messages: Dict[str, List[ChatMessage]] = {}

    def create_room(self, name: str) -> Room:
        """
        Create a room together with its empty message list.

        The store accepts any name, including an empty one. Rejecting
        empty names is the request layer's job.

        Args:
            name: Display name of the room

        Returns:
            Room: The newly created room
        """
        with self._lock.write():
            room = Room(id=self._id_factory(), name=name, created_at=self._clock())
            self._rooms[room.id] = room
            self._messages[room.id] = []

        logger.info("✓ Created room %s (%r)", room.id, room.name)
        return room

    def get_room(self, room_id: str) -> Optional[Room]:
        """
        Get a room by ID.

        Returns:
            Room object if found, None otherwise
        """
        with self._lock.read():
            return self._rooms.get(room_id)

    def list_rooms(self) -> List[Room]:
        """
        Snapshot of all rooms. Order is unspecified and may differ between calls.
        """
        with self._lock.read():
            return list(self._rooms.values())

    def add_message(self, room_id: str, author: str, body: str) -> ChatMessage:
        """
        Append a message to a room.

        Args:
            room_id: Target room UUID
            author: Who wrote it
            body: Message text

        Returns:
            ChatMessage: The stored message, with fresh id and sent_at

        Raises:
            RoomNotFoundError: If room_id is unknown. Nothing is stored.
        """
        with self._lock.write():
            history = self._messages.get(room_id)
            if history is None:
                raise RoomNotFoundError(room_id)

            message = ChatMessage(
                id=self._id_factory(),
                room_id=room_id,
                author=author,
                body=body,
                sent_at=self._clock(),
            )
            history.append(message)

        logger.debug("📨 Appended message %s to room %s", message.id, room_id)
        return message

    def get_messages(self, room_id: str) -> List[ChatMessage]:
        """
        Snapshot of a room's history in insertion order.

        The returned list is a copy: later appends never show up in it.
        An existing room without messages yields ``[]``.

        Raises:
            RoomNotFoundError: If room_id is unknown
        """
        with self._lock.read():
            history = self._messages.get(room_id)
            if history is None:
                raise RoomNotFoundError(room_id)
            return list(history)

    def counts(self) -> Tuple[int, int]:
        """
        Room and message totals read together, so the pair is always one
        consistent state even while posts are landing.

        Returns:
            (rooms, messages)
        """
        with self._lock.read():
            return len(self._rooms), sum(len(h) for h in self._messages.values())

    def room_count(self) -> int:
        with self._lock.read():
            return len(self._rooms)

    def message_count(self) -> int:
        with self._lock.read():
            return sum(len(history) for history in self._messages.values())
