"""CLI client driven line by line against the real app."""
from __future__ import annotations

import httpx
import pytest

from chatrooms.client import ChatClient, main


@pytest.fixture
def output():
    return []


@pytest.fixture
def chat(client, output):
    return ChatClient("http://testserver", "alice", http=client, out=output.append)


def test_list_without_rooms_prints_hint(chat, output):
    chat.handle_line("/list")

    assert output == ["No rooms available. Create one with /create NAME"]


def test_create_uses_rest_of_line_as_name(chat, store, output):
    chat.handle_line("/create Product Team")

    rooms = store.list_rooms()
    assert [r.name for r in rooms] == ["Product Team"]
    assert output[0] == f"Created room 'Product Team' with ID: {rooms[0].id[:8]}"
    assert output[1] == f"Join it with: /join {rooms[0].id}"


def test_list_shows_short_ids(chat, store, output):
    room = store.create_room("General")

    chat.handle_line("/list")

    assert output[0] == "Available rooms:"
    assert output[1].startswith(f"  ID: {room.id[:8]} | Name: General | Created: ")


def test_join_unknown_room(chat, output):
    chat.handle_line("/join nonexistent")

    assert output == ["Room not found"]
    assert chat.current_room is None


def test_join_post_and_refresh(chat, store, output):
    room = store.create_room("General")
    store.add_message(room.id, "bob", "hey")

    chat.handle_line(f"/join {room.id}")
    assert chat.current_room == room.id
    assert any(line.endswith("bob: hey") for line in output)

    chat.handle_line("hello everyone")
    history = store.get_messages(room.id)
    assert [(m.author, m.body) for m in history] == [("bob", "hey"), ("alice", "hello everyone")]

    output.clear()
    chat.handle_line("/refresh")
    assert output[0] == "=== Refreshed Messages ==="
    assert output[1].endswith("bob: hey")
    assert output[2].endswith("You: hello everyone")


def test_join_empty_room(chat, store, output):
    room = store.create_room("Quiet")

    chat.handle_line(f"/join {room.id}")

    assert "(No messages yet)" in output


def test_text_without_room_is_not_sent(chat, store, output):
    chat.handle_line("hello?")

    assert output == ["Please join a room first using /join ID"]
    assert store.message_count() == 0


@pytest.mark.parametrize(
    "line, expected",
    [
        ("/create", "Usage: /create NAME"),
        ("/join", "Usage: /join ID"),
        ("/join a b", "Usage: /join ID"),
        ("/refresh", "Not in a room"),
        ("/dance", "Unknown command: /dance"),
    ],
)
def test_command_usage_errors(chat, output, line, expected):
    assert chat.handle_line(line) is True
    assert output == [expected]


def test_quit_stops_run(chat, store, output):
    chat.run(["/create Lobby", "/quit", "/create Never"])

    assert [r.name for r in store.list_rooms()] == ["Lobby"]
    assert output[-1] == "Goodbye!"


def test_transport_errors_are_reported():
    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    output = []
    http = httpx.Client(base_url="http://chat.invalid", transport=httpx.MockTransport(refuse))
    chat = ChatClient("http://chat.invalid", "alice", http=http, out=output.append)

    assert chat.handle_line("/list") is True
    assert output == ["Error fetching rooms: connection refused"]


def test_main_requires_username():
    with pytest.raises(SystemExit):
        main([])
