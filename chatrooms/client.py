# chatrooms/client.py

from __future__ import annotations

import argparse
import sys
from typing import Callable, Iterable, List, Optional, Sequence

import httpx

from chatrooms.core.config import settings
from chatrooms.models.models import ChatMessage, Room

HELP_TEXT = """Commands:
  /list        - List all rooms
  /create NAME - Create a new room
  /join ID     - Join a room
  /refresh     - Refresh messages in current room
  /quit        - Exit the application
"""


class ChatClient:
    """
    Interactive polling client for the rooms API.

    There is no push channel: history is fetched on /join and /refresh.
    Any line that is not a command is posted to the joined room.

    Args:
        server_url: Base URL of the server, e.g. http://localhost:8080
        username: Author name attached to every posted message
        http: Preconfigured httpx.Client (tests pass a FastAPI TestClient)
        out: Where user-facing lines go
    """

    def __init__(
        self,
        server_url: str,
        username: str,
        http: Optional[httpx.Client] = None,
        out: Callable[[str], None] = print,
    ) -> None:
        self.username = username
        self.current_room: Optional[str] = None
        self.http = http or httpx.Client(base_url=server_url, timeout=settings.CLIENT_TIMEOUT)
        self.out = out

    # ------------------------------------------------------------------
    # Input loop
    # ------------------------------------------------------------------

    def run(self, lines: Optional[Iterable[str]] = None) -> None:
        """Read lines (stdin by default) until /quit or end of input."""
        self.out(f"Welcome to Chatrooms, {self.username}!")
        self.out(HELP_TEXT)

        source = lines if lines is not None else self._prompt_lines()
        for line in source:
            if not self.handle_line(line):
                break

    def _prompt_lines(self) -> Iterable[str]:
        while True:
            prompt = f"[{self.current_room[:8]}] > " if self.current_room else "> "
            try:
                yield input(prompt)
            except (EOFError, KeyboardInterrupt):
                return

    def handle_line(self, line: str) -> bool:
        """
        Dispatch one line of input.

        Returns:
            False once the user asked to quit, True otherwise
        """
        line = line.strip()
        if not line:
            return True

        if line.startswith("/"):
            return self.handle_command(line)

        if self.current_room:
            self.send_message(line)
        else:
            self.out("Please join a room first using /join ID")
        return True

    def handle_command(self, command: str) -> bool:
        parts = command.split()
        name = parts[0]

        if name == "/list":
            self.list_rooms()
        elif name == "/create":
            if len(parts) < 2:
                self.out("Usage: /create NAME")
            else:
                self.create_room(" ".join(parts[1:]))
        elif name == "/join":
            if len(parts) != 2:
                self.out("Usage: /join ID")
            else:
                self.join_room(parts[1])
        elif name == "/refresh":
            if self.current_room:
                self.refresh_messages()
            else:
                self.out("Not in a room")
        elif name == "/quit":
            self.out("Goodbye!")
            return False
        else:
            self.out(f"Unknown command: {name}")
        return True

    # ------------------------------------------------------------------
    # API calls
    # ------------------------------------------------------------------

    def list_rooms(self) -> None:
        try:
            response = self.http.get("/api/rooms")
            response.raise_for_status()
        except httpx.HTTPError as e:
            self.out(f"Error fetching rooms: {e}")
            return

        rooms = [Room.model_validate(r) for r in response.json()]
        if not rooms:
            self.out("No rooms available. Create one with /create NAME")
            return

        self.out("Available rooms:")
        for room in sorted(rooms, key=lambda r: r.created_at):
            self.out(
                f"  ID: {room.id[:8]} | Name: {room.name} | "
                f"Created: {room.created_at:%H:%M:%S}"
            )

    def create_room(self, name: str) -> Optional[Room]:
        try:
            response = self.http.post("/api/rooms", json={"name": name})
        except httpx.HTTPError as e:
            self.out(f"Error creating room: {e}")
            return None

        if response.status_code != 201:
            self.out(f"Failed to create room: {_detail(response)}")
            return None

        room = Room.model_validate(response.json())
        self.out(f"Created room '{room.name}' with ID: {room.id[:8]}")
        self.out(f"Join it with: /join {room.id}")
        return room

    def join_room(self, room_id: str) -> None:
        # Fetching the history doubles as the existence check
        messages = self._fetch_messages(room_id, "Error joining room")
        if messages is None:
            return

        self.current_room = room_id
        self.out(f"Joined room {room_id[:8]}")
        self._print_history("=== Chat History ===", messages)

    def refresh_messages(self) -> None:
        messages = self._fetch_messages(self.current_room, "Error fetching messages")
        if messages is not None:
            self._print_history("=== Refreshed Messages ===", messages)

    def send_message(self, body: str) -> Optional[ChatMessage]:
        try:
            response = self.http.post(
                f"/api/rooms/{self.current_room}/messages",
                json={"author": self.username, "body": body},
            )
        except httpx.HTTPError as e:
            self.out(f"Error sending message: {e}")
            return None

        if response.status_code != 201:
            self.out(f"Failed to send message: {_detail(response)}")
            return None
        return ChatMessage.model_validate(response.json())

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _fetch_messages(self, room_id: str, error_prefix: str) -> Optional[List[ChatMessage]]:
        try:
            response = self.http.get(f"/api/rooms/{room_id}/messages")
        except httpx.HTTPError as e:
            self.out(f"{error_prefix}: {e}")
            return None

        if response.status_code == 404:
            self.out("Room not found")
            return None
        if response.status_code != 200:
            self.out(f"{error_prefix}: {_detail(response)}")
            return None
        return [ChatMessage.model_validate(m) for m in response.json()]

    def _print_history(self, header: str, messages: List[ChatMessage]) -> None:
        self.out(header)
        if not messages:
            self.out("(No messages yet)")
        for message in messages:
            self.out(self.format_message(message))
        self.out("=" * len(header))

    def format_message(self, message: ChatMessage) -> str:
        who = "You" if message.author == self.username else message.author
        return f"[{message.sent_at:%H:%M:%S}] {who}: {message.body}"

    def close(self) -> None:
        self.http.close()


def _detail(response: httpx.Response) -> str:
    try:
        data = response.json()
    except ValueError:
        return response.text
    if isinstance(data, dict) and "detail" in data:
        return str(data["detail"])
    return response.text


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Polling Chatrooms client")
    parser.add_argument("--username", required=True, help="Your username")
    parser.add_argument("--server", default=settings.SERVER_URL,
                        help=f"Server URL (default: {settings.SERVER_URL})")
    args = parser.parse_args(argv)

    client = ChatClient(args.server, args.username)
    try:
        client.run()
    finally:
        client.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
