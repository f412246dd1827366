# chatrooms/models/models.py
from datetime import datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class Room(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    created_at: datetime


class ChatMessage(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    room_id: str
    author: str
    body: str
    sent_at: datetime


class CreateRoomRequest(BaseModel):
    # Absent and empty are both rejected by the route, not by pydantic
    name: str = ""


class PostMessageRequest(BaseModel):
    """Older clients send ``username``/``content``; both spellings are accepted."""

    author: str = Field(default="", validation_alias=AliasChoices("author", "username"))
    body: str = Field(default="", validation_alias=AliasChoices("body", "content"))
