# chatrooms/api/routes/rooms.py

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from chatrooms.api.routes.utils import get_store
from chatrooms.core.logging import get_logger
from chatrooms.models.models import ChatMessage, CreateRoomRequest, PostMessageRequest, Room
from chatrooms.services.room_store import RoomNotFoundError, RoomStore

logger = get_logger(__name__)

# Handlers are plain ``def`` so FastAPI runs each request on its worker
# threadpool; the store does its own locking.
router = APIRouter(prefix="/api/rooms", tags=["rooms"])

# ============================================================================
# ROOM ENDPOINTS
# ============================================================================

@router.get("", response_model=List[Room])
def list_rooms(store: RoomStore = Depends(get_store)):
    """
    List all rooms.

    Returns:
        List[Room]: Every room, in no particular order. Empty list if none.
    """
    return store.list_rooms()


@router.post("", response_model=Room, status_code=status.HTTP_201_CREATED)
def create_room(request: CreateRoomRequest, store: RoomStore = Depends(get_store)):
    """
    Create a new chatroom.

    Args:
        request: CreateRoomRequest with name

    Returns:
        Room: The newly created room (201)

    Raises:
        HTTPException: 400 if name is empty or missing
    """
    if not request.name:
        logger.info("Rejected room creation: empty name")
        raise HTTPException(status_code=400, detail="Room name is required")

    return store.create_room(request.name)


@router.get("/{room_id}", response_model=Room)
def get_room(room_id: str, store: RoomStore = Depends(get_store)):
    """
    Get details of a specific room.

    Raises:
        HTTPException: 404 if room not found
    """
    room = store.get_room(room_id)
    if room is None:
        logger.info("Room %s not found", room_id)
        raise HTTPException(status_code=404, detail="Room not found")
    return room


# ============================================================================
# MESSAGE ENDPOINTS
# ============================================================================

@router.get("/{room_id}/messages", response_model=List[ChatMessage])
def get_messages(room_id: str, store: RoomStore = Depends(get_store)):
    """
    Poll a room's history.

    Returns the full history in the order messages were posted. A room
    that exists but has no messages answers 200 with ``[]``.

    Raises:
        HTTPException: 404 if room not found
    """
    try:
        return store.get_messages(room_id)
    except RoomNotFoundError:
        logger.info("Room %s not found", room_id)
        raise HTTPException(status_code=404, detail="Room not found")


@router.post(
    "/{room_id}/messages",
    response_model=ChatMessage,
    status_code=status.HTTP_201_CREATED,
)
def post_message(
    room_id: str,
    request: PostMessageRequest,
    store: RoomStore = Depends(get_store),
):
    """
    Post a message into a room.

    Flow:
        1. Reject empty author/body (400) without touching the store
        2. Append via the store
        3. Unknown room -> 404, nothing appended

    Args:
        room_id: UUID of target room (path)
        request: PostMessageRequest with author/username and body/content

    Returns:
        ChatMessage: The stored message (201)
    """
    if not request.author or not request.body:
        logger.info("Rejected message for room %s: missing author or body", room_id)
        raise HTTPException(status_code=400, detail="Author and body are required")

    try:
        return store.add_message(room_id, request.author, request.body)
    except RoomNotFoundError:
        logger.warning("Rejected message for unknown room %s", room_id)
        raise HTTPException(status_code=404, detail="Room not found")
