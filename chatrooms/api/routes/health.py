# chatrooms/api/routes/health.py

from fastapi import APIRouter, Depends

from chatrooms.api.routes.utils import get_store
from chatrooms.services.room_store import RoomStore

router = APIRouter()


@router.get("/health")
def health(store: RoomStore = Depends(get_store)):
    """
    Health check endpoint.

    Returns:
        dict: Status, room count, total message count
    """
    rooms, messages = store.counts()
    return {
        "status": "healthy",
        "rooms": rooms,
        "messages": messages,
    }
