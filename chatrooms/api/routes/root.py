# chatrooms/api/routes/root.py

from fastapi import APIRouter

from chatrooms import __version__

router = APIRouter()


@router.get("/")
async def root():
    """
    Root endpoint - API information.
    """
    return {
        "message": "Polling Chatrooms",
        "version": __version__,
        "delivery": "poll GET /api/rooms/{room_id}/messages",
        "endpoints": {
            "rooms": "/api/rooms",
            "room": "/api/rooms/{room_id}",
            "messages": "/api/rooms/{room_id}/messages",
            "health": "/health",
        },
    }
