# chatrooms/main.py

from __future__ import annotations

import argparse
from typing import Optional, Sequence

import uvicorn
from fastapi import FastAPI

from chatrooms import __version__
from chatrooms.api.exception_handlers import register_exception_handlers
from chatrooms.api.routes import health, root, rooms
from chatrooms.core.config import settings
from chatrooms.core.logging import get_logger, setup_logging
from chatrooms.services.room_store import RoomStore

# Configure logging first
setup_logging()
logger = get_logger(__name__)


def create_app(store: Optional[RoomStore] = None) -> FastAPI:
    """
    Build the FastAPI app around a single RoomStore.

    Args:
        store: Store to serve; a fresh empty one when omitted

    Returns:
        FastAPI: App with the rooms, health and root routes mounted
    """
    app = FastAPI(title="Polling Chatrooms", version=__version__)
    app.state.store = store if store is not None else RoomStore()

    register_exception_handlers(app)

    # REST routes
    app.include_router(root.router)
    app.include_router(health.router)
    app.include_router(rooms.router)

    return app


app = create_app()


def run(argv: Optional[Sequence[str]] = None) -> None:
    """Console entry point: serve ``app`` with uvicorn."""
    parser = argparse.ArgumentParser(description="Polling Chatrooms server")
    parser.add_argument("--host", default=settings.HOST,
                        help=f"Bind address (default: {settings.HOST})")
    parser.add_argument("--port", type=int, default=settings.PORT,
                        help=f"Server port (default: {settings.PORT})")
    args = parser.parse_args(argv)

    logger.info("🚀 Starting Polling Chatrooms on %s:%d", args.host, args.port)
    uvicorn.run(
        app,
        host=args.host,
        port=args.port,
        timeout_keep_alive=settings.TIMEOUT_KEEP_ALIVE,
    )


if __name__ == "__main__":
    run()
