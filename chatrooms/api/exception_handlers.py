# chatrooms/api/exception_handlers.py

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from chatrooms.core.logging import get_logger

logger = get_logger(__name__)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed or non-object JSON bodies are a plain bad request here, not a 422."""
    # Error dicts carry the raw input; log only where and why it failed
    problems = [(e.get("type"), e.get("loc")) for e in exc.errors()]
    logger.info("Invalid request body for %s %s: %s", request.method, request.url.path, problems)
    return JSONResponse(status_code=400, content={"detail": "Invalid request body"})


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register all exception handlers on the FastAPI app.

    Usage:
        from chatrooms.api.exception_handlers import register_exception_handlers
        register_exception_handlers(app)
    """
    app.add_exception_handler(RequestValidationError, request_validation_handler)
