"""FastAPI front end: GET /message/{id} -> {"message": ...}."""
from __future__ import annotations

import re
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from message_store import __version__
from message_store.config import Settings, get_settings
from message_store.infrastructure.db_factory import reset_pool_manager
from message_store.service import MessageService, get_message_service
from message_store.utils.logging import configure_logging, get_logger

log = get_logger(__name__)

JSON_CONTENT_TYPE = "application/json; charset=utf-8"

# Identifiers are signed 32-bit integers.
_ID_PATTERN = re.compile(r"[+-]?[0-9]+")
_ID_MIN = -(2**31)
_ID_MAX = 2**31 - 1


def parse_message_id(raw: str) -> Optional[int]:
    """Parse a path parameter as a 32-bit integer, or return None."""
    if not _ID_PATTERN.fullmatch(raw):
        return None
    value = int(raw)
    if not _ID_MIN <= value <= _ID_MAX:
        return None
    return value


def create_app(
    service: Optional[MessageService] = None,
    settings: Optional[Settings] = None,
) -> FastAPI:
    """
    Build the HTTP application.

    When no service is injected, the process-wide service is used and the
    process-wide pool is closed on shutdown.
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        configure_logging(level=settings.log_level, json_logs=settings.log_json)
        app.state.service = service or get_message_service()
        log.info("Application launched", extra={"port": settings.http_port})
        yield
        if service is None:
            reset_pool_manager()
        log.info("Application stopped")

    app = FastAPI(
        title="message-store",
        description="Look up stored messages by numeric id",
        version=__version__,
        lifespan=lifespan,
    )

    @app.get("/message/{message_id}")
    def get_message(message_id: str, request: Request) -> JSONResponse:
        """Return the stored message, or the fallback text when there is none."""
        parsed = parse_message_id(message_id)
        message: Optional[str] = None
        if parsed is None:
            log.error(f"Error retrieving the value from db: invalid id {message_id!r}")
        else:
            message = request.app.state.service.get_message(parsed)
            if message is None:
                log.info("Falling back to default message", extra={"id": parsed})

        return JSONResponse(
            {"message": message if message is not None else settings.fallback_message},
            media_type=JSON_CONTENT_TYPE,
        )

    return app


app = create_app()


__all__ = ["app", "create_app", "parse_message_id"]
