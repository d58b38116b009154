"""
Global exception handlers.

  - ConcertStoreError -> its own http_status and {"error": {code, message}}
  - FirebaseError re-raised unchanged by the readers -> 502, message only
"""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from firebase_admin.exceptions import FirebaseError

from concert_db.core.errors import ConcertStoreError
from concert_db.core.logging import get_logger

logger = get_logger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""

    @app.exception_handler(ConcertStoreError)
    async def concert_store_error_handler(request: Request, exc: ConcertStoreError):
        logger.warning(
            "concert_store_error",
            code=exc.code,
            error=exc.message,
            path=request.url.path,
        )
        return JSONResponse(status_code=exc.http_status, content=exc.to_response())

    @app.exception_handler(FirebaseError)
    async def firebase_error_handler(request: Request, exc: FirebaseError):
        logger.error(
            "firebase_error",
            firebase_code=exc.code,
            error=str(exc),
            path=request.url.path,
        )
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY,
            content={"error": {"code": "database_error", "message": str(exc)}},
        )
