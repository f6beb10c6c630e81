"""
Application error types and their HTTP rendering.
"""
import logging
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class MindfulChatError(Exception):
    """Base class for errors raised by the application."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(MindfulChatError):
    """Required request fields are missing or invalid."""
    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(MindfulChatError):
    """Referenced record does not exist or is not visible to the caller."""
    status_code = status.HTTP_404_NOT_FOUND


class PersistenceError(MindfulChatError):
    """Database read or write failed."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class UpstreamError(MindfulChatError):
    """
    External language model call failed or returned unusable content.

    Absorbed by the responders; never rendered to the client.
    """
    status_code = status.HTTP_502_BAD_GATEWAY


class UpstreamTimeout(UpstreamError):
    """External language model did not answer within the configured timeout."""
    status_code = status.HTTP_504_GATEWAY_TIMEOUT


def _format_validation_errors(exc: RequestValidationError) -> str:
    """Flatten pydantic errors into one readable sentence."""
    parts = []
    for error in exc.errors():
        location = ".".join(str(item) for item in error.get("loc", ()) if item != "body")
        parts.append(f"{location}: {error.get('msg')}" if location else error.get("msg", ""))
    return "; ".join(parts) or "Invalid request"


def register_exception_handlers(app: FastAPI) -> None:
    """Render every error as a {"message": ...} body."""

    @app.exception_handler(MindfulChatError)
    async def handle_app_error(request: Request, exc: MindfulChatError):
        if isinstance(exc, PersistenceError):
            logger.error(f"Persistence failure on {request.url.path}: {exc.message}")
            return JSONResponse(
                status_code=exc.status_code,
                content={"message": "Something went wrong. Please try again."}
            )
        return JSONResponse(status_code=exc.status_code, content={"message": exc.message})

    @app.exception_handler(SQLAlchemyError)
    async def handle_database_error(request: Request, exc: SQLAlchemyError):
        logger.error(f"Database error on {request.url.path}: {exc}", exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": "Something went wrong. Please try again."}
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"message": _format_validation_errors(exc)}
        )

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": str(exc.detail)},
            headers=getattr(exc, "headers", None)
        )
