import datetime as dt
import logging
from enum import Enum
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)


class ErrorType(str, Enum):
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    DATABASE_ERROR = "DATABASE_ERROR"
    NETWORK_ERROR = "NETWORK_ERROR"


class ApiError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    error_type: ErrorType | None = None

    def __init__(self, error: str, details: str | None = None) -> None:
        super().__init__(error)
        self.error = error
        self.details = details


class ValidationFailed(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST
    error_type = ErrorType.VALIDATION_ERROR


class NotFound(ApiError):
    status_code = status.HTTP_404_NOT_FOUND
    error_type = ErrorType.NOT_FOUND


class Forbidden(ApiError):
    status_code = status.HTTP_403_FORBIDDEN


class DatabaseFailure(ApiError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    error_type = ErrorType.DATABASE_ERROR


def error_payload(
    error: str,
    error_type: ErrorType | None = None,
    details: str | None = None,
) -> dict[str, Any]:
    payload: dict[str, Any] = {"success": False, "error": error}
    if error_type is not None:
        payload["errorType"] = error_type.value
        payload["details"] = details
        payload["timestamp"] = dt.datetime.now(tz=dt.timezone.utc).isoformat()
    elif details is not None:
        payload["details"] = details
    return payload


def describe_validation_errors(errors: list[dict[str, Any]]) -> tuple[str, str]:
    missing = [str(item["loc"][-1]) for item in errors if item.get("type") == "missing" and item.get("loc")]
    if missing:
        return "Missing required fields", f"Required fields: {', '.join(missing)}"

    messages = []
    for item in errors:
        location = ".".join(str(part) for part in item.get("loc", ()) if part not in ("body", "path", "query"))
        messages.append(f"{location}: {item.get('msg')}" if location else str(item.get("msg")))
    return "Invalid request", "; ".join(messages)


async def handle_api_error(request: Request, exc: ApiError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=error_payload(exc.error, exc.error_type, exc.details),
    )


async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    error, details = describe_validation_errors(list(exc.errors()))
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_payload(error, ErrorType.VALIDATION_ERROR, details),
    )


async def handle_database_error(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception("Database error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_payload("Database operation failed", ErrorType.DATABASE_ERROR, str(exc)),
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, handle_api_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(SQLAlchemyError, handle_database_error)
