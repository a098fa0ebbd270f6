"""Translate exceptions into the ``{success: false, message}`` envelope."""

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError, ValidationError

from storefront.shared.errors import InsufficientStockError, StorefrontError

logger = structlog.get_logger(__name__)


def _failure(status_code: int, message: str, **extra) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "message": message, **extra})


def _first_message(messages: dict) -> str:
    for field, errors in messages.items():
        if isinstance(errors, (list, tuple)) and errors:
            return f"{field}: {errors[0]}" if field != "_entity" else str(errors[0])
        return f"{field}: {errors}"
    return "Invalid request"


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(StorefrontError)
    async def handle_storefront_error(request: Request, exc: StorefrontError):
        extra = {}
        if isinstance(exc, InsufficientStockError):
            extra = {"available": exc.available, "requested": exc.requested}
        if exc.status_code >= 500:
            logger.error("Request failed", path=request.url.path, error=exc.message)
        return _failure(exc.status_code, exc.message, **extra)

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        messages = exc.messages if isinstance(exc.messages, dict) else {"_entity": [str(exc.messages)]}
        return _failure(400, _first_message(messages), errors=messages)

    @app.exception_handler(ObjectNotFoundError)
    async def handle_not_found(request: Request, exc: ObjectNotFoundError):
        return _failure(404, "Resource not found")

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        if errors:
            location = ".".join(str(part) for part in errors[0]["loc"] if part != "body")
            message = f"{location}: {errors[0]['msg']}" if location else errors[0]["msg"]
        else:
            message = "Invalid request"
        return _failure(400, message)

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception):
        logger.exception("Unhandled error", path=request.url.path, method=request.method)
        return _failure(500, "Internal server error")
