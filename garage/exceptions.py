import logging

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class GarageError(Exception):
    """Base class for every failure the store and ingestion layers surface.

    Each kind carries the HTTP status the gateway answers with and a message
    that is safe to show to clients.
    """

    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationFailure(GarageError):
    status_code = 400
    default_message = "Invalid request"


class MissingField(ValidationFailure):
    default_message = "Missing required field"


class NotFound(GarageError):
    status_code = 404
    default_message = "Not found"


class Conflict(GarageError):
    status_code = 409
    default_message = "Resource already exists"


class PayloadTooLarge(GarageError):
    status_code = 413
    default_message = "Payload too large"


class StorageFailure(GarageError):
    status_code = 500
    default_message = "Storage failure"


class IOFailure(StorageFailure):
    default_message = "Failed to save uploaded image"


def create_error_response(error_message: str) -> dict:
    """Create a standardized error response"""
    return {"error": error_message}


async def garage_exception_handler(request: Request, exc: GarageError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}", exc_info=exc.__cause__)
    else:
        logger.warning(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=create_error_response(exc.message))


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Custom exception handler for HTTPException"""
    return JSONResponse(
        status_code=exc.status_code,
        content=create_error_response(str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Report the first offending field the way a form would
    errors = exc.errors()
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{location}: {first.get('msg')}" if location else str(first.get("msg"))
    else:
        message = ValidationFailure.default_message
    return JSONResponse(status_code=400, content=create_error_response(message))
