# =============================================================================
# app/exceptions.py - Custom Exception Handlers
# =============================================================================
# Centralized exception handling for the API.
# Every failure leaves the server as {"success": false, "message": ...}.
# =============================================================================

import logging
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error."


class FitnessApiException(Exception):
    """
    Base exception for the Adaptive Fitness API.

    All custom exceptions inherit from this class and are rendered by
    `fitness_exception_handler`.
    """

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result: dict[str, Any] = {
            "success": False,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        return result


class BadRequestError(FitnessApiException):
    """Raised when a request body cannot be parsed."""

    def __init__(self, message: str = "Malformed request body."):
        super().__init__(message=message, status_code=400)


class UnauthorizedError(FitnessApiException):
    """Raised when a request is missing valid credentials."""

    def __init__(self, message: str = "Not authorized."):
        super().__init__(message=message, status_code=401)


class ResourceNotFoundError(FitnessApiException):
    """Raised when a record doesn't exist or belongs to another user."""

    def __init__(self, resource: str, resource_id: str):
        super().__init__(
            message=f"{resource} not found.",
            status_code=404,
            details={"id": resource_id},
        )


class ConflictError(FitnessApiException):
    """Raised when a write would violate a uniqueness or state rule."""

    def __init__(self, message: str):
        super().__init__(message=message, status_code=409)


# =============================================================================
# Exception Handlers
# =============================================================================

def route_not_found_message(request: Request) -> str:
    """Build the 404 message from the original URL, query string included."""
    url = request.url.path
    if request.url.query:
        url = f"{url}?{request.url.query}"
    return f"Route {url} not found."


async def fitness_exception_handler(
    request: Request,
    exc: FitnessApiException
) -> JSONResponse:
    """Convert FitnessApiException to JSON response."""
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def http_exception_handler(
    request: Request,
    exc: StarletteHTTPException
) -> JSONResponse:
    """
    Handle framework HTTP errors.

    Unmatched paths (404) and known paths hit with an unsupported
    method (405) both count as an unmatched route.
    """
    if exc.status_code in (404, 405) and exc.detail in ("Not Found", "Method Not Allowed"):
        return JSONResponse(
            status_code=404,
            content={"success": False, "message": route_not_found_message(request)},
        )

    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """
    Handle Pydantic validation errors.

    Converts validation errors to a flat list of field/message pairs.
    """
    errors = [
        {
            "field": ".".join(str(part) for part in error.get("loc", ()) if part != "body"),
            "message": error.get("msg", "Invalid value"),
        }
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=422,
        content={
            "success": False,
            "message": "Validation error.",
            "errors": errors,
        }
    )


async def unhandled_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """Log the full error server-side and return a generic 500."""
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=500,
        content={"success": False, "message": INTERNAL_ERROR_MESSAGE},
    )
