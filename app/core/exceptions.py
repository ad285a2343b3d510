"""
Application Exception Handling

Single AppException class tagged with an ErrorKind, a status table mapping
each kind to its HTTP status, and the FastAPI handlers that turn failures
into the JSON error envelope {"error": <kind>, "message": <detail>}.
"""

import enum
import logging
from typing import Any, Dict

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException


# Module logger
logger = logging.getLogger(__name__)


class ErrorKind(str, enum.Enum):
    """Failure kinds. The value is the name reported in the error body."""

    NOT_FOUND = "NotFoundError"
    VALIDATION = "ValidationError"
    AUTHENTICATION = "AuthenticationError"
    INTERNAL = "InternalServerError"


STATUS_CODES: Dict[ErrorKind, int] = {
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.VALIDATION: 400,
    ErrorKind.AUTHENTICATION: 401,
    ErrorKind.INTERNAL: 500,
}

ROUTE_NOT_FOUND = {"error": "NotFound", "message": "Route not found"}
INTERNAL_MESSAGE = "Something went wrong on the server"


class AppException(Exception):
    """
    Unified application exception for all error scenarios.

    Usage:
        raise AppException(ErrorKind.NOT_FOUND, "Product not found")
        raise exceptions.invalid_api_key()

    Error Kinds:
        - NotFoundError (404): product id absent
        - ValidationError (400): malformed input, missing search term
        - AuthenticationError (401): missing or wrong API key
        - InternalServerError (500): unexpected failure
    """

    def __init__(self, kind: ErrorKind, message: str):
        """
        Initialize application exception.

        Args:
            kind: Failure kind, drives the HTTP status
            message: Human-readable error message
        """
        self.kind = kind
        self.message = message
        super().__init__(self.message)

    @property
    def status_code(self) -> int:
        return STATUS_CODES[self.kind]

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for JSON response."""
        return {
            "error": self.kind.value,
            "message": self.message,
        }

    def __repr__(self) -> str:
        return f"AppException(kind={self.kind.name}, message={self.message!r})"


# ============================================
# HANDLERS
# ============================================

async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Convert AppException to the JSON error envelope."""
    if exc.kind is ErrorKind.INTERNAL:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def http_exception_handler(
    request: Request,
    exc: StarletteHTTPException
) -> JSONResponse:
    """
    Handle routing-level HTTP errors.

    Unknown paths and unsupported methods on known paths are both
    reported as an unmatched route.
    """
    if exc.status_code in (404, 405):
        return JSONResponse(status_code=404, content=ROUTE_NOT_FOUND)

    return JSONResponse(
        status_code=exc.status_code,
        content={"error": "HTTPError", "message": str(exc.detail)}
    )


async def request_validation_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """Report framework-level parameter errors as ValidationError."""
    problems = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()))
        problems.append(f"{location}: {error.get('msg')}")

    return JSONResponse(
        status_code=STATUS_CODES[ErrorKind.VALIDATION],
        content={
            "error": ErrorKind.VALIDATION.value,
            "message": f"Validation failed: {', '.join(problems)}",
        }
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log unexpected failures with traceback and hide the details."""
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=STATUS_CODES[ErrorKind.INTERNAL],
        content={
            "error": ErrorKind.INTERNAL.value,
            "message": INTERNAL_MESSAGE,
        }
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register all exception handlers with FastAPI app.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)


# ============================================
# CONVENIENCE FACTORY FUNCTIONS
# ============================================

def product_not_found() -> AppException:
    """Create product not found exception."""
    return AppException(ErrorKind.NOT_FOUND, "Product not found")


def validation_failed(violations) -> AppException:
    """Create validation exception listing every violated rule."""
    return AppException(
        ErrorKind.VALIDATION,
        f"Validation failed: {', '.join(violations)}"
    )


def invalid_body() -> AppException:
    """Create malformed request body exception."""
    return AppException(ErrorKind.VALIDATION, "Request body must be valid JSON")


def search_query_required() -> AppException:
    """Create missing search term exception."""
    return AppException(
        ErrorKind.VALIDATION,
        'Search query parameter "q" is required'
    )


def api_key_required() -> AppException:
    """Create missing API key exception."""
    return AppException(ErrorKind.AUTHENTICATION, "API key is required")


def invalid_api_key() -> AppException:
    """Create wrong API key exception."""
    return AppException(ErrorKind.AUTHENTICATION, "Invalid API key")


def catalog_not_loaded() -> AppException:
    """Create catalog not loaded exception."""
    return AppException(ErrorKind.INTERNAL, "Product catalog not loaded")
