"""
==============================================================================
Core Package
==============================================================================

Core utilities and infrastructure for the application.

Modules:
--------
- exceptions: AppException, ErrorKind, status table and handlers
- security: APIKeyVerifier for write operations
- dependencies: FastAPI dependency injection functions
- middleware: Request logging

Usage:
------
    from app.core import exceptions
    raise exceptions.product_not_found()

==============================================================================
"""

from .exceptions import (
    AppException,
    ErrorKind,
    STATUS_CODES,
    register_exception_handlers,
)

__all__ = [
    "AppException",
    "ErrorKind",
    "STATUS_CODES",
    "register_exception_handlers",
]
