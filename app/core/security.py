"""
==============================================================================
Security Module - API Key Authentication
==============================================================================

Static shared-secret authentication for write operations.

This module implements:
- APIKeyVerifier: Compares the x-api-key header with the configured key

Behavior:
--------
- Missing header  → AuthenticationError "API key is required" (401)
- Wrong value     → AuthenticationError "Invalid API key" (401)

Keys are compared in constant time.

==============================================================================
"""

from __future__ import annotations

import logging
import secrets
from typing import Optional

from app.config import Settings
from app.core import exceptions


# Module logger
logger = logging.getLogger(__name__)

API_KEY_HEADER = "x-api-key"


class APIKeyVerifier:
    """
    Verifies the shared API key sent with write requests.

    Attributes:
        _api_key: Expected secret

    Example:
        >>> verifier = APIKeyVerifier.from_settings(settings)
        >>> verifier.verify(request.headers.get("x-api-key"))
    """

    def __init__(self, api_key: str) -> None:
        self._api_key = api_key

    @classmethod
    def from_settings(cls, settings: Settings) -> "APIKeyVerifier":
        """Create a verifier for the configured key."""
        return cls(settings.api_key)

    def verify(self, provided: Optional[str]) -> None:
        """
        Check a provided API key.

        Args:
            provided: Header value, None when the header is absent

        Raises:
            AppException: AuthenticationError if missing or wrong
        """
        if not provided:
            logger.warning("Rejected write request: API key missing")
            raise exceptions.api_key_required()

        if not secrets.compare_digest(provided.encode("utf-8"), self._api_key.encode("utf-8")):
            logger.warning("Rejected write request: invalid API key")
            raise exceptions.invalid_api_key()
