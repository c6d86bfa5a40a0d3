# core/security.py
"""
Security – Marketing Analyzer

✔ Static shared-secret check (X-API-Key)
✔ Constant-time comparison
✔ Disabled when API_KEY is not configured
"""

from __future__ import annotations

import secrets

from core.config import Settings


API_KEY_HEADER = "x-api-key"


class AuthError(Exception):
    """Missing or incorrect shared secret."""

    def __init__(self, message: str = "Unauthorized: Invalid API Key") -> None:
        super().__init__(message)
        self.message: str = message


def api_key_enabled(settings: Settings) -> bool:
    return bool(settings.API_KEY)


def verify_api_key(settings: Settings, provided: str | None) -> None:
    """
    Raises AuthError if gating is enabled and `provided` does not match.
    """
    expected = settings.API_KEY
    if not expected:
        return

    if not provided:
        raise AuthError()

    if not secrets.compare_digest(provided.encode("utf-8"), expected.encode("utf-8")):
        raise AuthError()
