"""
Error hierarchy for the concert store.

Two failure modes reach callers:
  - InvalidArgumentError: an argument failed its type check, no remote call was made
  - DatabaseOperationError: a Firebase call failed; the message carries a prefix
    naming the operation and the original error is chained as __cause__

ConfigurationError is raised once, when the Firebase app is first initialised
without credentials.
"""

from typing import Any


class ConcertStoreError(Exception):
    """Base exception for all concert store errors."""

    code = "concert_store_error"
    http_status = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_response(self) -> dict[str, Any]:
        return {"error": {"code": self.code, "message": self.message}}


class InvalidArgumentError(ConcertStoreError, ValueError):
    code = "invalid_argument"
    http_status = 400


class DatabaseOperationError(ConcertStoreError):
    code = "database_error"
    http_status = 502


class ConfigurationError(ConcertStoreError):
    code = "configuration_error"
    http_status = 500
