"""Custom exceptions used across multiple layers.

Rules:
- Only put exceptions here if they need to be raised in one layer and caught in another.
- Keep exceptions simple and focused.
- No I/O, no config loading, no complex logic.
"""

from __future__ import annotations


class AcquisitionError(Exception):
    """Raised when media records cannot be retrieved from the catalog."""


class TransportError(AcquisitionError):
    """Raised when the GraphQL request itself fails (network error or non-2xx status)."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ProtocolError(AcquisitionError):
    """Raised when a well-formed response carries application-level errors."""

    def __init__(self, message: str, errors: list | None = None) -> None:
        super().__init__(message)
        self.errors = errors or []
