"""Errors raised by the stores and translated to HTTP responses by the routers."""


class StoreError(Exception):
    """Base class for store failures carrying a human-readable message."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(StoreError):
    """Missing or malformed input."""


class NotFoundError(StoreError):
    """Unknown identifier."""


class ConflictError(StoreError):
    """Duplicate value for a unique key."""
