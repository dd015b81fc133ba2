"""
Custom exceptions for the body weight tracker.

These exceptions separate persistence failures, unreadable stored
collections and rejected user input.
"""

from typing import Optional


class StorageFailure(Exception):
    """
    Raised when a persistence adapter read or write fails.

    The store never retries; the failure is propagated so a write is
    never dropped without the caller knowing.
    """

    def __init__(self, operation: str, key: str, cause: Optional[BaseException] = None):
        super().__init__(f"Storage {operation} failed for key: {key}")
        self.operation = operation
        self.key = key
        self.cause = cause


class MalformedPayload(Exception):
    """
    Raised when a stored blob is present but is not a valid collection.

    The store catches this and reads the collection as empty.
    """
    pass


class InvalidSample(ValueError):
    """
    Raised when a captured value is outside the accepted numeric domain.

    Rejected at the capture boundary, before anything reaches the store.
    """

    def __init__(self, value, reason: str):
        super().__init__(f"Invalid weight {value!r}: {reason}")
        self.value = value
        self.reason = reason
