from __future__ import annotations


class GluestickError(Exception):
    """Base exception for all Gluestick errors."""


class DocumentNotFound(GluestickError):
    """Raised when a document is not found in the database."""


class NotConnected(GluestickError):
    """Raised when attempting to use a database that is not connected."""


class PaginationError(GluestickError):
    """Raised when a fetched window breaks the window fetch contract."""


class InvalidPageRequest(PaginationError, ValueError):
    """Raised when client-supplied pagination input cannot be accepted.

    ``errors`` maps each offending field to its list of messages.
    """

    def __init__(self, errors: dict[str, list[str]]) -> None:
        self.errors = errors
        summary = "; ".join(
            f"{field}: {message}"
            for field, messages in errors.items()
            for message in messages
        )
        super().__init__(f"Invalid pagination parameters ({summary})")


class DocumentInvalid(GluestickError, ValueError):
    """Raised by a lifecycle hook that refuses to write a document."""
