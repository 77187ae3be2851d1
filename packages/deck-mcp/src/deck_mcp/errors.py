"""Error types raised by the Deck dispatch layer."""

from __future__ import annotations


class DeckError(Exception):
    """Base class for every error surfaced to the MCP caller."""


class MissingParameter(DeckError):
    """A required identifier or body field was not supplied."""


class InvalidParameter(DeckError):
    """A supplied field could not be coerced to its expected type."""


class NotFound(DeckError):
    """A lookup or ancestry resolution found no matching resource."""


class UnsupportedAction(DeckError):
    """The entity/operation or entity/action combination is not implemented."""


class RemoteError(DeckError):
    """Raised when the Deck API answers with a non-success HTTP status."""

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(f"Deck API Error ({status_code}): {body}")
        self.status_code = status_code
        self.body = body
