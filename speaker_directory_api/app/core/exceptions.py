"""
Exception taxonomy shared by the services and the API layer.

Services raise these; endpoints translate them to HTTP responses
(``ValidationError`` -> 400, ``NotFoundError`` -> 404, ``StoreError``
-> 500).  ``GatewayError`` never escapes the suggestion endpoints; it
is rendered as ``{"ok": false, "error": ...}``.
"""

from typing import Optional


class DirectoryError(Exception):
    """Base class for all speaker directory errors."""


class ValidationError(DirectoryError):
    """Missing or malformed required input."""


class NotFoundError(DirectoryError):
    """A referenced speaker or nomination does not exist."""


class StoreError(DirectoryError):
    """The backing document could not be read or written."""


class ReadError(StoreError):
    """The backing document is unreadable or malformed."""


class WriteError(StoreError):
    """The backing document could not be written."""


class GatewayError(DirectoryError):
    """The text-completion call failed or returned unusable content."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code
