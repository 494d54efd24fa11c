"""Web layer exceptions."""

from __future__ import annotations

from typing import Optional


class HttpError(Exception):
    """Application error carrying the HTTP status code it should produce."""

    def __init__(self, message: str, code: Optional[int] = None) -> None:
        super().__init__(message)
        self.code = code


class ResponseError(RuntimeError):
    """Base class for response lifecycle errors."""


class ResponseAlreadySentError(ResponseError):
    """Raised when a response is mutated or sent after ``send()``."""
