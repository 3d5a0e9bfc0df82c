"""Exceptions raised by the OpenRouter client."""

from __future__ import annotations

from typing import Optional


class OpenRouterError(RuntimeError):
    """Base class for OpenRouter client failures."""


class TransportError(OpenRouterError):
    """Raised when the HTTP request cannot be completed."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class SerializationError(OpenRouterError):
    """Raised when a request or reply cannot be encoded or decoded as JSON."""


class NoResponseError(OpenRouterError):
    """Raised when a reply holds no completion content."""
