"""Errors raised by the pairing client."""
from __future__ import annotations

from typing import Optional


class PairingError(Exception):
    """Base class for every failure surfaced by the pairing client."""


class TransportError(PairingError):
    """Raised when the HTTP exchange fails or returns an unexpected status."""

    def __init__(
        self,
        message: str,
        *,
        method: str,
        url: str,
        status_code: Optional[int] = None,
        body: str = "",
    ) -> None:
        super().__init__(message)
        self.method = method
        self.url = url
        self.status_code = status_code
        self.body = body


class DecodeError(PairingError):
    """Raised when a response body is not the JSON envelope we expect."""


__all__ = ["PairingError", "TransportError", "DecodeError"]
