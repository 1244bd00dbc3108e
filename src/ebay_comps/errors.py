from __future__ import annotations

from typing import Optional


class CompsError(Exception):
    """Base class for errors surfaced to callers of the comps service."""


class ConfigurationError(CompsError):
    """A required setting (usually an API key) is missing."""


class TransportError(CompsError):
    def __init__(self, message: str, status: Optional[int] = None) -> None:
        super().__init__(message)
        self.status = status


class PrimaryTransportError(TransportError):
    """ScrapingBee could not deliver the search page."""


class FallbackTransportError(TransportError):
    """SerpAPI answered with a non-success status or was unreachable."""
