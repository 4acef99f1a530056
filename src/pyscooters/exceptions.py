"""Custom exception hierarchy for pyscooters."""

from __future__ import annotations


class ScooterError(Exception):
    """Base exception for all pyscooters errors."""


class ScooterConfigError(ScooterError):
    """Invalid or missing configuration."""


class ScooterTransportError(ScooterError):
    """HTTP-level failure (timeout, network, non-2xx, invalid JSON)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        url: str = "",
    ) -> None:
        self.status_code = status_code
        self.url = url
        super().__init__(message)


class ScooterFeedError(ScooterError):
    """A provider feed answered, but not with a usable document.

    The feed adapter catches this and reports the provider as failed for
    the current cycle.
    """

    def __init__(self, message: str, *, provider: str = "") -> None:
        self.provider = provider
        super().__init__(message)
