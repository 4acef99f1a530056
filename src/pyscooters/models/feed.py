"""Per-provider fetch outcome."""

from __future__ import annotations

import enum
from typing import Any

from pyscooters.models._base import ScooterBaseModel
from pyscooters.models.vehicle import Vehicle


class FeedStatus(enum.StrEnum):
    OK = "ok"
    FAILED = "failed"


class FeedResult(ScooterBaseModel):
    """Vehicles one provider contributed to a single query cycle.

    A failed fetch is still a ``FeedResult``: ``status`` is
    :attr:`FeedStatus.FAILED`, ``error`` says why and ``vehicles`` is
    empty.  Callers that only look at ``vehicles`` cannot tell a dead
    feed from an empty one.
    """

    provider: str
    vehicles: tuple[Vehicle, ...] = ()
    status: FeedStatus = FeedStatus.OK
    error: str | None = None
    dropped: int = 0
    """Raw records discarded during normalization."""
    elapsed: float = 0.0
    """Wall-clock seconds spent on the fetch."""

    @classmethod
    def failed(cls, provider: str, error: str, *, elapsed: float = 0.0) -> FeedResult:
        return cls(provider=provider, status=FeedStatus.FAILED, error=error, elapsed=elapsed)

    @property
    def ok(self) -> bool:
        return self.status is FeedStatus.OK

    def diagnostics(self) -> dict[str, Any]:
        return {
            "status": self.status.value,
            "error": self.error,
            "vehicles": len(self.vehicles),
            "dropped": self.dropped,
            "elapsed": round(self.elapsed, 3),
        }
