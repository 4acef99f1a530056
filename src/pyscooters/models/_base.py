"""Base model and rounding helpers shared by the pyscooters models.

Every model inherits from :class:`ScooterBaseModel`, which makes
instances immutable value records: filtering and sorting always build
new sequences, and the only way to "change" a vehicle is
``model_copy(update=...)``.
"""

from __future__ import annotations

import math

from pydantic import BaseModel, ConfigDict


def round_half_up(value: float, ndigits: int = 0) -> float:
    """Round *value* half away from zero at *ndigits* decimals.

    Python's :func:`round` uses banker's rounding (``round(12.5) == 12``);
    upstream feeds and clients expect ``12.5 -> 13``.
    """
    factor = 10.0**ndigits
    scaled = abs(value) * factor
    rounded = math.floor(scaled + 0.5) / factor
    return math.copysign(rounded, value)


class ScooterBaseModel(BaseModel):
    """Base for immutable pyscooters value records."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
    )
