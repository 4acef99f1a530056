"""Runtime configuration for pyscooters."""

from __future__ import annotations

import dataclasses
import os
from collections.abc import Callable
from typing import Any

from pyscooters._constants import (
    DEFAULT_CORRIDOR_WIDTH_M,
    DEFAULT_LAT,
    DEFAULT_LNG,
    DEFAULT_RADIUS_M,
    DEFAULT_REQUEST_TIMEOUT_S,
    USER_AGENT,
    VEHICLE_CACHE_MAX_AGE_S,
)
from pyscooters.exceptions import ScooterConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


@dataclasses.dataclass(frozen=True)
class ScooterConfig:
    """Service and client configuration.

    Parameters
    ----------
    request_timeout : float
        Per-provider HTTP timeout in seconds.  A provider that does not
        answer in time contributes no vehicles to that query.
    user_agent : str
        ``User-Agent`` header sent to upstream feeds.
    cache_max_age : int
        ``max-age`` (seconds) advertised on vehicle query responses.
    default_lat : float
        Origin latitude used when a query has none (or an unparseable one).
    default_lng : float
        Origin longitude used when a query has none (or an unparseable one).
    default_radius : float
        Search radius in meters used when a query has none.
    default_corridor_width : float
        Corridor half-width in meters used when a destination is given
        without an explicit width.
    host : str
        Bind address for ``python -m pyscooters serve``.
    port : int
        Bind port for ``python -m pyscooters serve``.
    expose_diagnostics : bool
        Add a per-provider ``diagnostics`` object to query responses.
        Off by default; the regular response shape never carries it.
    """

    request_timeout: float = DEFAULT_REQUEST_TIMEOUT_S
    user_agent: str = USER_AGENT
    cache_max_age: int = VEHICLE_CACHE_MAX_AGE_S
    default_lat: float = DEFAULT_LAT
    default_lng: float = DEFAULT_LNG
    default_radius: float = DEFAULT_RADIUS_M
    default_corridor_width: float = DEFAULT_CORRIDOR_WIDTH_M
    host: str = "127.0.0.1"
    port: int = 8080
    expose_diagnostics: bool = False

    @classmethod
    def from_env(cls, **overrides: Any) -> ScooterConfig:
        """Create configuration from ``SCOOTERS_*`` environment variables.

        Explicit keyword arguments override environment values.

        Raises
        ------
        ScooterConfigError
            If a numeric variable cannot be parsed.
        """
        env = os.environ

        _ENV_CONFIG_MAP: dict[str, tuple[str, Callable[[str], Any]]] = {
            "SCOOTERS_REQUEST_TIMEOUT": ("request_timeout", float),
            "SCOOTERS_USER_AGENT": ("user_agent", str),
            "SCOOTERS_CACHE_MAX_AGE": ("cache_max_age", int),
            "SCOOTERS_DEFAULT_LAT": ("default_lat", float),
            "SCOOTERS_DEFAULT_LNG": ("default_lng", float),
            "SCOOTERS_DEFAULT_RADIUS": ("default_radius", float),
            "SCOOTERS_DEFAULT_CORRIDOR_WIDTH": ("default_corridor_width", float),
            "SCOOTERS_HOST": ("host", str),
            "SCOOTERS_PORT": ("port", int),
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, (field_name, parse) in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is None or field_name in overrides:
                continue
            try:
                config_kwargs[field_name] = parse(val.strip())
            except ValueError as exc:
                raise ScooterConfigError(f"{env_key} has an invalid value: {val!r}") from exc

        if "expose_diagnostics" not in overrides:
            config_kwargs["expose_diagnostics"] = _env_bool(env.get("SCOOTERS_EXPOSE_DIAGNOSTICS"), False)

        config_kwargs.update(overrides)

        config = cls(**config_kwargs)
        if config.request_timeout <= 0:
            raise ScooterConfigError(f"request_timeout must be positive, got {config.request_timeout}")
        return config
