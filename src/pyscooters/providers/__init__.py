"""Provider registry."""

from pyscooters.providers.registry import PROVIDERS, ZURICH_BBOX, resolve_providers

__all__ = ["PROVIDERS", "ZURICH_BBOX", "resolve_providers"]
