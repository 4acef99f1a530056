"""Ingestion layer.

This package fetches live-fleet feeds over HTTP and turns their raw
records into normalized :class:`~pyscooters.models.Vehicle` objects.
"""

from pyscooters.ingestion.feeds import fetch_provider

__all__ = ["fetch_provider"]
