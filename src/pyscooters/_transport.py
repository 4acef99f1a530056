"""HTTP transport for upstream feed requests."""

from __future__ import annotations

import json
import logging
from typing import Any, Protocol

import aiohttp

from pyscooters.config import ScooterConfig
from pyscooters.exceptions import ScooterTransportError

_logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Structural transport interface used by the feed adapter.

    Having a protocol here makes it easy to pass test doubles while
    keeping the production implementation (`HttpTransport`) concrete.
    """

    async def get_json(self, url: str) -> Any:
        ...


class HttpTransport:
    """GET JSON documents with a bounded per-request timeout.

    Every failure mode (timeout, connection error, non-2xx status,
    undecodable body) surfaces as :class:`ScooterTransportError`.
    """

    def __init__(self, config: ScooterConfig, http_session: aiohttp.ClientSession) -> None:
        self._config = config
        self._http = http_session
        self._timeout = aiohttp.ClientTimeout(total=config.request_timeout)

    async def get_json(self, url: str) -> Any:
        headers = {
            "accept": "application/json",
            "user-agent": self._config.user_agent,
        }

        _logger.debug("GET %s", url)

        try:
            async with self._http.get(url, headers=headers, timeout=self._timeout) as resp:
                text = await resp.text()
                if not 200 <= resp.status < 300:
                    raise ScooterTransportError(
                        f"HTTP {resp.status} from {url}: {text[:200]}",
                        status_code=resp.status,
                        url=url,
                    )
        except ScooterTransportError:
            raise
        except TimeoutError as exc:
            raise ScooterTransportError(
                f"Request to {url} timed out after {self._config.request_timeout}s",
                url=url,
            ) from exc
        except (aiohttp.ClientError, UnicodeDecodeError) as exc:
            raise ScooterTransportError(f"Request to {url} failed: {exc}", url=url) from exc

        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            raise ScooterTransportError(f"Invalid JSON from {url}: {text[:200]}", url=url) from exc
