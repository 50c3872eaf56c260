"""
HTTP client for fetching instrument pages from the upstream site.

One GET per call with browser-like headers and a bounded total timeout.
There are no retries, no robots.txt checks and no caching: every failure is
surfaced to the caller as a typed ``LookupFailure``.
"""

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass
from typing import Dict, Optional

import aiohttp
import structlog

from tickerlens.config.config import FetcherConfig
from tickerlens.errors import TransportError, UpstreamError
from tickerlens.observability.metrics import observe_fetch_latency

logger = structlog.get_logger(__name__)


@dataclass
class FetchResponse:
    """Successful upstream response with timing information."""

    status: int
    body: bytes
    charset: Optional[str]
    start_ts: float
    end_ts: float
    url: str
    final_url: str

    @property
    def elapsed(self) -> float:
        return self.end_ts - self.start_ts

    @property
    def redirected(self) -> bool:
        return self.final_url != self.url


class HttpClient:
    """aiohttp-backed page fetcher; use as an async context manager."""

    def __init__(self, config: FetcherConfig):
        self.config = config
        self.session: Optional[aiohttp.ClientSession] = None
        self._in_flight_requests = 0

    @property
    def is_initialized(self) -> bool:
        return self.session is not None

    async def initialize(self) -> None:
        """Initialize the HTTP client session."""
        if self.session is None:
            timeout = aiohttp.ClientTimeout(total=self.config.timeout)
            self.session = aiohttp.ClientSession(timeout=timeout, headers=self.config.request_headers())
            logger.info("HTTP client session initialized", timeout=self.config.timeout)

    async def close(self) -> None:
        """Close the HTTP client and clean up resources."""
        if self.session:
            await self.session.close()
            self.session = None
            logger.info("HTTP client closed")

    async def __aenter__(self) -> "HttpClient":
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def fetch(self, url: str) -> FetchResponse:
        """
        Fetch ``url`` once.

        Raises:
            UpstreamError: the server answered with a non-2xx status.
            TransportError: DNS, connection or timeout failure.
        """
        if self.session is None:
            raise RuntimeError("HTTP client not initialized. Call initialize() first.")

        start_time = time.time()
        self._in_flight_requests += 1
        try:
            async with self.session.get(url) as response:
                if not 200 <= response.status < 300:
                    logger.warning(
                        "Upstream returned error status",
                        url=url,
                        status=response.status,
                        reason=response.reason,
                    )
                    raise UpstreamError(response.status, response.reason)
                content = await response.read()
                result = FetchResponse(
                    status=response.status,
                    body=content,
                    charset=response.charset,
                    start_ts=start_time,
                    end_ts=time.time(),
                    url=url,
                    final_url=str(response.url),
                )
        except asyncio.TimeoutError as e:
            logger.warning("Request timed out", url=url, timeout=self.config.timeout)
            raise TransportError(f"Tempo esgotado ao buscar dados externos ({self.config.timeout}s).") from e
        except aiohttp.ClientError as e:
            logger.warning("Request failed", url=url, error=str(e))
            raise TransportError() from e
        finally:
            self._in_flight_requests -= 1
            observe_fetch_latency(time.time() - start_time)

        if result.redirected:
            logger.info("Upstream redirected", url=url, final_url=result.final_url)
        logger.debug("Fetched page", url=url, status=result.status, bytes=len(result.body), elapsed=result.elapsed)
        return result

    def get_stats(self) -> Dict[str, object]:
        """Get current client statistics."""
        return {
            "initialized": self.is_initialized,
            "in_flight_requests": self._in_flight_requests,
            "timeout": self.config.timeout,
        }
