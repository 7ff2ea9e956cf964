"""
Page Fetcher

Retrieves raw HTML for article URLs. Every request carries the configured
client identifier and a fixed timeout. Failures of any kind surface as
``UpstreamFetchError``; nothing is retried.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

import httpx

from ..config import settings
from ..core.concurrency import gather_or_cancel
from ..core.errors import UpstreamFetchError

logger = logging.getLogger("linksuggest.fetcher")


class PageFetcher:
    def __init__(
        self,
        user_agent: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.user_agent = user_agent or settings.user_agent
        self.timeout = timeout if timeout is not None else settings.fetch_timeout
        # Injectable for tests (httpx.MockTransport)
        self._transport = transport

    async def fetch(self, url: str) -> str:
        """Return the response body of a GET request to ``url`` as text."""
        headers = {"User-Agent": self.user_agent}

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                follow_redirects=True,
                transport=self._transport,
            ) as client:
                resp = await client.get(url, headers=headers)
            resp.raise_for_status()
        except httpx.TimeoutException as exc:
            logger.warning("Fetch timed out after %.1fs: %s", self.timeout, url)
            raise UpstreamFetchError(
                f"Request to {url} timed out after {self.timeout:g}s"
            ) from exc
        except httpx.HTTPStatusError as exc:
            logger.warning(
                "Fetch returned HTTP %d: %s", exc.response.status_code, url
            )
            raise UpstreamFetchError(
                f"Request to {url} failed with status {exc.response.status_code}"
            ) from exc
        except httpx.HTTPError as exc:
            logger.warning("Fetch failed (%s): %s", type(exc).__name__, url)
            raise UpstreamFetchError(
                f"Request to {url} failed: {str(exc) or type(exc).__name__}"
            ) from exc

        logger.debug("Fetched %s (%d chars)", url, len(resp.text))
        return resp.text

    async def fetch_many(self, urls: Sequence[str]) -> List[str]:
        """
        Fetch several pages concurrently.

        Results keep the order of ``urls``. The first failure propagates and
        cancels the fetches still in flight.
        """
        return await gather_or_cancel(*(self.fetch(url) for url in urls))
