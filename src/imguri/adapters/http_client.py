"""
http_client.py: HTTPClient backed by aiohttp.

Each request carries its own ClientTimeout, so a slow probe never eats into
the budget of the fetch that follows it.
"""

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import aiohttp

from ..errors import RemoteError, RemoteTimeout
from ..utils.log_utils import get_logger
from .base import HTTPClient, ProbeResponse, FetchResponse

logger = get_logger(__name__)


def parse_content_length(value: Optional[str]) -> Optional[int]:
    """Parse a Content-Length header; absent, negative or garbage values are unknown (None)."""
    if not value:
        return None
    try:
        length = int(value.strip())
    except ValueError:
        return None
    return length if length >= 0 else None


class AiohttpClient(HTTPClient):
    """
    HTTP transport using aiohttp.

    Pass a session to share connection pooling across many requests (the
    session stays owned by the caller). Without one, every request opens and
    closes its own session.
    """

    def __init__(self, session: Optional[aiohttp.ClientSession] = None) -> None:
        self.session = session

    @asynccontextmanager
    async def _session_scope(self) -> AsyncIterator[aiohttp.ClientSession]:
        if self.session is not None:
            yield self.session
            return
        async with aiohttp.ClientSession() as session:
            yield session

    @staticmethod
    def _timeout(deadline_ms: int) -> aiohttp.ClientTimeout:
        return aiohttp.ClientTimeout(total=deadline_ms / 1000)

    async def probe(self, url: str, deadline_ms: int) -> ProbeResponse:
        logger.debug("HEAD %s (deadline %d ms)", url, deadline_ms)
        try:
            async with self._session_scope() as session:
                async with session.head(
                    url, timeout=self._timeout(deadline_ms), allow_redirects=True
                ) as response:
                    return ProbeResponse(
                        status_ok=response.ok,
                        status_code=response.status,
                        content_type=response.headers.get("Content-Type", ""),
                        content_length=parse_content_length(response.headers.get("Content-Length")),
                        reason=response.reason or "",
                    )
        except asyncio.TimeoutError as e:
            raise RemoteTimeout(url, deadline_ms) from e
        except aiohttp.ClientError as e:
            raise RemoteError(url, reason=str(e)) from e

    async def fetch(self, url: str, deadline_ms: int) -> FetchResponse:
        logger.debug("GET %s (deadline %d ms)", url, deadline_ms)
        try:
            async with self._session_scope() as session:
                async with session.get(url, timeout=self._timeout(deadline_ms)) as response:
                    if not response.ok:
                        return FetchResponse(
                            status_ok=False,
                            status_code=response.status,
                            content_type=response.headers.get("Content-Type", ""),
                            reason=response.reason or "",
                        )
                    body = await response.read()
                    return FetchResponse(
                        status_ok=True,
                        status_code=response.status,
                        content_type=response.headers.get("Content-Type", ""),
                        body=body,
                        reason=response.reason or "",
                    )
        except asyncio.TimeoutError as e:
            raise RemoteTimeout(url, deadline_ms) from e
        except aiohttp.ClientError as e:
            raise RemoteError(url, reason=str(e)) from e
