"""Shared fixtures for imguri tests."""

import asyncio
from typing import Dict, List, Optional, Tuple

import pytest

from imguri.adapters.base import HTTPClient, ProbeResponse, FetchResponse

# Small 1x1 PNG image (red pixel)
PNG_BYTES = bytes([
    0x89, 0x50, 0x4E, 0x47, 0x0D, 0x0A, 0x1A, 0x0A, 0x00, 0x00, 0x00, 0x0D, 0x49, 0x48,
    0x44, 0x52, 0x00, 0x00, 0x00, 0x01, 0x00, 0x00, 0x00, 0x01, 0x08, 0x02, 0x00, 0x00,
    0x00, 0x90, 0x77, 0x53, 0xDE, 0x00, 0x00, 0x00, 0x0C, 0x49, 0x44, 0x41, 0x54, 0x08,
    0xD7, 0x63, 0xF8, 0xCF, 0xC0, 0x00, 0x00, 0x03, 0x01, 0x01, 0x00, 0x18, 0xDD, 0x8D,
    0xB4, 0x00, 0x00, 0x00, 0x00, 0x49, 0x45, 0x4E, 0x44, 0xAE, 0x42, 0x60, 0x82,
])


class FakeHTTPClient(HTTPClient):
    """In-memory HTTPClient that records every call and tracks concurrency."""

    def __init__(self, routes: Optional[Dict[str, Tuple[ProbeResponse, FetchResponse]]] = None,
                 delay: float = 0.0):
        self.routes = routes or {}
        self.delay = delay
        self.calls: List[Tuple[str, str, int]] = []
        self.in_flight = 0
        self.max_in_flight = 0

    def add_image(self, url: str, body: bytes = PNG_BYTES, content_type: str = "image/png",
                  declared_length: Optional[int] = None, fetch_type: Optional[str] = None):
        if declared_length is None:
            declared_length = len(body)
        self.routes[url] = (
            ProbeResponse(True, 200, content_type, declared_length or None),
            FetchResponse(True, 200, content_type if fetch_type is None else fetch_type, body),
        )

    async def _enter(self, method: str, url: str, deadline_ms: int):
        self.calls.append((method, url, deadline_ms))
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delay)
        finally:
            self.in_flight -= 1

    async def probe(self, url: str, deadline_ms: int) -> ProbeResponse:
        await self._enter("HEAD", url, deadline_ms)
        if url not in self.routes:
            return ProbeResponse(False, 404, "text/html", None, "Not Found")
        return self.routes[url][0]

    async def fetch(self, url: str, deadline_ms: int) -> FetchResponse:
        await self._enter("GET", url, deadline_ms)
        if url not in self.routes:
            return FetchResponse(False, 404, "text/html", b"", "Not Found")
        return self.routes[url][1]

    def methods_for(self, url: str) -> List[str]:
        return [method for method, called_url, _ in self.calls if called_url == url]


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    """Run the test from inside a fresh temporary working directory."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def png_file(workdir):
    path = workdir / "test.png"
    path.write_bytes(PNG_BYTES)
    return path


@pytest.fixture
def fake_http():
    return FakeHTTPClient()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("IMGURI_FORCE", "IMGURI_SIZE_LIMIT", "IMGURI_TIMEOUT", "IMGURI_CONCURRENCY"):
        monkeypatch.delenv(name, raising=False)
