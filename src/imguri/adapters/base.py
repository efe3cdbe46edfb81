"""
Interfaces for the I/O collaborators the encoding pipeline depends on.

The core never touches the file system or the network directly; it goes
through a FileAccess and an HTTPClient, which keeps the resolvers testable
with in-memory fakes.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ProbeResponse:
    """Headers-only view of a remote resource."""
    status_ok: bool
    status_code: int
    content_type: str = ""
    content_length: Optional[int] = None
    reason: str = ""


@dataclass(frozen=True)
class FetchResponse:
    """Complete response of a remote resource."""
    status_ok: bool
    status_code: int
    content_type: str = ""
    body: bytes = b""
    reason: str = ""


class FileAccess(ABC):
    """Abstract base class for local file access."""

    @abstractmethod
    async def exists(self, path: str) -> bool:
        """Return True if `path` is an existing, readable file."""
        pass

    @abstractmethod
    async def size(self, path: str) -> int:
        """Return the size of `path` in bytes."""
        pass

    @abstractmethod
    async def read_all(self, path: str) -> bytes:
        """Read the whole content of `path`."""
        pass

    @abstractmethod
    def media_type_for_path(self, path: str) -> Optional[str]:
        """Return the media type implied by the path's extension, or None."""
        pass


class HTTPClient(ABC):
    """Abstract base class for the HTTP transport.

    Implementations report HTTP status failures through the response objects
    and raise RemoteTimeout / RemoteError only for deadline expiry and
    transport failures.
    """

    @abstractmethod
    async def probe(self, url: str, deadline_ms: int) -> ProbeResponse:
        """Issue a metadata-only (HEAD) request."""
        pass

    @abstractmethod
    async def fetch(self, url: str, deadline_ms: int) -> FetchResponse:
        """Issue a full (GET) request and read the complete body."""
        pass
