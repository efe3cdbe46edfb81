"""
remote_source.py: Resolve an http(s) URL into (buffer, media type).

Two explicit steps: a HEAD probe that can reject non-images and oversized
payloads before any body is downloaded, then a GET whose actual body and
content type are checked again. The probe is an optimization; the size and
image gates hold against what was actually downloaded.
"""

import re
from typing import Optional

from ..adapters.base import HTTPClient
from ..config import EncodeOptions
from ..errors import NotAnImage, RemoteError, SizeLimitExceeded
from ..utils.log_utils import get_logger
from .encoder import exceeds_size_limit
from .local_source import SourceData

logger = get_logger(__name__)

IMAGE_TYPE_PATTERN = re.compile(r"^image/", re.IGNORECASE)
FALLBACK_MEDIA_TYPE = "application/octet-stream"


def is_image_content_type(content_type: Optional[str]) -> bool:
    """Return True if the content type header denotes an image/* media type."""
    return bool(content_type) and IMAGE_TYPE_PATTERN.match(content_type.strip()) is not None


def _check_size(size: int, options: EncodeOptions) -> None:
    if not options.force and exceeds_size_limit(size, options.size_limit):
        raise SizeLimitExceeded(size, options.size_limit)


class RemoteSourceResolver:
    """Probe then fetch a remote image through an HTTPClient."""

    def __init__(self, http_client: HTTPClient) -> None:
        self.http_client = http_client

    async def resolve(self, url: str, options: EncodeOptions) -> SourceData:
        """
        Raises:
            RemoteError: Non-success status or transport failure.
            RemoteTimeout: A request missed its deadline.
            NotAnImage: Declared or actual content type is not image/*.
            SizeLimitExceeded: Declared or actual length is over the limit.
        """
        probe = await self.http_client.probe(url, options.timeout)
        if not probe.status_ok:
            raise RemoteError(url, probe.status_code, probe.reason)

        declared_type = probe.content_type.strip()
        if not is_image_content_type(declared_type):
            raise NotAnImage(declared_type, url)

        if probe.content_length:
            _check_size(probe.content_length, options)
        logger.debug("Probe ok for %s: %s, %s bytes", url, declared_type, probe.content_length)

        response = await self.http_client.fetch(url, options.timeout)
        if not response.status_ok:
            raise RemoteError(url, response.status_code, response.reason)

        _check_size(len(response.body), options)

        actual_type = response.content_type.strip()
        if actual_type and not is_image_content_type(actual_type):
            raise NotAnImage(actual_type, url)
        media_type = actual_type or declared_type or FALLBACK_MEDIA_TYPE

        logger.debug("Fetched %d bytes (%s) from %s", len(response.body), media_type, url)
        return SourceData(response.body, media_type)
