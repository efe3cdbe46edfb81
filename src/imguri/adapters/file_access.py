"""
file_access.py: FileAccess backed by the local file system.

Blocking calls run in the default executor so sibling encodes in the same
group keep making progress.
"""

import asyncio
import mimetypes
import os
from typing import Optional

from .base import FileAccess

ENCODING_MEDIA_TYPES = {
    "gzip": "application/gzip",
    "bzip2": "application/x-bzip2",
    "xz": "application/x-xz",
    "compress": "application/x-compress",
}


class LocalFileAccess(FileAccess):
    """Read files from disk and guess media types from their extension."""

    async def _run(self, func, *args):
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, func, *args)

    async def exists(self, path: str) -> bool:
        return await self._run(_is_readable_file, path)

    async def size(self, path: str) -> int:
        return await self._run(os.path.getsize, path)

    async def read_all(self, path: str) -> bytes:
        return await self._run(_read_bytes, path)

    def media_type_for_path(self, path: str) -> Optional[str]:
        media_type, encoding = mimetypes.guess_type(path, strict=False)
        if encoding and not _is_compressed_image_suffix(path, media_type):
            # The payload is the compressed stream, not the inner format
            return ENCODING_MEDIA_TYPES.get(encoding)
        return media_type


def _is_compressed_image_suffix(path: str, media_type: Optional[str]) -> bool:
    # Single suffixes such as .svgz name an image format that is gzipped by definition
    _, ext = os.path.splitext(path)
    return ext.lower() in mimetypes.suffix_map and (media_type or "").startswith("image/")


def _is_readable_file(path: str) -> bool:
    return os.path.isfile(path) and os.access(path, os.R_OK)


def _read_bytes(path: str) -> bytes:
    with open(path, "rb") as f:
        return f.read()
