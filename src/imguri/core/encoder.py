"""
encoder.py: Turn a complete byte buffer into a base64 data URI.

Pure functions with no I/O; size and content checks belong to the callers.
"""

import base64

from ..errors import InvalidArgument

_BUFFER_TYPES = (bytes, bytearray, memoryview)


def to_data_uri(buffer: bytes, media_type: str) -> str:
    """
    Encode `buffer` as `data:<media_type>;base64,<payload>`.

    Uses the standard base64 alphabet with padding and no line wrapping.

    Raises:
        InvalidArgument: If buffer is not a byte sequence or media_type is empty.
    """
    if not isinstance(buffer, _BUFFER_TYPES):
        raise InvalidArgument(f"Expected buffer to be bytes, got {type(buffer).__name__}")
    if not isinstance(media_type, str) or not media_type:
        raise InvalidArgument("Expected media_type to be a non-empty string")

    payload = base64.b64encode(buffer).decode("ascii")
    return f"data:{media_type};base64,{payload}"


def exceeds_size_limit(size: int, limit: int) -> bool:
    """Return True if `size` bytes is over `limit`."""
    return size > limit
