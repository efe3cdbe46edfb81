"""
local_source.py: Resolve a local file into (buffer, media type).

Each step is a gate; the first failing gate raises and nothing after it runs.
"""

from typing import NamedTuple, Optional

from ..adapters.base import FileAccess
from ..adapters.file_access import LocalFileAccess
from ..config import EncodeOptions
from ..errors import NotFound, SizeLimitExceeded, UnknownMediaType
from ..utils.log_utils import get_logger
from .encoder import exceeds_size_limit
from .path_validator import validate_local_path

logger = get_logger(__name__)


class SourceData(NamedTuple):
    """Complete payload of a resolved input."""
    buffer: bytes
    media_type: str


class LocalSourceResolver:
    """Validate, size-check, type and read a local file."""

    def __init__(self, file_access: Optional[FileAccess] = None) -> None:
        self.file_access = file_access or LocalFileAccess()

    async def resolve(self, path: str, options: EncodeOptions) -> SourceData:
        """
        Args:
            path: Local path as supplied by the caller.
            options: Size limit and force flag for this call.

        Raises:
            PathSecurityViolation, NotFound, SizeLimitExceeded, UnknownMediaType
        """
        safe_path = validate_local_path(path)

        if not await self.file_access.exists(safe_path):
            raise NotFound(path)

        try:
            size = await self.file_access.size(safe_path)
        except OSError as e:
            raise NotFound(path) from e
        if not options.force and exceeds_size_limit(size, options.size_limit):
            raise SizeLimitExceeded(size, options.size_limit)

        media_type = self.file_access.media_type_for_path(safe_path)
        if not media_type:
            raise UnknownMediaType(path)

        # Unreadable at this point means the file changed under us
        try:
            buffer = await self.file_access.read_all(safe_path)
        except OSError as e:
            raise NotFound(path) from e

        logger.debug("Read %d bytes (%s) from %s", len(buffer), media_type, safe_path)
        return SourceData(buffer, media_type)
