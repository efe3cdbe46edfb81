"""
path_validator.py: Classify inputs as local paths or remote URLs and keep
local paths from escaping upwards.

Policy: relative paths must stay inside the working directory, absolute paths
are explicit caller intent and only get the traversal check. Callers passing
untrusted absolute paths need their own allowlist.
"""

import os
import re
from enum import Enum
from typing import Optional

from ..errors import PathSecurityViolation

URL_PATTERN = re.compile(r"^https?://", re.IGNORECASE)


class PathKind(Enum):
    LOCAL = "local"
    REMOTE = "remote"


def classify(value: str) -> PathKind:
    """Return PathKind.REMOTE for http(s) URLs, PathKind.LOCAL for anything else."""
    return PathKind.REMOTE if URL_PATTERN.match(value) else PathKind.LOCAL


def _has_parent_segment(path: str) -> bool:
    separators = {os.sep, "/"}
    if os.altsep:
        separators.add(os.altsep)
    pattern = "|".join(re.escape(sep) for sep in separators)
    return ".." in re.split(pattern, path)


def is_within_directory(base: str, path: str) -> bool:
    """Return True if absolute 'path' is 'base' or lies underneath it."""
    return os.path.commonpath([base, path]) == base


def validate_local_path(value: str, cwd: Optional[str] = None) -> str:
    """
    Normalize a local path and reject traversal attempts.

    Args:
        value: Path as supplied by the caller.
        cwd: Working directory to contain relative paths in (default: os.getcwd()).

    Returns:
        The lexically normalized path.

    Raises:
        PathSecurityViolation: If a '..' segment survives normalization, or a
            relative path resolves outside the working directory.
    """
    normalized = os.path.normpath(value)

    if _has_parent_segment(normalized):
        raise PathSecurityViolation(value)

    if not os.path.isabs(normalized):
        base = os.path.abspath(cwd or os.getcwd())
        resolved = os.path.normpath(os.path.join(base, normalized))
        # Implied by the segment check above, enforced independently of it
        if not is_within_directory(base, resolved):
            raise PathSecurityViolation(value, resolved)

    return normalized
