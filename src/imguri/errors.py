"""
Error taxonomy for imguri.

Every failure that can affect a single input derives from ImguriError, so a
batch can capture it into that input's result slot.
"""

from typing import Optional


class ImguriError(Exception):
    """Base class for all imguri errors."""


class InvalidArgument(ImguriError, TypeError):
    """Raised for malformed call-site input (encoder arguments, options)."""


class PathSecurityViolation(ImguriError, ValueError):
    """Raised when a local path traverses upwards or escapes the working directory."""

    def __init__(self, path: str, resolved: Optional[str] = None):
        if resolved is None:
            message = f'Invalid path: path traversal detected in "{path}"'
        else:
            message = f'Invalid path: relative path escapes cwd "{path}" -> "{resolved}"'
        super().__init__(message)
        self.path = path
        self.resolved = resolved


class NotFound(ImguriError, FileNotFoundError):
    """Raised when a local file does not exist or cannot be read."""

    def __init__(self, path: str):
        super().__init__(f"File not found: {path}")
        self.path = path


class UnknownMediaType(ImguriError):
    """Raised when no media type can be derived from a local path."""

    def __init__(self, path: str):
        super().__init__(f"Unable to determine MIME type for: {path}")
        self.path = path


class NotAnImage(ImguriError):
    """Raised when a remote resource does not declare an image/* content type."""

    def __init__(self, content_type: str, url: str):
        super().__init__(f"Not an image. Content-Type: {content_type}, URL: {url}")
        self.content_type = content_type
        self.url = url


class SizeLimitExceeded(ImguriError):
    """Raised when a payload is larger than the configured limit and force is off."""

    def __init__(self, size: int, limit: int):
        super().__init__(
            f"Size limit exceeded: {size} > {limit} bytes. Set force to override"
        )
        self.size = size
        self.limit = limit


class RemoteError(ImguriError):
    """Raised for a non-success HTTP status or a transport failure."""

    def __init__(self, url: str, status: Optional[int] = None, reason: str = ""):
        if status is not None:
            message = f"HTTP {status}: {reason} ({url})" if reason else f"HTTP {status} ({url})"
        else:
            message = f"Failed to fetch '{url}': {reason or 'request failed'}"
        super().__init__(message)
        self.url = url
        self.status = status
        self.reason = reason


class RemoteTimeout(RemoteError, TimeoutError):
    """Raised when a remote request does not complete within its deadline."""

    def __init__(self, url: str, timeout: int):
        super().__init__(url, None, f"timed out after {timeout} ms")
        self.timeout = timeout
