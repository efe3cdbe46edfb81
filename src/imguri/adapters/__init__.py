"""
I/O collaborators for the encoding pipeline.

The core talks to the file system and the network only through the FileAccess
and HTTPClient interfaces defined here.
"""

from .base import FileAccess, HTTPClient, ProbeResponse, FetchResponse
from .file_access import LocalFileAccess
from .http_client import AiohttpClient, parse_content_length

__all__ = [
    "FileAccess",
    "HTTPClient",
    "ProbeResponse",
    "FetchResponse",
    "LocalFileAccess",
    "AiohttpClient",
    "parse_content_length",
]
