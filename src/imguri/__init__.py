"""
imguri

Convert local image files and remote image URLs into base64 data URIs.
"""

__version__ = "1.0.0"

import logging

# Library default: silent unless the application configures logging
logging.getLogger(__name__).addHandler(logging.NullHandler())

from .config import EncodeOptions, DEFAULT_SIZE_LIMIT, DEFAULT_TIMEOUT, DEFAULT_CONCURRENCY
from .errors import (
    ImguriError,
    InvalidArgument,
    PathSecurityViolation,
    NotFound,
    UnknownMediaType,
    NotAnImage,
    SizeLimitExceeded,
    RemoteError,
    RemoteTimeout,
)
from .core import (
    BatchEncoder,
    EncodeResult,
    encode,
    encode_single,
    encode_legacy,  # Legacy compatibility
    to_data_uri,
)
from .utils.log_utils import configure_logging


__all__ = [
    "EncodeOptions",
    "DEFAULT_SIZE_LIMIT",
    "DEFAULT_TIMEOUT",
    "DEFAULT_CONCURRENCY",
    "ImguriError",
    "InvalidArgument",
    "PathSecurityViolation",
    "NotFound",
    "UnknownMediaType",
    "NotAnImage",
    "SizeLimitExceeded",
    "RemoteError",
    "RemoteTimeout",
    "BatchEncoder",
    "EncodeResult",
    "encode",
    "encode_single",
    "encode_legacy",  # Legacy compatibility
    "to_data_uri",
    "configure_logging",
]
