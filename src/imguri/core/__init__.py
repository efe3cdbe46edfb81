"""
Core encoding pipeline: validation, source resolution, batching and the
bytes-to-data-URI transform.
"""

import asyncio
import warnings

from ..utils.log_utils import get_logger
from .encoder import to_data_uri, exceeds_size_limit
from .path_validator import PathKind, classify, validate_local_path
from .local_source import LocalSourceResolver, SourceData
from .remote_source import RemoteSourceResolver, is_image_content_type
from .batch import BatchEncoder, EncodeResult, encode, encode_single

logger = get_logger(__name__)


# Legacy function compatibility (deprecated - use encode() instead)
def encode_legacy(paths, options=None, callback=None):
    """Encode with a node-style callback(err, results) (legacy function - use encode() instead).

    `options` may be omitted and the callback passed in its place. Each entry of
    `results` is a dict with "err" and "data" keys.
    """
    warnings.warn(
        "encode_legacy() is deprecated and will be removed in 2.0. Use encode() with asyncio instead.",
        DeprecationWarning,
        stacklevel=2,
    )
    logger.warning("encode_legacy() is deprecated; use encode() instead")

    if callable(options) and callback is None:
        callback, options = options, None
    if callback is None:
        raise TypeError("encode_legacy() requires a callback")

    try:
        results = asyncio.run(encode(paths, options))
    except Exception as e:
        return callback(e, None)

    results_object = {
        path: {"err": result.error, "data": result.data}
        for path, result in results.items()
    }
    return callback(None, results_object)


__all__ = [
    "to_data_uri",
    "exceeds_size_limit",
    "PathKind",
    "classify",
    "validate_local_path",
    "LocalSourceResolver",
    "RemoteSourceResolver",
    "SourceData",
    "is_image_content_type",
    "BatchEncoder",
    "EncodeResult",
    "encode",
    "encode_single",

    # Legacy functions (deprecated)
    "encode_legacy",
]
