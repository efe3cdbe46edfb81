import asyncio
import time
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import AsyncIterator, Callable, Dict, Iterable, List, Optional, Tuple, Union

import aiohttp

from ..adapters.base import FileAccess, HTTPClient
from ..adapters.http_client import AiohttpClient
from ..config import EncodeOptions, resolve_options
from ..errors import InvalidArgument
from ..utils.log_utils import get_logger
from .encoder import to_data_uri
from .local_source import LocalSourceResolver
from .path_validator import PathKind, classify
from .remote_source import RemoteSourceResolver

logger = get_logger(__name__)

ProgressCallback = Callable[[str, int, int, "EncodeResult"], None]


@dataclass
class EncodeResult:
    """Outcome of encoding one input: either a data URI or the error that stopped it."""
    data: Optional[str] = None
    error: Optional[Exception] = None
    processing_time: float = 0.0

    def __post_init__(self) -> None:
        if (self.data is None) == (self.error is None):
            raise ValueError("EncodeResult needs exactly one of data or error")

    @property
    def ok(self) -> bool:
        return self.error is None


def normalize_inputs(inputs: Union[str, Iterable[str]]) -> List[str]:
    """Turn a single string or a sequence into a list of distinct inputs, first occurrence first."""
    if isinstance(inputs, str):
        inputs = [inputs]
    return list(dict.fromkeys(inputs))


def partition(items: List[str], size: int) -> List[List[str]]:
    """Split items into consecutive groups of at most `size`."""
    return [items[i:i + size] for i in range(0, len(items), size)]


class BatchEncoder:
    """
    Encode many local paths and URLs into data URIs.

    Inputs are processed in consecutive groups of `options.concurrency`: all
    members of a group run concurrently and the next group starts once the
    whole group has settled. A failing input only ever affects its own result.
    """

    def __init__(
        self,
        inputs: Union[str, Iterable[str]],
        options: Optional[EncodeOptions] = None,
        file_access: Optional[FileAccess] = None,
        http_client: Optional[HTTPClient] = None,
        on_progress: Optional[ProgressCallback] = None,
    ) -> None:
        self.inputs = normalize_inputs(inputs)
        self.options = resolve_options(options)
        self.file_access = file_access
        self.http_client = http_client
        self.on_progress = on_progress

        # Results storage
        self.results: Dict[str, EncodeResult] = {}
        self.completed_count = 0
        self.total_count = len(self.inputs)

    @asynccontextmanager
    async def _http_scope(self, needs_http: bool) -> AsyncIterator[Optional[HTTPClient]]:
        """Yield the injected client, or a session-backed one that lives for this batch."""
        if self.http_client is not None or not needs_http:
            yield self.http_client
            return
        async with aiohttp.ClientSession() as session:
            yield AiohttpClient(session)

    async def encode_one(self, value: str, http_client: Optional[HTTPClient] = None) -> str:
        """
        Encode a single input, raising its error.

        Args:
            value: Local path or http(s) URL.
            http_client: Transport for remote inputs (default: a throwaway AiohttpClient).
        """
        if not isinstance(value, str):
            raise InvalidArgument(f"Expected a path or URL string, got {type(value).__name__}")

        kind = classify(value)
        if kind is PathKind.REMOTE:
            resolver = RemoteSourceResolver(http_client or self.http_client or AiohttpClient())
            source = await resolver.resolve(value, self.options)
        elif kind is PathKind.LOCAL:
            source = await LocalSourceResolver(self.file_access).resolve(value, self.options)
        else:
            raise AssertionError(f"Unhandled path kind: {kind}")

        return to_data_uri(source.buffer, source.media_type)

    async def _encode_captured(self, value: str, http_client: Optional[HTTPClient]) -> EncodeResult:
        start_time = time.time()
        try:
            data = await self.encode_one(value, http_client)
            result = EncodeResult(data=data, processing_time=time.time() - start_time)
            logger.debug(f"Encoded {value} in {result.processing_time:.2f}s")
        except Exception as e:
            result = EncodeResult(error=e, processing_time=time.time() - start_time)
            logger.error(f"Failed to encode {value}: {e}")

        self.completed_count += 1
        if self.on_progress:
            try:
                self.on_progress(value, self.completed_count, self.total_count, result)
            except Exception as e:
                logger.error(f"Progress callback failed for {value}: {e}")
        return result

    async def encode_all(self) -> Dict[str, EncodeResult]:
        """
        Encode every distinct input.

        Returns:
            Mapping from input string (as supplied) to its EncodeResult, in
            first-occurrence order.
        """
        groups = partition(self.inputs, self.options.concurrency)
        logger.info(
            f"Encoding {self.total_count} input(s) in {len(groups)} group(s) "
            f"of up to {self.options.concurrency}"
        )

        needs_http = any(classify(value) is PathKind.REMOTE for value in self.inputs if isinstance(value, str))
        async with self._http_scope(needs_http) as http_client:
            for group in groups:
                # Settle the whole group before anything escapes so no task
                # outlives the batch session
                outcomes = await asyncio.gather(
                    *(self._encode_captured(value, http_client) for value in group),
                    return_exceptions=True,
                )
                for value, outcome in zip(group, outcomes):
                    if isinstance(outcome, BaseException):
                        raise outcome
                    self.results[value] = outcome

        failed = sum(1 for r in self.results.values() if not r.ok)
        logger.info(f"Completed {self.completed_count}/{self.total_count} input(s), {failed} failed")
        return self.results

    def get_progress(self) -> Tuple[int, int]:
        """Get current progress (completed, total)."""
        return self.completed_count, self.total_count

    def get_results(self) -> Dict[str, EncodeResult]:
        """Get all results collected so far."""
        return self.results.copy()


async def encode(
    inputs: Union[str, Iterable[str]],
    options: Optional[EncodeOptions] = None,
    *,
    file_access: Optional[FileAccess] = None,
    http_client: Optional[HTTPClient] = None,
    on_progress: Optional[ProgressCallback] = None,
) -> Dict[str, EncodeResult]:
    """
    Encode one or more local paths / URLs into data URIs.

    Args:
        inputs: A single path or URL, or a sequence of them. Duplicates are dropped.
        options: EncodeOptions (or a mapping of its fields). Defaults apply when omitted.
        file_access: Override the local file access collaborator.
        http_client: Override the HTTP collaborator.
        on_progress: Called with (input, done, total, result) as each input settles.

    Returns:
        Ordered mapping from input to EncodeResult, one entry per distinct input.
    """
    encoder = BatchEncoder(
        inputs,
        options,
        file_access=file_access,
        http_client=http_client,
        on_progress=on_progress,
    )
    return await encoder.encode_all()


async def encode_single(
    value: str,
    options: Optional[EncodeOptions] = None,
    *,
    file_access: Optional[FileAccess] = None,
    http_client: Optional[HTTPClient] = None,
) -> str:
    """
    Encode a single local path or URL and return its data URI.

    Raises:
        ImguriError: The first gate that failed for this input.
    """
    encoder = BatchEncoder([], options, file_access=file_access, http_client=http_client)
    return await encoder.encode_one(value)
