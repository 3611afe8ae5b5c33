"""
Content transfer pipeline.

Fetches a URL with httpx and streams the body straight into an aiofiles
handle. Each chunk is awaited to disk before the next one is pulled, so a
slow disk slows the network read instead of growing a buffer.
"""

from __future__ import annotations

import asyncio
import contextlib
import os
import time
from pathlib import Path
from typing import AsyncIterator
from urllib.parse import urlsplit

import aiofiles
import httpx

from urlsaver.exceptions import (
    FetchError,
    FileWriteError,
    HTTPStatusError,
    InvalidURLError,
    UnsupportedSchemeError,
)
from urlsaver.logging import get_logger
from urlsaver.services.transfer._config import (
    ALLOWED_SCHEMES,
    DEFAULT_CHUNK_SIZE,
    DEFAULT_CONTENT_TYPE,
    DEFAULT_USER_AGENT,
    INVALID_HOST_CHARS,
)
from urlsaver.services.transfer._models import (
    TransferFailure,
    TransferMetrics,
    TransferOutcome,
    TransferState,
    TransferSuccess,
)

logger = get_logger(__name__)


def validate_url(url: str) -> str:
    """
    Check that url is an absolute http(s) URL.

    Raises:
        InvalidURLError: No scheme, missing or malformed host, or unparsable.
        UnsupportedSchemeError: Scheme is not http or https.
    """
    try:
        parts = urlsplit(url)
        # Accessing port validates it
        parts.port
    except ValueError as e:
        raise InvalidURLError(url, cause=e) from e

    if not parts.scheme:
        raise InvalidURLError(url)
    if parts.scheme.lower() not in ALLOWED_SCHEMES:
        raise UnsupportedSchemeError(url, parts.scheme)
    if not parts.hostname or not _is_valid_host(parts.hostname):
        raise InvalidURLError(url)
    return url


def _is_valid_host(hostname: str) -> bool:
    return not any(
        ch.isspace() or ord(ch) < 0x20 or ord(ch) == 0x7F or ch in INVALID_HOST_CHARS
        for ch in hostname
    )


async def ensure_parent_directory(path: Path) -> None:
    """Create the parent directory of path, recursively, off the event loop."""
    try:
        await asyncio.to_thread(path.parent.mkdir, parents=True, exist_ok=True)
    except OSError as e:
        raise FileWriteError(str(path.parent), "create directory", cause=e) from e


class AsyncTransferPipeline:
    """
    One URL to one file, producing a TransferOutcome.

    Every error is converted to TransferFailure; cancellation is propagated.
    Partial files are left on disk when streaming fails.

    Example:
        >>> pipeline = AsyncTransferPipeline()
        >>> outcome = await pipeline.transfer(
        ...     "https://example.com",
        ...     Path("/work/out/example.html"),
        ... )
        >>> outcome.to_payload()
    """

    def __init__(
        self,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        timeout: float | None = None,
        max_concurrent: int | None = None,
        follow_redirects: bool = True,
        user_agent: str = DEFAULT_USER_AGENT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._chunk_size = chunk_size
        self._timeout = timeout
        self._follow_redirects = follow_redirects
        self._user_agent = user_agent
        self._transport = transport
        self._semaphore = asyncio.Semaphore(max_concurrent) if max_concurrent else None

    @classmethod
    def from_settings(cls, transport: httpx.AsyncBaseTransport | None = None) -> AsyncTransferPipeline:
        """Build a pipeline from the process settings."""
        from urlsaver.config import get_settings

        settings = get_settings()
        return cls(
            chunk_size=settings.chunk_size,
            timeout=settings.request_timeout,
            max_concurrent=settings.max_concurrent_transfers,
            follow_redirects=settings.follow_redirects,
            user_agent=settings.user_agent,
            transport=transport,
        )

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=httpx.Timeout(self._timeout),
            follow_redirects=self._follow_redirects,
            headers={"User-Agent": self._user_agent},
            transport=self._transport,
        )

    @contextlib.asynccontextmanager
    async def _slot(self) -> AsyncIterator[None]:
        if self._semaphore is None:
            yield
            return
        async with self._semaphore:
            yield

    async def transfer(self, url: str, absolute_path: Path) -> TransferOutcome:
        """
        Download url into absolute_path.

        Args:
            url: Absolute http or https URL.
            absolute_path: Destination already approved by the path resolver.

        Returns:
            TransferSuccess or TransferFailure.
        """
        async with self._slot():
            return await self._run(url, Path(absolute_path))

    async def _run(self, url: str, path: Path) -> TransferOutcome:
        metrics = TransferMetrics()
        total_start = time.perf_counter()
        response: httpx.Response | None = None

        def set_state(state: TransferState) -> None:
            metrics.final_state = state
            logger.debug(f"Transfer {url} -> {path}: {state.value}")

        try:
            set_state(TransferState.VALIDATING)
            validate_url(url)
            await ensure_parent_directory(path)

            set_state(TransferState.FETCHING)
            fetch_start = time.perf_counter()
            async with self._client() as client:
                try:
                    async with client.stream("GET", url) as response:
                        metrics.fetch_time = time.perf_counter() - fetch_start

                        if not response.is_success:
                            raise HTTPStatusError(
                                url, response.status_code, response.reason_phrase
                            )

                        set_state(TransferState.STREAMING)
                        stream_start = time.perf_counter()
                        await self._stream_to_file(response, path, metrics)
                        metrics.stream_time = time.perf_counter() - stream_start
                except httpx.RequestError as e:
                    raise FetchError(url, str(e) or type(e).__name__, cause=e) from e

            try:
                file_size = (await asyncio.to_thread(os.stat, path)).st_size
            except OSError as e:
                raise FileWriteError(str(path), "stat", cause=e) from e

            content_type = response.headers.get("content-type") or DEFAULT_CONTENT_TYPE
            set_state(TransferState.COMPLETED)
            metrics.total_time = time.perf_counter() - total_start
            logger.debug(
                f"Complete: {file_size:,} bytes in {metrics.total_time:.2f}s "
                f"({metrics.chunks_count} chunks)"
            )
            return TransferSuccess(
                file_path=str(path),
                file_size=file_size,
                content_type=content_type,
                source_url=url,
                status_code=response.status_code,
                metrics=metrics,
            )

        except asyncio.CancelledError:
            set_state(TransferState.FAILED)
            logger.warning(f"Transfer cancelled: {url} -> {path}")
            raise

        except Exception as e:
            set_state(TransferState.FAILED)
            metrics.total_time = time.perf_counter() - total_start
            logger.error(f"Transfer failed: {e}")
            # Response metadata is only reported once a response arrived
            if response is not None:
                return TransferFailure(
                    reason=str(e) or type(e).__name__,
                    source_url=url,
                    status_code=response.status_code,
                    metrics=metrics,
                )
            return TransferFailure(reason=str(e) or type(e).__name__, metrics=metrics)

    async def _stream_to_file(
        self,
        response: httpx.Response,
        path: Path,
        metrics: TransferMetrics,
    ) -> None:
        opened = False
        try:
            async with aiofiles.open(path, "wb") as f:
                opened = True
                async for chunk in response.aiter_bytes(self._chunk_size):
                    try:
                        await f.write(chunk)
                    except OSError as e:
                        raise FileWriteError(str(path), "write", cause=e) from e
                    metrics.bytes_written += len(chunk)
                    metrics.chunks_count += 1
        except OSError as e:
            # Raised by open, or by the flush on close
            raise FileWriteError(str(path), "write" if opened else "open", cause=e) from e
