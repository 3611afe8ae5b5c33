"""
Saver service for URL Content Saver.

The single operation behind the saveUrlContent tool: resolve and authorize
the destination, then run the transfer pipeline.
Supports both sync and async patterns.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

from urlsaver.exceptions import PathNotPermittedError
from urlsaver.logging import get_logger
from urlsaver.services.paths import EnvironmentContext, resolve_destination
from urlsaver.services.transfer import (
    AsyncTransferPipeline,
    TransferFailure,
    TransferOutcome,
)

logger = get_logger(__name__)


class AsyncUrlSaverService:
    """
    Asynchronous saver service.

    Example:
        >>> service = AsyncUrlSaverService()
        >>> outcome = await service.save("https://example.com", "out/example.html")
        >>> outcome.to_payload()
        {'success': True, 'filePath': '/work/out/example.html', ...}
    """

    def __init__(
        self,
        pipeline: AsyncTransferPipeline | None = None,
        environment: EnvironmentContext | None = None,
    ) -> None:
        self._pipeline = pipeline or AsyncTransferPipeline.from_settings()
        # None means: snapshot the process environment on every call
        self._environment = environment

    @property
    def pipeline(self) -> AsyncTransferPipeline:
        return self._pipeline

    async def save(self, url: str, file_path: str) -> TransferOutcome:
        """
        Download url into file_path.

        Args:
            url: Absolute http or https URL.
            file_path: Absolute path, or path relative to the base directory.

        Returns:
            TransferSuccess or TransferFailure. Never raises for a failed transfer.
        """
        logger.info(f"saveUrlContent url={url} filePath={file_path}")

        if not url:
            return TransferFailure(reason="URL cannot be empty")
        if not file_path:
            return TransferFailure(reason="File path cannot be empty")

        ctx = self._environment or EnvironmentContext.from_process()
        destination = resolve_destination(file_path, ctx)
        logger.debug(
            f"Base directory: {destination.base_directory} "
            f"(from {destination.base_directory_source})"
        )

        if not destination.permitted:
            error = PathNotPermittedError(file_path, destination.base_directory)
            logger.error(f"{error} [{file_path}]")
            return TransferFailure(reason=str(error))

        logger.debug(f"Absolute file path: {destination.absolute_path}")
        outcome = await self._pipeline.transfer(url, Path(destination.absolute_path))

        if outcome.success:
            logger.info(f"Saved {url} to {outcome.file_path} ({outcome.file_size} bytes)")
        else:
            logger.error(f"saveUrlContent failed: {outcome.reason}")
        return outcome


class UrlSaverService:
    """
    Synchronous saver service.

    Thin wrapper around AsyncUrlSaverService using asyncio.run().

    Example:
        >>> outcome = UrlSaverService().save("https://example.com", "example.html")
        >>> print(outcome)
    """

    def __init__(
        self,
        pipeline: AsyncTransferPipeline | None = None,
        environment: EnvironmentContext | None = None,
    ) -> None:
        self._async_service = AsyncUrlSaverService(pipeline=pipeline, environment=environment)

    def save(self, url: str, file_path: str) -> TransferOutcome:
        """Download url into file_path."""
        return asyncio.run(self._async_service.save(url, file_path))


__all__ = ["AsyncUrlSaverService", "UrlSaverService"]
