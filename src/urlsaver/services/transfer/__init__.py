"""
Transfer pipeline for URL Content Saver.

Streams an HTTP response body to disk without buffering it in memory.

Features:
- URL validation before any network I/O
- Parent directory creation
- Chunked streaming through aiofiles
- Classified failures instead of exceptions
- Optional timeout and concurrency cap
"""

from urlsaver.services.transfer._models import (
    TransferFailure,
    TransferMetrics,
    TransferOutcome,
    TransferState,
    TransferSuccess,
)
from urlsaver.services.transfer._pipeline import (
    AsyncTransferPipeline,
    ensure_parent_directory,
    validate_url,
)

__all__ = [
    "AsyncTransferPipeline",
    "TransferFailure",
    "TransferMetrics",
    "TransferOutcome",
    "TransferState",
    "TransferSuccess",
    "ensure_parent_directory",
    "validate_url",
]
