"""
Models for the transfer pipeline.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Literal, Union

from pydantic import BaseModel, Field

from urlsaver.services.transfer._config import DEFAULT_CONTENT_TYPE


class TransferState(str, Enum):
    """Lifecycle of a single transfer."""

    PENDING = "pending"
    VALIDATING = "validating"
    FETCHING = "fetching"
    STREAMING = "streaming"
    COMPLETED = "completed"
    FAILED = "failed"


class TransferMetrics(BaseModel):
    """Metrics for a transfer operation."""

    # Timing (seconds)
    total_time: float = 0.0
    fetch_time: float = 0.0
    stream_time: float = 0.0

    # Transfer details
    bytes_written: int = 0
    chunks_count: int = 0
    final_state: TransferState = TransferState.PENDING

    @property
    def speed_mbps(self) -> float:
        """Streaming speed in MB/s."""
        if self.stream_time <= 0:
            return 0.0
        return (self.bytes_written / 1024 / 1024) / self.stream_time

    def summary(self) -> str:
        """Human-readable summary."""
        size_mb = self.bytes_written / 1024 / 1024
        lines = [
            f"Size: {size_mb:.1f} MB ({self.bytes_written:,} bytes)",
            f"Total: {self.total_time:.2f}s",
        ]
        if self.fetch_time > 0:
            lines.append(f"  └─ Fetch: {self.fetch_time:.2f}s")
        if self.stream_time > 0:
            lines.append(f"  └─ Stream: {self.stream_time:.2f}s @ {self.speed_mbps:.1f} MB/s")
        if self.chunks_count > 0:
            lines.append(f"Chunks: {self.chunks_count}")
        return "\n".join(lines)


class TransferSuccess(BaseModel):
    """Content was written to disk."""

    success: Literal[True] = True
    file_path: str
    file_size: int = Field(ge=0)
    content_type: str = DEFAULT_CONTENT_TYPE
    source_url: str
    status_code: int = Field(ge=200, le=299)
    metrics: TransferMetrics = Field(default_factory=TransferMetrics, exclude=True)

    def to_payload(self) -> dict[str, Any]:
        """Wire form returned to saveUrlContent callers."""
        return {
            "success": True,
            "filePath": self.file_path,
            "fileSize": self.file_size,
            "contentType": self.content_type,
            "url": self.source_url,
            "statusCode": self.status_code,
        }

    def __str__(self) -> str:
        return f"Saved {self.source_url} -> {self.file_path}\n{self.metrics.summary()}"


class TransferFailure(BaseModel):
    """Transfer did not complete. source_url/status_code are set once a response arrived."""

    success: Literal[False] = False
    reason: str
    source_url: str | None = None
    status_code: int | None = None
    metrics: TransferMetrics = Field(default_factory=TransferMetrics, exclude=True)

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"success": False, "error": self.reason}
        if self.source_url is not None:
            payload["url"] = self.source_url
        if self.status_code is not None:
            payload["statusCode"] = self.status_code
        return payload

    def __str__(self) -> str:
        return f"Failed: {self.reason}"


TransferOutcome = Union[TransferSuccess, TransferFailure]
