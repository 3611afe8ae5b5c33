"""
URL Content Saver exceptions.

All errors derive from UrlSaverError. The transfer pipeline raises these
internally and converts them to TransferFailure outcomes at its boundary,
so callers of the public operation never see them.
"""

from __future__ import annotations


class UrlSaverError(Exception):
    """Base exception for URL Content Saver."""

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        self.message = message
        self._original_cause = cause
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


# =============================================================================
# Input validation
# =============================================================================


class InvalidURLError(UrlSaverError):
    """URL could not be parsed as an absolute URL."""

    def __init__(
        self,
        url: str,
        cause: BaseException | None = None,
        message: str | None = None,
    ) -> None:
        self.url = url
        super().__init__(message or f"Invalid URL: {url}", cause=cause)


class UnsupportedSchemeError(InvalidURLError):
    """URL parsed but does not use http or https."""

    def __init__(self, url: str, scheme: str) -> None:
        self.scheme = scheme
        super().__init__(url, message="URL must include http:// or https:// protocol")


# =============================================================================
# Authorization
# =============================================================================


class PathNotPermittedError(UrlSaverError):
    """Destination resolves outside the permitted base directory."""

    def __init__(self, path: str, base_directory: str) -> None:
        self.path = path
        self.base_directory = base_directory
        super().__init__(
            f"Invalid file path: Path is outside the base directory ({base_directory})"
        )


# =============================================================================
# Network
# =============================================================================


class FetchError(UrlSaverError):
    """Request failed before a response was obtained (DNS, connect, timeout)."""

    def __init__(self, url: str, reason: str, cause: BaseException | None = None) -> None:
        self.url = url
        self.reason = reason
        super().__init__(f"Failed to fetch URL: {reason}", cause=cause)


class HTTPStatusError(FetchError):
    """Response arrived with a non-2xx status."""

    def __init__(self, url: str, status_code: int, reason_phrase: str = "") -> None:
        self.status_code = status_code
        self.reason_phrase = reason_phrase
        reason = f"{status_code} {reason_phrase}".strip()
        super().__init__(url, reason)


# =============================================================================
# Filesystem
# =============================================================================


class FileWriteError(UrlSaverError):
    """Directory creation, write or stat failed on the destination."""

    def __init__(
        self,
        path: str,
        operation: str,
        cause: BaseException | None = None,
    ) -> None:
        self.path = path
        self.operation = operation
        detail = ""
        if cause is not None:
            detail = f": {getattr(cause, 'strerror', None) or cause}"
        super().__init__(f"Failed to {operation} {path}{detail}", cause=cause)


__all__ = [
    "UrlSaverError",
    "InvalidURLError",
    "UnsupportedSchemeError",
    "PathNotPermittedError",
    "FetchError",
    "HTTPStatusError",
    "FileWriteError",
]
