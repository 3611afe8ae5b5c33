"""
URL Content Saver.

Downloads the content at a URL into a file for AI-agent clients, over MCP
(stdio or Streamable HTTP) or from the command line.

Example:
    >>> from urlsaver import UrlSaverService
    >>> outcome = UrlSaverService().save("https://example.com", "out/example.html")
    >>> outcome.to_payload()
"""

__version__ = "1.0.0"

from urlsaver.exceptions import UrlSaverError  # noqa: E402
from urlsaver.services.paths import EnvironmentContext, ResolvedDestination  # noqa: E402
from urlsaver.services.saver import AsyncUrlSaverService, UrlSaverService  # noqa: E402
from urlsaver.services.transfer import (  # noqa: E402
    AsyncTransferPipeline,
    TransferFailure,
    TransferOutcome,
    TransferSuccess,
)

__all__ = [
    "__version__",
    "AsyncTransferPipeline",
    "AsyncUrlSaverService",
    "EnvironmentContext",
    "ResolvedDestination",
    "TransferFailure",
    "TransferOutcome",
    "TransferSuccess",
    "UrlSaverError",
    "UrlSaverService",
]
