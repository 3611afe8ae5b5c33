"""
Logging setup.

Everything goes to stderr: stdout belongs to the stdio MCP transport.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER = "urlsaver"


class JsonFormatter(logging.Formatter):
    """One JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload)


def setup_logging(level: str | None = None, json_output: bool | None = None) -> logging.Logger:
    """
    Configure the urlsaver logger hierarchy.

    Args:
        level: Log level name. Defaults to settings.log_level.
        json_output: Emit JSON lines instead of rich output. Defaults to settings.log_json.

    Returns:
        The package root logger.
    """
    from urlsaver.config import get_settings

    settings = get_settings()
    level = level or settings.log_level
    if json_output is None:
        json_output = settings.log_json

    logger = logging.getLogger(ROOT_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    if json_output:
        handler: logging.Handler = logging.StreamHandler()  # stderr
        handler.setFormatter(JsonFormatter())
    else:
        handler = RichHandler(
            console=Console(stderr=True),
            show_path=False,
            rich_tracebacks=True,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))

    logger.addHandler(handler)
    logger.setLevel(level.upper())
    logger.propagate = False
    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger inside the urlsaver hierarchy."""
    if name != ROOT_LOGGER and not name.startswith(f"{ROOT_LOGGER}."):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)


__all__ = ["JsonFormatter", "setup_logging", "get_logger"]
