"""
Snapshot of the ambient execution context used by the path resolver.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from urlsaver.services.paths._config import (
    ALLOW_ANY_PATH_ENV,
    BASE_DIR_ENV,
    TRUTHY_VALUES,
)


@dataclass(frozen=True)
class EnvironmentContext:
    """
    Immutable view of environment variables, working directory and home.

    The resolver only ever reads from this object, which keeps it a pure
    function of (raw_path, context).

    Example:
        >>> ctx = EnvironmentContext(
        ...     environ={"MCP_BASE_DIR": "/work"},
        ...     cwd="/work",
        ...     home="/home/me",
        ... )
        >>> ctx.base_dir_override
        '/work'
    """

    environ: Mapping[str, str] = field(default_factory=dict)
    cwd: str | None = None
    home: str = ""

    @classmethod
    def from_process(cls) -> EnvironmentContext:
        """Capture the current process environment."""
        try:
            cwd: str | None = os.getcwd()
        except OSError:
            # Working directory was deleted or is not accessible
            cwd = None
        return cls(environ=dict(os.environ), cwd=cwd, home=str(Path.home()))

    def get(self, name: str) -> str | None:
        """Return a stripped variable value, or None when unset or blank."""
        value = self.environ.get(name)
        if value is None:
            return None
        value = value.strip()
        return value or None

    @property
    def base_dir_override(self) -> str | None:
        return self.get(BASE_DIR_ENV)

    @property
    def allow_any_path(self) -> bool:
        value = self.get(ALLOW_ANY_PATH_ENV)
        return value is not None and value.lower() in TRUTHY_VALUES

    def absolute(self, path: str, relative_to: str | None = None) -> str:
        """Make path absolute against relative_to (default: the context cwd)."""
        if os.path.isabs(path):
            return os.path.normpath(path)
        anchor = relative_to or self.cwd or self.home or os.sep
        return os.path.normpath(os.path.join(anchor, path))
