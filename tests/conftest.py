"""
Pytest configuration and fixtures for URL Content Saver tests.
"""

from __future__ import annotations

from pathlib import Path

import httpx
import pytest

from urlsaver.services.paths import EnvironmentContext
from urlsaver.services.transfer import AsyncTransferPipeline


# ============================================================================
# Environment Fixtures
# ============================================================================


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """Directory used as the base directory in most tests."""
    path = tmp_path / "work"
    path.mkdir()
    return path


@pytest.fixture
def home_dir(tmp_path: Path) -> Path:
    """Fake home directory."""
    path = tmp_path / "home"
    path.mkdir()
    return path


@pytest.fixture
def make_context(workspace: Path, home_dir: Path):
    """Factory for EnvironmentContext snapshots rooted in tmp_path."""

    def _create(
        environ: dict[str, str] | None = None,
        cwd: str | Path | None = "default",
        home: str | Path | None = None,
    ) -> EnvironmentContext:
        if cwd == "default":
            cwd = workspace
        return EnvironmentContext(
            environ=environ or {},
            cwd=str(cwd) if cwd is not None else None,
            home=str(home if home is not None else home_dir),
        )

    return _create


@pytest.fixture
def base_context(make_context, workspace: Path) -> EnvironmentContext:
    """Context whose base directory is the workspace via MCP_BASE_DIR."""
    return make_context(environ={"MCP_BASE_DIR": str(workspace)})


# ============================================================================
# HTTP Fixtures
# ============================================================================


@pytest.fixture
def serve_bytes():
    """Create a MockTransport handler answering every request with one response."""

    def _create(
        body: bytes = b"",
        status_code: int = 200,
        content_type: str | None = "text/html; charset=utf-8",
        calls: list | None = None,
    ):
        def handler(request: httpx.Request) -> httpx.Response:
            if calls is not None:
                calls.append(request)
            headers = {"content-type": content_type} if content_type else {}
            return httpx.Response(status_code, content=body, headers=headers)

        return handler

    return _create


@pytest.fixture
def make_pipeline():
    """Factory for pipelines backed by an httpx.MockTransport."""

    def _create(handler, **kwargs) -> AsyncTransferPipeline:
        kwargs.setdefault("chunk_size", 1024)
        return AsyncTransferPipeline(transport=httpx.MockTransport(handler), **kwargs)

    return _create


# ============================================================================
# Settings Fixtures
# ============================================================================


@pytest.fixture
def reset_urlsaver_settings():
    """Reset settings before and after test."""
    from urlsaver.config import reset_settings

    reset_settings()
    yield
    reset_settings()
