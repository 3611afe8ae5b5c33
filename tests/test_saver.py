"""Tests for the saver services."""

import os
from unittest.mock import AsyncMock, MagicMock

import pytest

from urlsaver.services import AsyncUrlSaverService, UrlSaverService
from urlsaver.services.transfer import TransferFailure


class TestAsyncUrlSaverService:
    """Tests for AsyncUrlSaverService."""

    @pytest.mark.asyncio
    async def test_save_relative_path(self, make_pipeline, serve_bytes, base_context, workspace):
        body = b"<!doctype html><title>Example Domain</title>"
        service = AsyncUrlSaverService(
            pipeline=make_pipeline(serve_bytes(body, content_type="text/html; charset=UTF-8")),
            environment=base_context,
        )

        outcome = await service.save("https://example.com", "out/example.html")

        assert outcome.success is True
        assert outcome.file_path == str(workspace / "out" / "example.html")
        assert outcome.file_size == len(body)
        assert outcome.content_type == "text/html; charset=UTF-8"
        assert outcome.status_code == 200
        assert (workspace / "out" / "example.html").read_bytes() == body

    @pytest.mark.asyncio
    async def test_save_absolute_path_inside_base(
        self, make_pipeline, serve_bytes, base_context, workspace
    ):
        target = workspace / "deep" / "file.txt"
        service = AsyncUrlSaverService(
            pipeline=make_pipeline(serve_bytes(b"abc")), environment=base_context
        )

        outcome = await service.save("https://example.com/file", str(target))

        assert outcome.success is True
        assert outcome.file_path == str(target)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("file_path", ["../../etc/passwd", "/etc/passwd", "../sibling.txt"])
    async def test_path_outside_base(
        self, make_pipeline, serve_bytes, base_context, workspace, file_path
    ):
        calls = []
        service = AsyncUrlSaverService(
            pipeline=make_pipeline(serve_bytes(b"x", calls=calls)), environment=base_context
        )

        outcome = await service.save("https://example.com", file_path)

        assert outcome.success is False
        assert outcome.reason == (
            f"Invalid file path: Path is outside the base directory ({workspace})"
        )
        assert outcome.to_payload() == {"success": False, "error": outcome.reason}
        assert calls == []

    @pytest.mark.asyncio
    async def test_any_path_override(self, make_pipeline, serve_bytes, make_context, workspace, tmp_path):
        ctx = make_context(
            environ={"MCP_BASE_DIR": str(workspace), "MCP_ALLOW_ANY_PATH": "true"}
        )
        service = AsyncUrlSaverService(
            pipeline=make_pipeline(serve_bytes(b"free")), environment=ctx
        )

        outcome = await service.save("https://example.com", "../outside/f.txt")

        assert outcome.success is True
        assert outcome.file_path == str(tmp_path / "outside" / "f.txt")

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "url,file_path,reason",
        [
            ("", "f.txt", "URL cannot be empty"),
            ("https://example.com", "", "File path cannot be empty"),
        ],
    )
    async def test_empty_arguments(self, base_context, url, file_path, reason):
        pipeline = MagicMock()
        pipeline.transfer = AsyncMock()
        service = AsyncUrlSaverService(pipeline=pipeline, environment=base_context)

        outcome = await service.save(url, file_path)

        assert outcome.success is False
        assert outcome.reason == reason
        pipeline.transfer.assert_not_called()

    @pytest.mark.asyncio
    async def test_invalid_url_reported(self, make_pipeline, serve_bytes, base_context):
        service = AsyncUrlSaverService(
            pipeline=make_pipeline(serve_bytes(b"x")), environment=base_context
        )

        outcome = await service.save("not-a-url", "f.txt")

        assert outcome.success is False
        assert outcome.reason == "Invalid URL: not-a-url"

    @pytest.mark.asyncio
    async def test_passes_resolved_path_to_pipeline(self, base_context, workspace):
        pipeline = MagicMock()
        pipeline.transfer = AsyncMock(return_value=TransferFailure(reason="stub"))
        service = AsyncUrlSaverService(pipeline=pipeline, environment=base_context)

        await service.save("https://example.com", "a/./b/../c.txt")

        url, path = pipeline.transfer.call_args.args
        assert url == "https://example.com"
        assert str(path) == str(workspace / "a" / "c.txt")

    @pytest.mark.asyncio
    async def test_reads_process_environment_per_call(
        self, make_pipeline, serve_bytes, tmp_path, monkeypatch
    ):
        first = tmp_path / "first"
        second = tmp_path / "second"
        first.mkdir()
        second.mkdir()
        service = AsyncUrlSaverService(pipeline=make_pipeline(serve_bytes(b"x")))

        monkeypatch.setenv("MCP_BASE_DIR", str(first))
        monkeypatch.delenv("MCP_ALLOW_ANY_PATH", raising=False)
        one = await service.save("https://example.com", "f.txt")
        monkeypatch.setenv("MCP_BASE_DIR", str(second))
        two = await service.save("https://example.com", "f.txt")

        assert one.file_path == os.path.join(str(first), "f.txt")
        assert two.file_path == os.path.join(str(second), "f.txt")

    def test_default_pipeline_from_settings(self, reset_urlsaver_settings):
        service = AsyncUrlSaverService()
        assert service.pipeline is not None


class TestUrlSaverService:
    """Tests for the synchronous wrapper."""

    def test_save(self, make_pipeline, serve_bytes, base_context, workspace):
        service = UrlSaverService(
            pipeline=make_pipeline(serve_bytes(b"sync body")), environment=base_context
        )

        outcome = service.save("https://example.com", "sync.txt")

        assert outcome.success is True
        assert (workspace / "sync.txt").read_bytes() == b"sync body"

    def test_failure(self, make_pipeline, serve_bytes, base_context):
        service = UrlSaverService(
            pipeline=make_pipeline(serve_bytes(b"", status_code=503)), environment=base_context
        )

        outcome = service.save("https://example.com", "f.txt")

        assert outcome.success is False
        assert outcome.status_code == 503
        assert outcome.reason == "Failed to fetch URL: 503 Service Unavailable"
