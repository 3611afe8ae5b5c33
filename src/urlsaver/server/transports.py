"""
Transports for the MCP server.

- stdio: JSON-RPC over stdin/stdout for local process integration
- Streamable HTTP: POST/GET/DELETE on /mcp, sessions keyed by the
  mcp-session-id header
"""

from __future__ import annotations

import contextlib
import platform
import sys
from typing import Any, AsyncIterator

from mcp.server.lowlevel import Server
from mcp.server.streamable_http_manager import StreamableHTTPSessionManager
from starlette.applications import Starlette
from starlette.routing import Route
from starlette.types import Receive, Scope, Send

from urlsaver.logging import get_logger
from urlsaver.server.app import create_server
from urlsaver.services.paths import EnvironmentContext, resolve_base_directory_with_source

logger = get_logger(__name__)

MCP_PATH = "/mcp"

_LOGGED_ENV_VARS = (
    "VSCODE_CWD",
    "VSCODE_EXTENSION_PATH",
    "VSCODE_WORKSPACE_FOLDER",
    "MCP_BASE_DIR",
    "MCP_ALLOW_ANY_PATH",
)


def log_startup_environment(ctx: EnvironmentContext | None = None) -> None:
    """Log where the server runs and how it resolves paths."""
    ctx = ctx or EnvironmentContext.from_process()
    base_directory, source = resolve_base_directory_with_source(ctx)
    logger.info(f"Current working directory: {ctx.cwd or '<inaccessible>'}")
    logger.info(f"Home directory: {ctx.home}")
    logger.info(f"Base directory for file operations: {base_directory} (from {source})")
    logger.info(f"Python version: {platform.python_version()}")
    logger.info(f"Platform: {sys.platform}")
    for name in _LOGGED_ENV_VARS:
        value = ctx.get(name)
        if value is not None:
            logger.info(f"{name}: {value}")


# =============================================================================
# stdio
# =============================================================================


async def run_stdio(server: Server | None = None) -> None:
    """Serve on stdin/stdout until the client disconnects."""
    from mcp.server.stdio import stdio_server

    server = server or create_server()
    logger.info("Starting URL Content Saver MCP Server with stdio transport")
    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())
    logger.info("stdio transport closed")


# =============================================================================
# Streamable HTTP
# =============================================================================


class StreamableHTTPEndpoint:
    """ASGI endpoint delegating every request to the session manager."""

    def __init__(self, session_manager: StreamableHTTPSessionManager) -> None:
        self._session_manager = session_manager

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        await self._session_manager.handle_request(scope, receive, send)


def create_http_app(server: Server | None = None, json_response: bool = False) -> Starlette:
    """
    Create the ASGI app for the Streamable HTTP transport.

    Each initialize request without a session id opens a new session; later
    requests must carry the mcp-session-id header. DELETE ends a session.
    """
    server = server or create_server()
    session_manager = StreamableHTTPSessionManager(
        app=server,
        event_store=None,
        json_response=json_response,
        stateless=False,
    )

    @contextlib.asynccontextmanager
    async def lifespan(app: Starlette) -> AsyncIterator[None]:
        async with session_manager.run():
            logger.info(f"Session manager started on {MCP_PATH}")
            yield
        logger.info("Session manager stopped")

    app = Starlette(
        routes=[
            Route(
                MCP_PATH,
                endpoint=StreamableHTTPEndpoint(session_manager),
                methods=["GET", "POST", "DELETE"],
            ),
        ],
        lifespan=lifespan,
    )
    app.state.session_manager = session_manager
    return app


def run_http(host: str, port: int, server: Server | None = None, **uvicorn_options: Any) -> None:
    """Serve the HTTP transport with uvicorn. Blocks until shutdown."""
    import uvicorn

    app = create_http_app(server)
    logger.info(f"Starting URL Content Saver MCP Server with HTTP transport on {host}:{port}")
    uvicorn.run(app, host=host, port=port, **uvicorn_options)
