"""MCP server for URL Content Saver."""

from urlsaver.server.app import (
    SERVER_NAME,
    TOOL_NAME,
    SaveUrlContentArgs,
    build_tool,
    call_save_url_content,
    create_server,
    outcome_to_result,
)
from urlsaver.server.transports import (
    MCP_PATH,
    create_http_app,
    log_startup_environment,
    run_http,
    run_stdio,
)

__all__ = [
    "MCP_PATH",
    "SERVER_NAME",
    "TOOL_NAME",
    "SaveUrlContentArgs",
    "build_tool",
    "call_save_url_content",
    "create_http_app",
    "create_server",
    "log_startup_environment",
    "outcome_to_result",
    "run_http",
    "run_stdio",
]
