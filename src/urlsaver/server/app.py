"""
MCP server exposing the saveUrlContent tool.

Built on the low-level mcp Server so the tool result can carry the JSON
payload as text together with the isError flag.
"""

from __future__ import annotations

import json
from typing import Any

import mcp.types as types
from mcp.server.lowlevel import Server
from pydantic import BaseModel, Field, ValidationError

from urlsaver import __version__
from urlsaver.logging import get_logger
from urlsaver.services.saver import AsyncUrlSaverService
from urlsaver.services.transfer import TransferOutcome

logger = get_logger(__name__)

SERVER_NAME = "URL Content Saver"
TOOL_NAME = "saveUrlContent"
TOOL_DESCRIPTION = (
    "Download the content at a URL and save it to a file. "
    "Relative file paths are resolved against the server's base directory. "
    "Returns the saved file path, size in bytes, content type and HTTP status."
)


class SaveUrlContentArgs(BaseModel):
    """Arguments of the saveUrlContent tool."""

    url: str = Field(
        min_length=1,
        description="The complete URL to fetch content from (must include http:// or https://)",
    )
    filePath: str = Field(
        min_length=1,
        description="The target file path where the content should be saved",
    )


def build_tool() -> types.Tool:
    """Tool definition advertised by tools/list."""
    return types.Tool(
        name=TOOL_NAME,
        description=TOOL_DESCRIPTION,
        inputSchema=SaveUrlContentArgs.model_json_schema(),
    )


def _text_result(payload: dict[str, Any], is_error: bool) -> types.CallToolResult:
    return types.CallToolResult(
        content=[types.TextContent(type="text", text=json.dumps(payload))],
        isError=is_error,
    )


def outcome_to_result(outcome: TransferOutcome) -> types.CallToolResult:
    """Serialize a transfer outcome as a single text payload."""
    return _text_result(outcome.to_payload(), is_error=not outcome.success)


async def call_save_url_content(
    service: AsyncUrlSaverService,
    arguments: dict[str, Any] | None,
) -> types.CallToolResult:
    """Validate arguments and run one save."""
    try:
        args = SaveUrlContentArgs.model_validate(arguments or {})
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        logger.error(f"Rejected {TOOL_NAME} arguments: {problems}")
        return _text_result({"success": False, "error": f"Invalid arguments: {problems}"}, True)

    outcome = await service.save(args.url, args.filePath)
    return outcome_to_result(outcome)


def create_server(service: AsyncUrlSaverService | None = None) -> Server:
    """
    Create a configured MCP server.

    Args:
        service: Saver service to run tool calls on. Built from settings if None.

    Returns:
        Low-level MCP Server with saveUrlContent registered.
    """
    service = service or AsyncUrlSaverService()
    server: Server = Server(SERVER_NAME, version=__version__)

    @server.list_tools()
    async def handle_list_tools() -> list[types.Tool]:
        return [build_tool()]

    @server.call_tool()
    async def handle_call_tool(name: str, arguments: dict[str, Any]) -> types.CallToolResult:
        if name != TOOL_NAME:
            raise ValueError(f"Unknown tool: {name}")
        return await call_save_url_content(service, arguments)

    return server


__all__ = [
    "SERVER_NAME",
    "TOOL_NAME",
    "SaveUrlContentArgs",
    "build_tool",
    "call_save_url_content",
    "create_server",
    "outcome_to_result",
]
