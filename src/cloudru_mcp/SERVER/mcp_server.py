"""
MCP stdio server exposing the Cloud.ru tools.
"""
import asyncio
import logging

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

from .. import SERVER_NAME, __version__
from .tools import CloudruTools

logger = logging.getLogger(__name__)


class ToolCallError(Exception):
    """Raised inside the call handler so the client receives an error result."""


def create_server(tools: CloudruTools) -> Server:
    """
    Builds the MCP server with list_tools/call_tool handlers bound to ``tools``.
    """
    app = Server(SERVER_NAME, version=__version__)

    @app.list_tools()
    async def list_tools() -> list[Tool]:
        return [
            Tool(
                name=definition.name,
                description=definition.description,
                inputSchema=tools.input_schema(definition.name),
            )
            for definition in tools.definitions()
        ]

    @app.call_tool()
    async def call_tool(name: str, arguments: dict) -> list[TextContent]:
        logger.info("Tool call: %s", name)
        try:
            # Handlers block on HTTP and subprocess I/O
            result = await asyncio.to_thread(tools.call, name, arguments or {})
        except Exception:
            logger.exception("tool call failed: %s", name)
            raise

        if result.is_error:
            raise ToolCallError(result.text)
        return [TextContent(type="text", text=result.text)]

    return app


async def serve(tools: CloudruTools) -> None:
    """Runs the server on stdin/stdout until the client disconnects."""
    app = create_server(tools)
    logger.info("[START] %s v%s", SERVER_NAME, __version__)

    async with stdio_server() as (read_stream, write_stream):
        await app.run(read_stream, write_stream, app.create_initialization_options())
