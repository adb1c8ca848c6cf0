"""MCP server wiring for the GitLab tools."""

import logging
import time
from typing import Any, Dict, List, Optional

from mcp import types
from mcp.server import Server
from mcp.server.stdio import stdio_server

from .client.gitlab import GitLabClient
from .config import Settings, get_settings
from .observability.logging import clear_log_context, set_log_context
from .tools import ToolRegistry, tool_registry

logger = logging.getLogger(__name__)


def register_all_tools(
    server: Server,
    client: GitLabClient,
    registry: ToolRegistry = tool_registry,
) -> Server:
    """Attach every registered tool to an MCP server.

    Tool failures are logged and re-raised; the MCP server turns them into
    error results for the calling agent.
    """

    @server.list_tools()
    async def handle_list_tools() -> List[types.Tool]:
        """List available GitLab tools."""
        tools = registry.list_tools()
        logger.debug("Returning %d tools", len(tools))
        return tools

    @server.call_tool()
    async def handle_call_tool(
        name: str, arguments: Optional[Dict[str, Any]] = None
    ) -> List[types.TextContent]:
        """Handle tool calls."""
        set_log_context(tool_name=name)
        logger.info("Tool call: %s", name)

        start = time.perf_counter()
        try:
            result = await registry.call(client, name, arguments or {})
        except Exception as e:
            logger.error(
                "Tool execution failed: %s - %s (%.2fs)",
                name, str(e), time.perf_counter() - start,
            )
            raise
        else:
            logger.debug("Tool %s finished in %.2fs", name, time.perf_counter() - start)
            return [types.TextContent(type="text", text=result)]
        finally:
            clear_log_context()

    logger.info("Registered %d GitLab tools", len(registry.list_tool_names()))
    return server


def create_server(
    client: Optional[GitLabClient] = None,
    settings: Optional[Settings] = None,
) -> Server:
    """Create an MCP server with all GitLab tools registered."""
    settings = settings or get_settings()
    server = Server(settings.server_name, version=settings.server_version)
    gitlab_client = client or GitLabClient.from_settings(settings)
    return register_all_tools(server, gitlab_client)


async def serve_stdio(server: Server):
    """Run the MCP server over stdin/stdout until the stream closes."""
    async with stdio_server() as (read_stream, write_stream):
        await server.run(
            read_stream,
            write_stream,
            server.create_initialization_options(),
        )
