"""
FalkorDB MCP Server using FastMCP
Supports all transport methods: stdio, SSE, and streamable-http
"""
import logging
from typing import Optional, Sequence

from mcp.server.fastmcp import FastMCP

from .config import FalkorDBConfig, ServerConfig, parse_args
from .connection_manager import FalkorDBConnectionManager
from .fdb import obfuscate_password
from .fnc_tools import (
    set_tools_connection,
    handle_list_tools,
    handle_tool_call
)
from .fnc_resources import (
    set_resource_connection,
    handle_list_resources,
    handle_read_resource
)
from .fnc_prompts import (
    handle_list_prompts,
    handle_get_prompt
)

logger = logging.getLogger(__name__)

# Global connection manager, connected lazily on the first tool call
_connection_manager: Optional[FalkorDBConnectionManager] = None


def initialize_database(argv: Optional[Sequence[str]] = None) -> FalkorDBConnectionManager:
    """Build the connection manager from environment or command line, without connecting."""
    global _connection_manager

    args = parse_args(argv)
    config = FalkorDBConfig.from_environment(args.database_url)
    logger.info(
        f"FalkorDB target: {config.host}:{config.port}"
        + (f" ({obfuscate_password(config.url)})" if config.url else "")
    )

    _connection_manager = FalkorDBConnectionManager(config)
    set_tools_connection(_connection_manager)
    set_resource_connection(_connection_manager)
    return _connection_manager


async def shutdown():
    """Release the connection handle. Called once the transport has stopped."""
    global _connection_manager

    if _connection_manager is not None:
        await _connection_manager.close()
        _connection_manager = None
    set_tools_connection(None)
    set_resource_connection(None)


SERVER_VERSION = "1.0.0"

# Create FastMCP app
app = FastMCP("falkordb-mcp")
app._mcp_server.version = SERVER_VERSION

# Set up the handlers using the internal MCP server
app._mcp_server.list_tools()(handle_list_tools)
app._mcp_server.call_tool(validate_input=False)(handle_tool_call)
app._mcp_server.list_resources()(handle_list_resources)
app._mcp_server.read_resource()(handle_read_resource)
app._mcp_server.list_prompts()(handle_list_prompts)
app._mcp_server.get_prompt()(handle_get_prompt)


async def main(argv: Optional[Sequence[str]] = None):
    """Main entry point for the server."""
    server_config = ServerConfig.from_environment()
    logging.basicConfig(
        level=server_config.log_level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s"
    )

    initialize_database(argv)

    logger.info(f"MCP_TRANSPORT: {server_config.transport}")

    try:
        if server_config.transport == "sse":
            app.settings.host = server_config.host
            app.settings.port = server_config.port
            logger.info(f"Starting MCP server on {app.settings.host}:{app.settings.port}")
            await app.run_sse_async()
        elif server_config.transport == "streamable-http":
            app.settings.host = server_config.host
            app.settings.port = server_config.port
            app.settings.streamable_http_path = server_config.path
            logger.info(f"Starting MCP server on {app.settings.host}:{app.settings.port} with path {app.settings.streamable_http_path}")
            await app.run_streamable_http_async()
        else:
            logger.info("FalkorDB MCP Server running on stdio")
            await app.run_stdio_async()
    finally:
        # stdin closed or the client disconnected
        await shutdown()
