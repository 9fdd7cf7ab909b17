"""
MCP Resource Functions for FalkorDB Graphs

Each graph is published as a resource whose content is its schema in YAML.
"""

import logging
import yaml
from typing import Any
from urllib.parse import quote, unquote
from pydantic import AnyUrl

import mcp.types as types
from .fdb import obfuscate_password
from .fnc_tools import fetch_schema

logger = logging.getLogger(__name__)

GRAPH_URI_PREFIX = "falkordb://graph/"

# Global connection manager
_connection_manager = None


def set_resource_connection(connection_manager):
    """Set the global connection manager."""
    global _connection_manager
    _connection_manager = connection_manager


async def get_connection():
    """Get the FalkorDB connection, opening it on first use."""
    if not _connection_manager:
        raise ConnectionError(
            "Database connection not initialized. "
            "Please set FALKORDB_URL or FALKORDB_HOST/FALKORDB_PORT."
        )

    return await _connection_manager.ensure_connection()


def data_to_yaml(data: Any) -> str:
    """Convert data to YAML format."""
    return yaml.safe_dump(data, indent=2, sort_keys=False)


# --- Resource Handler Functions ---

async def handle_list_resources() -> list[types.Resource]:
    """Handle listing of available resources."""
    try:
        conn = await get_connection()
        graphs = conn.list_graphs()
    except Exception as e:
        message = obfuscate_password(str(e))
        logger.error(f"Error listing graphs: {message}")
        return [
            types.Resource(
                uri=AnyUrl("falkordb://error"),
                name="Error",
                description=message,
                mimeType="text/plain",
            )
        ]

    return [
        types.Resource(
            uri=AnyUrl(f"{GRAPH_URI_PREFIX}{quote(graph_name, safe='')}"),
            name=f"{graph_name} graph",
            description=f"Schema of the {graph_name} graph",
            mimeType="text/yaml",
        )
        for graph_name in graphs
    ]


async def handle_read_resource(uri: AnyUrl) -> str:
    """Handle reading of a specific resource."""
    uri_str = str(uri)
    if not uri_str.startswith(GRAPH_URI_PREFIX):
        raise ValueError(f"Unknown resource: {uri}")

    graph_name = unquote(uri_str[len(GRAPH_URI_PREFIX):].rstrip("/"))
    if not graph_name:
        raise ValueError(f"Unknown resource: {uri}")

    conn = await get_connection()
    schema = fetch_schema(conn, graph_name)
    return data_to_yaml(schema.model_dump())
