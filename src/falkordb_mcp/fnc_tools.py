"""
MCP Tool Functions for FalkorDB Graph Operations

This module contains the tools exposed through the MCP server. Each tool forwards
to the FalkorDB client and returns its result as pretty-printed JSON text.
Failures never escape handle_tool_call: they come back as "Error: ..." results
with isError set.
"""

import json
import logging
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

import mcp.types as types
from .fdb import first_column, obfuscate_password, query_result_to_dict

logger = logging.getLogger(__name__)

ResponseType = List[types.TextContent | types.ImageContent | types.EmbeddedResource]

LABELS_QUERY = "CALL db.labels()"
RELATIONSHIP_TYPES_QUERY = "CALL db.relationshipTypes()"
PROPERTY_KEYS_QUERY = "CALL db.propertyKeys()"

# Global connection manager
_connection_manager = None


class GraphSchema(BaseModel):
    """Labels, relationship types and property keys present in a graph."""
    graphName: str
    labels: List[Any] = Field(default_factory=list)
    relationshipTypes: List[Any] = Field(default_factory=list)
    propertyKeys: List[Any] = Field(default_factory=list)


def set_tools_connection(connection_manager):
    """Set the global connection manager."""
    global _connection_manager
    _connection_manager = connection_manager


async def get_connection():
    """Get the FalkorDB connection, opening it on first use."""
    if not _connection_manager:
        raise ConnectionError("Database connection not initialized")

    return await _connection_manager.ensure_connection()


def to_json(data: Any) -> str:
    return json.dumps(data, indent=2, default=str, allow_nan=False)


def format_text_response(text: Any) -> ResponseType:
    """Format a text response."""
    return [types.TextContent(type="text", text=str(text))]


def format_error_response(error: str) -> types.CallToolResult:
    """Format an error response."""
    return types.CallToolResult(
        content=format_text_response(f"Error: {error}"),
        isError=True,
    )


# --- Graph Functions ---

async def list_graphs() -> ResponseType:
    """List all graphs in the FalkorDB database."""
    conn = await get_connection()
    graphs = conn.list_graphs()
    return format_text_response(to_json({"graphs": list(graphs)}))


async def execute_query(graph_name: str, query: str, params: Optional[Dict[str, Any]] = None) -> ResponseType:
    """Execute a Cypher query on a graph."""
    if not graph_name or not query:
        raise ValueError("graphName and query are required")

    logger.debug(f"Executing query on {graph_name}: {query}")
    conn = await get_connection()
    result = conn.query(graph_name, query, params or None)
    return format_text_response(to_json(query_result_to_dict(result)))


def fetch_schema(conn, graph_name: str) -> GraphSchema:
    """Run the three db.* introspection procedures against a graph."""
    graph = conn.select_graph(graph_name)

    labels = first_column(graph.query(LABELS_QUERY))
    relationship_types = first_column(graph.query(RELATIONSHIP_TYPES_QUERY))
    property_keys = first_column(graph.query(PROPERTY_KEYS_QUERY))

    return GraphSchema(
        graphName=graph_name,
        labels=labels,
        relationshipTypes=relationship_types,
        propertyKeys=property_keys,
    )


async def get_schema(graph_name: str) -> ResponseType:
    """Get node labels, relationship types and property keys of a graph."""
    if not graph_name:
        raise ValueError("graphName is required")

    conn = await get_connection()
    schema = fetch_schema(conn, graph_name)
    return format_text_response(to_json(schema.model_dump()))


# --- MCP Handler Functions ---

async def handle_list_tools() -> list[types.Tool]:
    """
    List available tools.
    Each tool specifies its arguments using JSON Schema validation.
    """
    logger.info("Listing tools")
    return [
        types.Tool(
            name="list_graphs",
            description="List all available graphs in the FalkorDB database",
            inputSchema={
                "type": "object",
                "properties": {},
                "required": [],
            },
        ),
        types.Tool(
            name="execute_query",
            description="Execute a Cypher query on a FalkorDB graph",
            inputSchema={
                "type": "object",
                "properties": {
                    "graphName": {
                        "type": "string",
                        "description": "The name of the graph to query",
                    },
                    "query": {
                        "type": "string",
                        "description": "The Cypher query to execute",
                    },
                    "params": {
                        "type": "object",
                        "description": "Optional parameters for the query",
                    },
                },
                "required": ["graphName", "query"],
            },
        ),
        types.Tool(
            name="get_schema",
            description="Get the schema (node labels, relationship types, and properties) of a FalkorDB graph",
            inputSchema={
                "type": "object",
                "properties": {
                    "graphName": {
                        "type": "string",
                        "description": "The name of the graph to get schema for",
                    },
                },
                "required": ["graphName"],
            },
        ),
    ]


async def execute_tool(name: str, arguments: dict | None) -> ResponseType:
    """Dispatch a tool call by name. Raises on any failure."""
    arguments = arguments or {}

    if name == "list_graphs":
        return await list_graphs()
    elif name == "execute_query":
        return await execute_query(
            arguments.get("graphName"),
            arguments.get("query"),
            arguments.get("params"),
        )
    elif name == "get_schema":
        return await get_schema(arguments.get("graphName"))

    raise ValueError(f"Unknown tool: {name}")


async def handle_tool_call(name: str, arguments: dict | None) -> types.CallToolResult:
    """
    Handle tool execution requests.
    Every failure is reported to the caller as an error result.
    """
    logger.info(f"Calling tool: {name}::{arguments}")

    try:
        content = await execute_tool(name, arguments)
        return types.CallToolResult(content=content, isError=False)
    except Exception as e:
        logger.error(f"Error executing tool {name}: {obfuscate_password(str(e))}")
        return format_error_response(str(e))
