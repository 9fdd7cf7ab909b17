#!/usr/bin/env python3
"""
Smoke test against a running FalkorDB.

This script verifies that:
1. The connection is opened lazily on the first tool call
2. execute_query creates and reads data
3. get_schema reports the labels, relationship types and property keys created
4. list_graphs includes the scratch graph
5. Shutdown releases the connection

Usage:
    docker run -p 6379:6379 -it --rm falkordb/falkordb
    FALKORDB_URL=falkor://localhost:6379 python scripts/test-live-falkordb.py
"""

import sys
import asyncio
import json
from pathlib import Path

# Add src to path
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

from falkordb_mcp import server
from falkordb_mcp.fnc_tools import handle_tool_call

GRAPH = "mcp_smoke_test"


async def call(name, arguments=None):
    result = await handle_tool_call(name, arguments or {})
    text = result.content[0].text
    assert not result.isError, text
    return json.loads(text)


async def main():
    manager = server.initialize_database(sys.argv[1:])
    assert not manager.connected, "Connection should not be opened before first use"
    print("✓ Connection not opened at start-up")

    try:
        created = await call("execute_query", {
            "graphName": GRAPH,
            "query": "CREATE (:Person {name: $name})-[:KNOWS {since: 2020}]->(:Person {name: 'Grace'})",
            "params": {"name": "Ada"},
        })
        assert created["metadata"]["nodes_created"] == 2
        print(f"✓ Created nodes: {created['metadata']}")

        rows = await call("execute_query", {"graphName": GRAPH, "query": "MATCH (p:Person) RETURN p.name AS name ORDER BY name"})
        assert [row["name"] for row in rows["data"]] == ["Ada", "Grace"]
        print(f"✓ Read back: {rows['data']}")

        schema = await call("get_schema", {"graphName": GRAPH})
        assert schema["labels"] == ["Person"]
        assert schema["relationshipTypes"] == ["KNOWS"]
        assert set(schema["propertyKeys"]) == {"name", "since"}
        print(f"✓ Schema: {schema}")

        graphs = await call("list_graphs")
        assert GRAPH in graphs["graphs"]
        print(f"✓ Graphs: {graphs['graphs']}")

        conn = await manager.ensure_connection()
        conn.select_graph(GRAPH).delete()
        print(f"✓ Deleted {GRAPH}")
    finally:
        await server.shutdown()

    assert not manager.connected
    print("✓ Connection released")


if __name__ == "__main__":
    asyncio.run(main())
