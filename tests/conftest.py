"""
Shared fixtures: a FalkorDB client double and a connection manager wired into
the tool and resource modules.
"""

from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pytest

from falkordb_mcp import fnc_resources, fnc_tools
from falkordb_mcp.config import FalkorDBConfig
from falkordb_mcp.connection_manager import FalkorDBConnectionManager


def make_result(header=None, rows=None, **stats):
    """Build an object shaped like falkordb's QueryResult."""
    return SimpleNamespace(header=header or [], result_set=rows or [], **stats)


@pytest.fixture
def falkordb_client():
    """Patch the FalkorDB client class; yields the instance the server will use."""
    with patch("falkordb_mcp.fdb.FalkorDB") as client_cls:
        client = MagicMock()
        client.list_graphs.return_value = []
        client_cls.return_value = client
        client.client_cls = client_cls
        yield client


@pytest.fixture
def graph(falkordb_client):
    """The graph object returned by select_graph()."""
    graph = MagicMock()
    graph.query.return_value = make_result()
    falkordb_client.select_graph.return_value = graph
    return graph


@pytest.fixture
def connection_manager(falkordb_client):
    """Connection manager registered with the tool and resource modules."""
    manager = FalkorDBConnectionManager(FalkorDBConfig(host="localhost", port=6379))
    fnc_tools.set_tools_connection(manager)
    fnc_resources.set_resource_connection(manager)
    yield manager
    fnc_tools.set_tools_connection(None)
    fnc_resources.set_resource_connection(None)
