from typing import Any, Dict, List, Optional
import logging
import math
import re
from urllib.parse import urlparse

from falkordb import FalkorDB
from falkordb.edge import Edge
from falkordb.node import Node
from falkordb.path import Path

from .config import FalkorDBConfig

logger = logging.getLogger(__name__)

# Statistics reported by the client alongside every query result
QUERY_STATS = (
    "labels_added",
    "labels_removed",
    "nodes_created",
    "nodes_deleted",
    "properties_set",
    "properties_removed",
    "relationships_created",
    "relationships_deleted",
    "indices_created",
    "indices_deleted",
    "cached_execution",
    "run_time_ms",
)


def obfuscate_password(text: str | None) -> str | None:
    """
    Obfuscate password in any text containing connection information.
    Works on connection URLs, error messages, and other strings.
    """
    if text is None:
        return None

    if not text:
        return text

    # Try first as a proper URL
    try:
        parsed = urlparse(text)
        if parsed.scheme and parsed.netloc and parsed.password:
            netloc = parsed.netloc.replace(f":{parsed.password}@", ":****@")
            return parsed._replace(netloc=netloc).geturl()
    except ValueError:
        pass

    url_pattern = re.compile(r"((?:falkor|falkors|redis|rediss):\/\/[^:\/\s]*:)([^@\s]+)(@[^\/\s]+)")
    text = re.sub(url_pattern, r"\1****\3", text)

    param_pattern = re.compile(r'(password=)([^\s&;"\']+)', re.IGNORECASE)
    text = re.sub(param_pattern, r"\1****", text)

    return text


def _entity_id(entity: Any) -> Any:
    return getattr(entity, "id", entity)


def to_jsonable(value: Any) -> Any:
    """Convert a value returned by the FalkorDB client into plain JSON types."""
    if isinstance(value, Node):
        return {
            "id": value.id,
            "labels": list(value.labels or []),
            "properties": to_jsonable(value.properties),
        }
    if isinstance(value, Edge):
        return {
            "id": value.id,
            "relationshipType": value.relation,
            "sourceId": _entity_id(value.src_node),
            "destinationId": _entity_id(value.dest_node),
            "properties": to_jsonable(value.properties),
        }
    if isinstance(value, Path):
        return {
            "nodes": [to_jsonable(node) for node in value.nodes()],
            "edges": [to_jsonable(edge) for edge in value.edges()],
        }
    if isinstance(value, dict):
        return {str(key): to_jsonable(item) for key, item in value.items()}
    if isinstance(value, (list, tuple, set)):
        return [to_jsonable(item) for item in value]
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    if isinstance(value, float) and (math.isnan(value) or math.isinf(value)):
        return None
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    return str(value)


def _column_name(column: Any) -> str:
    # Header entries are either bare names or [column_type, name] pairs
    if isinstance(column, (list, tuple)):
        column = column[-1]
    if isinstance(column, bytes):
        column = column.decode("utf-8")
    return str(column)


def query_result_to_dict(result: Any) -> Dict[str, Any]:
    """
    Reshape a FalkorDB QueryResult into {headers, data, metadata}.

    Rows become objects keyed by column name; statistics the client did not
    report are left out of metadata.
    """
    headers = [_column_name(column) for column in (getattr(result, "header", None) or [])]
    data = []
    for row in getattr(result, "result_set", None) or []:
        names = headers if len(headers) == len(row) else [str(i) for i in range(len(row))]
        data.append({name: to_jsonable(value) for name, value in zip(names, row)})

    metadata = {}
    for stat in QUERY_STATS:
        value = getattr(result, stat, None)
        if value is not None:
            metadata[stat] = to_jsonable(value)

    return {"headers": headers, "data": data, "metadata": metadata}


def first_column(result: Any) -> List[Any]:
    """Collect the first column of every row, as the db.* procedures return one value per row."""
    rows = getattr(result, "result_set", None) or []
    return [to_jsonable(row[0]) for row in rows if row]


class FalkorConn:
    """FalkorDB client handle built from a FalkorDBConfig."""

    def __init__(self, config: FalkorDBConfig):
        """
        Connect to FalkorDB.

        Args:
            config: Host, port and optional credentials.
        Raises:
            Any exception raised by the client while connecting; callers decide
            how to report it.
        """
        self.config = config
        logger.debug(f"Connecting to FalkorDB at {config.host}:{config.port}")
        self.conn: Optional[FalkorDB] = FalkorDB(
            host=config.host,
            port=config.port,
            username=config.username,
            password=config.password,
        )
        logger.info(f"Connected to FalkorDB at {config.host}:{config.port}")

    def _client(self) -> FalkorDB:
        if self.conn is None:
            raise ConnectionError("No connection to FalkorDB")
        return self.conn

    def list_graphs(self) -> List[str]:
        return self._client().list_graphs()

    def select_graph(self, graph_name: str):
        return self._client().select_graph(graph_name)

    def query(self, graph_name: str, query: str, params: Optional[Dict[str, Any]] = None):
        return self.select_graph(graph_name).query(query, params)

    def close(self):
        if self.conn is None:
            return
        conn, self.conn = self.conn, None
        close = getattr(conn, "close", None)
        if close is not None:
            close()
        else:
            conn.connection.close()
