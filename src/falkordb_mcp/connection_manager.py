"""
FalkorDB Connection Manager
Owns the single client handle: created on first use, released on shutdown.
"""

import asyncio
import logging
from typing import Optional

from .config import FalkorDBConfig
from .fdb import FalkorConn, obfuscate_password

logger = logging.getLogger(__name__)


class FalkorDBConnectionManager:
    """Lazily creates one FalkorDB connection and releases it exactly once."""

    def __init__(self, config: FalkorDBConfig):
        """
        Initialize the connection manager. No connection is made until
        ensure_connection() is first awaited.

        Args:
            config: FalkorDB connection settings
        """
        self.config = config
        self._connection: Optional[FalkorConn] = None
        self._connection_lock = asyncio.Lock()

    @property
    def connected(self) -> bool:
        return self._connection is not None

    async def ensure_connection(self) -> FalkorConn:
        """
        Return the connection, creating it on first use.

        Returns:
            Active FalkorConn instance

        Raises:
            Whatever the client raises while connecting. The handle stays unset,
            so the next call tries again.
        """
        async with self._connection_lock:
            if self._connection is not None:
                return self._connection

            logger.info(f"Opening FalkorDB connection to {self.config.host}:{self.config.port}")
            try:
                self._connection = FalkorConn(self.config)
            except Exception as e:
                logger.error(f"Could not connect to FalkorDB: {obfuscate_password(str(e))}")
                raise
            return self._connection

    def get_connection_info(self) -> dict:
        """
        Get information about the current connection state.

        Returns:
            Dictionary with connection information
        """
        return {
            "connected": self.connected,
            "host": self.config.host,
            "port": self.config.port,
            "username": self.config.username,
            "url": obfuscate_password(self.config.url),
        }

    async def close(self):
        """Close the current connection, if any. Safe to call more than once."""
        async with self._connection_lock:
            if self._connection is None:
                return
            connection, self._connection = self._connection, None
            try:
                connection.close()
                logger.info("FalkorDB connection closed")
            except Exception as e:
                logger.warning(f"Error closing connection: {obfuscate_password(str(e))}")
