"""
Client entry point.

Creates the HTTP connection from configuration and hands out database
handles sharing it.
"""

from typing import Dict, Optional

import httpx

from arangotx.connection.base import Connection
from arangotx.connection.http import HttpConnection
from arangotx.database import Database
from arangotx.transaction.options import TransactionOptions
from arangotx.utils.config import Config, get_config
from arangotx.utils.logging import get_logger

logger = get_logger(__name__)


class Client:
    """
    Client owning one connection.
    
    Example:
        with Client.from_config() as client:
            db = client.database("shop")
            tx = db.begin_transaction(write="orders")
            tx.add_js("return db.orders.count();")
            print(tx.execute(result_type=int))
    """
    
    def __init__(self, connection: Connection, config: Optional[Config] = None):
        """
        Initialize client.
        
        Args:
            connection: Connection shared by all databases
            config: Configuration for database defaults
        """
        self.connection = connection
        self.config = config or get_config()
        self._databases: Dict[str, Database] = {}
        self._closed = False
    
    @classmethod
    def from_config(
        cls,
        config: Optional[Config] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> "Client":
        """
        Build a client from the ``connection`` section of a Config.
        
        Args:
            config: Configuration, the global one when None
            transport: Custom httpx transport
        
        Returns:
            Client with an HttpConnection
        """
        config = config or get_config()
        connection = HttpConnection(
            endpoint=config.get("connection.endpoint", "http://localhost:8529"),
            username=config.get("connection.username"),
            password=config.get("connection.password"),
            request_timeout_ms=config.get("connection.request_timeout_ms", 30000),
            transport=transport,
        )
        return cls(connection, config)
    
    def database(self, name: Optional[str] = None) -> Database:
        """
        Get a database handle.
        
        Args:
            name: Database name, ``connection.database`` from config when None
        
        Returns:
            Database handle, cached per name
        """
        if name is None:
            name = self.config.get("connection.database", "_system")
        
        if name not in self._databases:
            self._databases[name] = Database(
                self.connection,
                name,
                default_options=TransactionOptions.from_config(self.config),
            )
        return self._databases[name]
    
    def close(self) -> None:
        """Close the underlying connection."""
        if self._closed:
            return
        self._closed = True
        self.connection.close()
        logger.info("Client closed")
    
    def __enter__(self) -> "Client":
        return self
    
    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
