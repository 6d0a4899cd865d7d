"""
Database handle.
"""

import posixpath
from typing import Optional
from urllib.parse import quote

from arangotx.connection.base import Connection
from arangotx.transaction.options import TransactionOptions
from arangotx.transaction.transaction import CollectionNames, Transaction
from arangotx.utils.logging import get_logger

logger = get_logger(__name__)


class Database:
    """
    A named database reachable through a connection.
    
    Example:
        db = Database(conn, "shop")
        tx = db.begin_transaction(read="products", write=["orders"])
    """
    
    def __init__(
        self,
        connection: Connection,
        name: str = "_system",
        default_options: Optional[TransactionOptions] = None,
    ):
        """
        Initialize database handle.
        
        Args:
            connection: Connection used for every request
            name: Database name
            default_options: Options applied to each new transaction
        """
        self.connection = connection
        self.name = name
        self.default_options = default_options
    
    def __repr__(self) -> str:
        return f"Database(name={self.name!r})"
    
    def rel_path(self) -> str:
        """Path prefix for requests against this database."""
        return posixpath.join("_db", quote(self.name, safe=""))
    
    def begin_transaction(
        self,
        read: CollectionNames = None,
        write: CollectionNames = None,
    ) -> Transaction:
        """
        Create a transaction on the given collections.
        
        Args:
            read: Collection name(s) opened for reading
            write: Collection name(s) opened for writing
        
        Returns:
            New transaction handle
        """
        tx = Transaction(self, read=read, write=write)
        tx.apply_options(self.default_options)
        
        logger.debug(
            "Transaction created",
            database=self.name,
            read=list(tx.collections.read),
            write=list(tx.collections.write),
        )
        
        return tx
