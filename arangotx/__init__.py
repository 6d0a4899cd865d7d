"""
arangotx - server-side transactions for ArangoDB.

Build a transaction from AQL and JavaScript fragments against declared
read and write collections, execute it in one request, and decode the
result into a Python type.
"""

__version__ = "0.1.0"

from arangotx.client import Client
from arangotx.connection import Connection, HttpConnection, Request, Response
from arangotx.database import Database
from arangotx.exceptions import (
    ArangoTxError,
    ConfigError,
    DecodeError,
    RequestBuildError,
    ResponseStatusError,
    SerializationError,
    TransportError,
)
from arangotx.transaction import (
    Transaction,
    TransactionOptions,
    TransactionState,
    transaction_options,
    with_allow_implicit,
    with_lock_timeout,
    with_wait_for_sync,
)

__all__ = [
    "Client",
    "Connection",
    "Database",
    "HttpConnection",
    "Request",
    "Response",
    "Transaction",
    "TransactionOptions",
    "TransactionState",
    "transaction_options",
    "with_allow_implicit",
    "with_lock_timeout",
    "with_wait_for_sync",
    # Errors
    "ArangoTxError",
    "ConfigError",
    "DecodeError",
    "RequestBuildError",
    "ResponseStatusError",
    "SerializationError",
    "TransportError",
]
