"""
Server-side transactions.

Build a transaction from AQL and JavaScript fragments, then execute it
in one request.
"""

from arangotx.transaction.action import aql_fragment, build_action, param_names, quote_query
from arangotx.transaction.options import (
    TransactionOptions,
    current_options,
    transaction_options,
    with_allow_implicit,
    with_lock_timeout,
    with_wait_for_sync,
)
from arangotx.transaction.state import TransactionState
from arangotx.transaction.transaction import Transaction, TransactionCollections

__all__ = [
    # Handle
    "Transaction",
    "TransactionCollections",
    "TransactionState",
    # Options
    "TransactionOptions",
    "current_options",
    "transaction_options",
    "with_allow_implicit",
    "with_lock_timeout",
    "with_wait_for_sync",
    # Action building
    "aql_fragment",
    "build_action",
    "param_names",
    "quote_query",
]
