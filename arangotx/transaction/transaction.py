"""
Server-side JavaScript transactions.

A Transaction collects code fragments and bound parameters for a set of
collections and executes them in a single request to
``/_db/<name>/_api/transaction``.
"""

import posixpath
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Optional, Tuple, Type, Union

from arangotx.exceptions import ArangoTxError
from arangotx.transaction.action import aql_fragment, build_action, param_names
from arangotx.transaction.options import TransactionOptions, current_options
from arangotx.transaction.state import TransactionState
from arangotx.utils.logging import get_logger

if TYPE_CHECKING:
    from arangotx.database import Database

logger = get_logger(__name__)

CollectionNames = Union[str, Iterable[str], None]


def _as_names(names: CollectionNames) -> Tuple[str, ...]:
    if names is None:
        return ()
    if isinstance(names, str):
        return (names,)
    return tuple(names)


@dataclass(frozen=True)
class TransactionCollections:
    """
    Collections declared by a transaction.
    
    Attributes:
        read: Collections opened for reading
        write: Collections opened for writing
        allow_implicit: Server may open undeclared collections for reading
    """
    read: Tuple[str, ...] = ()
    write: Tuple[str, ...] = ()
    allow_implicit: bool = False
    
    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {}
        if self.read:
            data["read"] = list(self.read)
        if self.write:
            data["write"] = list(self.write)
        if self.allow_implicit:
            data["allowImplicit"] = True
        return data


class Transaction:
    """
    Transaction handle bound to a database.
    
    Example:
        tx = db.begin_transaction(read=["users"], write=["audit"])
        tx.add_aql("FOR u IN users FILTER u.active INSERT {user: u._key} INTO audit")
        tx.add_js("return db.users.count();")
        count = tx.execute(result_type=int)
    
    Parameters from every ``add_*`` call are merged into one mapping. A
    key added again overwrites the earlier value.
    
    A handle is not safe for concurrent use.
    """
    
    def __init__(
        self,
        database: "Database",
        read: CollectionNames = None,
        write: CollectionNames = None,
    ):
        """
        Initialize transaction.
        
        Args:
            database: Database the transaction runs against
            read: Collection name(s) to open for reading
            write: Collection name(s) to open for writing
        """
        self.database = database
        self.collections = TransactionCollections(
            read=_as_names(read),
            write=_as_names(write),
        )
        self.wait_for_sync = False
        self.lock_timeout = 0
        self.params: Dict[str, Any] = {}
        self._fragments: List[str] = []
        self.state = TransactionState.BUILDING
    
    def __repr__(self) -> str:
        return (
            f"Transaction(database={self.database.name!r}, "
            f"read={list(self.collections.read)}, "
            f"write={list(self.collections.write)}, "
            f"state={self.state.value})"
        )
    
    @property
    def fragments(self) -> Tuple[str, ...]:
        """Code fragments in the order they were added."""
        return tuple(self._fragments)
    
    @property
    def code(self) -> str:
        """Unwrapped function body."""
        return "".join(self._fragments)
    
    @property
    def action(self) -> str:
        """Action string as it will be sent."""
        return build_action(self._fragments, self.params)
    
    def rel_path(self) -> str:
        """Request path relative to the server endpoint."""
        return posixpath.join(self.database.rel_path(), "_api", "transaction")
    
    def add_aql(self, query: str, params: Optional[Dict[str, Any]] = None) -> None:
        """
        Append an AQL query, run through ``db.query``.
        
        The query is sent without bind variables: ``params`` become
        arguments of the action function, visible to JavaScript
        fragments, not ``@name`` values inside AQL.
        
        Args:
            query: AQL query text, without bind parameters
            params: Parameters to bind in the action function
        """
        self._add_fragment(aql_fragment(query), params, kind="aql")
    
    def add_js(self, code: str, params: Optional[Dict[str, Any]] = None) -> None:
        """
        Append raw JavaScript.
        
        Args:
            code: JavaScript statements
            params: Parameters to bind in the action function
        """
        self._add_fragment(code, params, kind="js")
    
    def _add_fragment(
        self,
        fragment: str,
        params: Optional[Dict[str, Any]],
        kind: str,
    ) -> None:
        self._fragments.append(fragment)
        
        if params:
            overwritten = sorted(k for k in params if k in self.params)
            self.params.update(params)
            if overwritten:
                logger.debug("Transaction params overwritten", keys=overwritten)
        
        logger.debug(
            "Transaction fragment added",
            kind=kind,
            fragment_count=len(self._fragments),
            param_count=len(self.params),
        )
    
    def apply_options(self, options: Optional[TransactionOptions]) -> None:
        """
        Apply every field set in ``options``.
        
        Args:
            options: Options to apply, None is a no-op
        """
        if options is None:
            return
        if options.wait_for_sync is not None:
            self.wait_for_sync = options.wait_for_sync
        if options.allow_implicit is not None:
            self.collections = replace(self.collections, allow_implicit=options.allow_implicit)
        if options.lock_timeout is not None:
            self.lock_timeout = options.lock_timeout
    
    def settings(self) -> TransactionOptions:
        """Current wait_for_sync, allow_implicit and lock_timeout as options."""
        return TransactionOptions(
            wait_for_sync=self.wait_for_sync,
            allow_implicit=self.collections.allow_implicit,
            lock_timeout=self.lock_timeout,
        )
    
    def to_dict(
        self,
        action: Optional[str] = None,
        options: Optional[TransactionOptions] = None,
    ) -> Dict[str, Any]:
        """
        Request body for the transaction endpoint.
        
        Args:
            action: Precomputed action string, built from the fragments if None
            options: Options overlaid on the handle's settings for this body only
        
        Returns:
            JSON-compatible body with unset fields omitted
        """
        effective = self.settings().merge(options)
        collections = replace(self.collections, allow_implicit=effective.allow_implicit)
        data: Dict[str, Any] = {
            "collections": collections.to_dict(),
            "action": action if action is not None else self.action,
        }
        if effective.wait_for_sync:
            data["waitForSync"] = True
        if effective.lock_timeout:
            data["lockTimeout"] = effective.lock_timeout
        if self.params:
            data["params"] = dict(self.params)
        return data
    
    def execute(
        self,
        result_type: Optional[Type[Any]] = None,
        options: Optional[TransactionOptions] = None,
    ) -> Any:
        """
        Run the transaction on the server.
        
        Options installed with ``transaction_options`` are applied first,
        then ``options``; both override settings made before the call for
        this execution only. The handle itself is left unchanged.
        
        Args:
            result_type: Type to decode the result into, None for raw JSON
            options: Options for this execution
        
        Returns:
            The decoded ``result`` of the transaction
        
        Raises:
            RequestBuildError: If the request cannot be built
            SerializationError: If params cannot be encoded as JSON
            TransportError: If the server cannot be reached
            ResponseStatusError: If the server does not answer 201
            DecodeError: If the result does not match ``result_type``
        """
        self._transition(TransactionState.EXECUTING)
        log = logger.bind(
            database=self.database.name,
            read=list(self.collections.read),
            write=list(self.collections.write),
        )
        
        try:
            action = self.action
            effective = self.settings().merge(current_options()).merge(options)
            
            conn = self.database.connection
            request = conn.new_request("POST", self.rel_path())
            request.set_body(self.to_dict(action, effective))
            
            log.debug(
                "Executing transaction",
                params=param_names(self.params),
                wait_for_sync=effective.wait_for_sync,
                lock_timeout=effective.lock_timeout,
            )
            
            response = conn.do(request)
            response.check_status(201)
            raw = response.parse_body("result")
            result = conn.unmarshal(raw, result_type)
        except ArangoTxError as e:
            log.error("Transaction failed", stage=e.stage, error=str(e))
            raise
        finally:
            self._transition(TransactionState.DONE)
        
        log.info("Transaction executed", fragment_count=len(self._fragments))
        return result
    
    def _transition(self, new_state: TransactionState) -> None:
        if not self.state.can_transition_to(new_state):
            raise RuntimeError(
                f"Invalid transaction state transition: {self.state.value} -> {new_state.value}"
            )
        self.state = new_state
