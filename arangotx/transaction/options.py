"""
Per-call transaction options.

Options are typed and optional: a field left as None does not touch the
transaction it is applied to. They can be passed to
``Transaction.execute`` directly or installed for a block of code with
``transaction_options``:

    with transaction_options(with_wait_for_sync()):
        tx.execute()
"""

from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, fields, replace
from typing import Any, Iterator, Optional

_current_options: ContextVar[Optional["TransactionOptions"]] = ContextVar(
    "arangotx_transaction_options", default=None
)


@dataclass(frozen=True)
class TransactionOptions:
    """
    Optional settings applied to a transaction at execution time.
    
    Attributes:
        wait_for_sync: Do not acknowledge before the write is on disk
        allow_implicit: Let the server open collections not declared up front
        lock_timeout: Seconds the server waits for locks, 0 for its default
    """
    wait_for_sync: Optional[bool] = None
    allow_implicit: Optional[bool] = None
    lock_timeout: Optional[int] = None
    
    def __post_init__(self):
        for name in ("wait_for_sync", "allow_implicit"):
            value = getattr(self, name)
            if value is not None and not isinstance(value, bool):
                raise TypeError(f"{name} must be a bool, got {type(value).__name__}")
        
        timeout = self.lock_timeout
        if timeout is not None:
            if isinstance(timeout, bool) or not isinstance(timeout, int):
                raise TypeError(f"lock_timeout must be an int, got {type(timeout).__name__}")
            if timeout < 0:
                raise ValueError(f"lock_timeout must be >= 0, got {timeout}")
    
    def merge(self, other: Optional["TransactionOptions"]) -> "TransactionOptions":
        """
        Return options where fields set in ``other`` win.
        
        Args:
            other: Overriding options, may be None
        
        Returns:
            Merged options
        """
        if other is None:
            return self
        overrides = {
            f.name: getattr(other, f.name)
            for f in fields(other)
            if getattr(other, f.name) is not None
        }
        return replace(self, **overrides)
    
    def is_empty(self) -> bool:
        """True when no field is set."""
        return all(getattr(self, f.name) is None for f in fields(self))
    
    @classmethod
    def from_config(cls, config: Any) -> "TransactionOptions":
        """
        Build options from the ``transaction`` section of a Config.
        
        Args:
            config: Config instance
        
        Returns:
            Options with the configured defaults
        """
        return cls(
            wait_for_sync=config.get("transaction.wait_for_sync"),
            allow_implicit=config.get("transaction.allow_implicit"),
            lock_timeout=config.get("transaction.lock_timeout"),
        )


def with_wait_for_sync(
    value: bool = True,
    options: Optional[TransactionOptions] = None,
) -> TransactionOptions:
    """Return ``options`` with wait_for_sync set (True by default)."""
    return replace(options or TransactionOptions(), wait_for_sync=value)


def with_allow_implicit(
    value: bool = True,
    options: Optional[TransactionOptions] = None,
) -> TransactionOptions:
    """Return ``options`` with allow_implicit set (True by default)."""
    return replace(options or TransactionOptions(), allow_implicit=value)


def with_lock_timeout(
    value: int,
    options: Optional[TransactionOptions] = None,
) -> TransactionOptions:
    """Return ``options`` with lock_timeout set."""
    return replace(options or TransactionOptions(), lock_timeout=value)


def current_options() -> Optional[TransactionOptions]:
    """Options installed by the innermost ``transaction_options`` block."""
    return _current_options.get()


@contextmanager
def transaction_options(
    options: Optional[TransactionOptions] = None,
    **overrides: Any,
) -> Iterator[TransactionOptions]:
    """
    Install options for transactions executed inside the block.
    
    Nested blocks merge over the enclosing ones.
    
    Args:
        options: Options to install
        **overrides: Individual fields (wait_for_sync, allow_implicit, lock_timeout)
    
    Yields:
        The options in effect inside the block
    """
    base = _current_options.get() or TransactionOptions()
    effective = base.merge(options).merge(TransactionOptions(**overrides))
    token = _current_options.set(effective)
    try:
        yield effective
    finally:
        _current_options.reset(token)
