"""
Exceptions raised by arangotx.

Every error raised while executing a transaction carries the pipeline
``stage`` it came from so callers can tell where the request failed.
The underlying cause is chained with ``raise ... from``.
"""

from typing import Any, Iterable, Optional, Tuple


class ArangoTxError(Exception):
    """Base class for all arangotx errors."""
    
    stage = "unknown"
    
    def __init__(self, message: str, stage: Optional[str] = None):
        super().__init__(message)
        if stage is not None:
            self.stage = stage
    
    def __str__(self) -> str:
        return f"[{self.stage}] {super().__str__()}"


class ConfigError(ArangoTxError):
    """Invalid configuration value or file."""
    stage = "config"


class RequestBuildError(ArangoTxError):
    """The outbound request could not be constructed."""
    stage = "build_request"


class SerializationError(ArangoTxError):
    """A request body could not be encoded."""
    stage = "serialize"


class TransportError(ArangoTxError):
    """Network or connection failure while dispatching a request."""
    stage = "dispatch"


class ResponseStatusError(ArangoTxError):
    """
    Response status did not match the expected status.
    
    Attributes:
        status_code: Actual HTTP status
        expected: Accepted statuses
        error_num: ArangoDB ``errorNum`` from the body, if present
        error_message: ArangoDB ``errorMessage`` from the body, if present
    """
    stage = "check_status"
    
    def __init__(
        self,
        status_code: int,
        expected: Iterable[int],
        error_num: Optional[int] = None,
        error_message: Optional[str] = None,
    ):
        self.status_code = status_code
        self.expected: Tuple[int, ...] = tuple(expected)
        self.error_num = error_num
        self.error_message = error_message
        
        message = f"unexpected status {status_code}, expected {list(self.expected)}"
        if error_message:
            message += f": {error_message}"
        if error_num is not None:
            message += f" (errorNum {error_num})"
        super().__init__(message)


class DecodeError(ArangoTxError):
    """A response payload could not be decoded into the requested type."""
    stage = "decode"
    
    def __init__(self, message: str, payload: Any = None):
        super().__init__(message)
        self.payload = payload


__all__ = [
    "ArangoTxError",
    "ConfigError",
    "DecodeError",
    "RequestBuildError",
    "ResponseStatusError",
    "SerializationError",
    "TransportError",
]
