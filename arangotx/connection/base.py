"""
Connection interface used by databases and transactions.

Implementations own request dispatch (endpoint, authentication,
timeouts). Decoding of arbitrary payloads is shared and based on
pydantic type adapters.
"""

import json
from abc import ABC, abstractmethod
from typing import Any, Optional, Type, TypeVar

from pydantic import PydanticUserError, TypeAdapter, ValidationError

from arangotx.connection.request import Request
from arangotx.connection.response import Response
from arangotx.exceptions import DecodeError

T = TypeVar("T")


class Connection(ABC):
    """Abstract connection to a server."""
    
    @abstractmethod
    def new_request(self, method: str, path: str) -> Request:
        """
        Create a request for ``method`` on ``path``.
        
        Raises:
            RequestBuildError: If the request cannot be built
        """
    
    @abstractmethod
    def do(self, request: Request) -> Response:
        """
        Send ``request`` and return the response.
        
        Raises:
            TransportError: If the request cannot be delivered
        """
    
    def unmarshal(self, raw: Any, result_type: Optional[Type[T]] = None) -> Any:
        """
        Decode a raw JSON payload into ``result_type``.
        
        Decoding is strict: a JSON string is not an int and a number is
        not a bool.
        
        Args:
            raw: Decoded JSON value
            result_type: Target type (dataclass, pydantic model, TypedDict,
                builtin or generic alias). None returns ``raw`` untouched.
        
        Returns:
            Decoded value
        
        Raises:
            DecodeError: If ``raw`` does not match ``result_type`` or
                ``result_type`` cannot be decoded into
        """
        if result_type is None:
            return raw
        
        name = getattr(result_type, "__name__", repr(result_type))
        try:
            adapter = TypeAdapter(result_type)
        except PydanticUserError as e:
            raise DecodeError(f"cannot decode into unsupported type {name}: {e}", payload=raw) from e
        
        try:
            return adapter.validate_json(json.dumps(raw), strict=True)
        except ValidationError as e:
            raise DecodeError(f"cannot decode payload into {name}: {e}", payload=raw) from e
    
    def close(self) -> None:
        """Release resources held by the connection."""
