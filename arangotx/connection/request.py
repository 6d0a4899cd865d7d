"""
Outbound request description.

A Request is built by a Connection, given a JSON body, and handed back
to the same Connection for dispatch.
"""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from arangotx.exceptions import SerializationError


@dataclass
class Request:
    """
    HTTP request to send to the server.
    
    Attributes:
        method: HTTP verb
        path: Path relative to the server endpoint
        headers: Extra request headers
        query: Query string parameters
        body: Encoded body, None when no body is attached
    """
    method: str
    path: str
    headers: Dict[str, str] = field(default_factory=dict)
    query: Dict[str, str] = field(default_factory=dict)
    body: Optional[bytes] = None
    
    def set_body(self, payload: Any) -> "Request":
        """
        Attach a JSON encoded body.
        
        Objects exposing ``to_dict()`` are encoded through it.
        
        Args:
            payload: JSON-compatible value or object with ``to_dict()``
        
        Returns:
            This request
        
        Raises:
            SerializationError: If the payload cannot be encoded
        """
        if hasattr(payload, "to_dict"):
            payload = payload.to_dict()
        
        try:
            encoded = json.dumps(payload, separators=(",", ":"), allow_nan=False)
        except (TypeError, ValueError) as e:
            raise SerializationError(
                f"cannot encode body for {self.method} {self.path}: {e}"
            ) from e
        
        self.body = encoded.encode("utf-8")
        self.headers["Content-Type"] = "application/json"
        return self
    
    def set_query(self, key: str, value: str) -> "Request":
        """Set a query string parameter."""
        self.query[key] = value
        return self
    
    def set_header(self, key: str, value: str) -> "Request":
        """Set a request header."""
        self.headers[key] = value
        return self
