"""
Server response wrapper.

Decodes JSON bodies lazily and checks statuses against what the caller
expects.
"""

import json
from typing import Any, Dict, Optional

from arangotx.exceptions import DecodeError, ResponseStatusError

_MISSING = object()


class Response:
    """
    Response received from the server.
    
    Example:
        response.check_status(201)
        result = response.parse_body("result")
    """
    
    def __init__(
        self,
        status_code: int,
        content: bytes = b"",
        headers: Optional[Dict[str, str]] = None,
    ):
        self.status_code = status_code
        self.content = content
        self.headers = headers or {}
        self._body: Any = _MISSING
    
    def __repr__(self) -> str:
        return f"Response(status_code={self.status_code}, size={len(self.content)})"
    
    def json(self) -> Any:
        """
        Decode the body as JSON.
        
        Raises:
            DecodeError: If the body is empty or not valid JSON
        """
        if self._body is _MISSING:
            if not self.content:
                raise DecodeError("response body is empty")
            try:
                self._body = json.loads(self.content)
            except ValueError as e:
                raise DecodeError(f"response body is not valid JSON: {e}") from e
        return self._body
    
    def check_status(self, *expected: int) -> None:
        """
        Require the status to be one of ``expected``.
        
        Args:
            *expected: Accepted status codes
        
        Raises:
            ResponseStatusError: If the status is not accepted
        """
        if self.status_code in expected:
            return
        
        error_num = None
        error_message = None
        try:
            body = self.json()
        except DecodeError:
            body = None
        if isinstance(body, dict):
            error_num = body.get("errorNum")
            error_message = body.get("errorMessage")
        
        raise ResponseStatusError(
            self.status_code,
            expected,
            error_num=error_num,
            error_message=error_message,
        )
    
    def parse_body(self, field: Optional[str] = None) -> Any:
        """
        Decode the body, optionally returning a single top-level field.
        
        Args:
            field: Name of the field to extract, or None for the whole body
        
        Returns:
            Decoded body or field value
        
        Raises:
            DecodeError: If the body is invalid or lacks ``field``
        """
        body = self.json()
        if field is None:
            return body
        if not isinstance(body, dict) or field not in body:
            raise DecodeError(f"response body has no {field!r} field", payload=body)
        return body[field]
