"""
HTTP connection built on httpx.
"""

import time
from typing import Optional

import httpx

from arangotx.connection.base import Connection
from arangotx.connection.request import Request
from arangotx.connection.response import Response
from arangotx.exceptions import RequestBuildError, TransportError
from arangotx.utils.logging import get_logger

logger = get_logger(__name__)

HTTP_METHODS = frozenset({"GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"})


class HttpConnection(Connection):
    """
    Connection speaking JSON over HTTP.
    
    Example:
        conn = HttpConnection("http://localhost:8529", username="root")
        request = conn.new_request("GET", "_api/version")
        response = conn.do(request)
        conn.close()
    """
    
    def __init__(
        self,
        endpoint: str,
        username: Optional[str] = None,
        password: Optional[str] = None,
        request_timeout_ms: int = 30000,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """
        Initialize connection.
        
        Args:
            endpoint: Server base URL
            username: Basic auth user, None disables authentication
            password: Basic auth password
            request_timeout_ms: Timeout applied to each request
            transport: Custom httpx transport (tests use httpx.MockTransport)
        """
        self.endpoint = endpoint.rstrip("/")
        self.request_timeout_ms = request_timeout_ms
        
        auth = httpx.BasicAuth(username, password or "") if username else None
        self._client = httpx.Client(
            base_url=self.endpoint,
            auth=auth,
            timeout=request_timeout_ms / 1000.0,
            transport=transport,
        )
        
        logger.info(
            "HttpConnection initialized",
            endpoint=self.endpoint,
            authenticated=auth is not None,
            timeout_ms=request_timeout_ms,
        )
    
    def new_request(self, method: str, path: str) -> Request:
        method = method.upper()
        if method not in HTTP_METHODS:
            raise RequestBuildError(f"unsupported HTTP method {method!r}")
        if not path or "://" in path:
            raise RequestBuildError(f"invalid request path {path!r}")
        return Request(method=method, path="/" + path.lstrip("/"))
    
    def do(self, request: Request) -> Response:
        try:
            http_request = self._client.build_request(
                request.method,
                request.path,
                content=request.body,
                headers=request.headers,
                params=request.query or None,
            )
        except httpx.InvalidURL as e:
            raise RequestBuildError(f"invalid request URL {request.path!r}: {e}") from e
        
        start = time.monotonic()
        try:
            http_response = self._client.send(http_request)
        except httpx.HTTPError as e:
            logger.warning(
                "HTTP request failed",
                method=request.method,
                path=request.path,
                error=str(e),
            )
            raise TransportError(f"{request.method} {request.path} failed: {e}") from e
        
        logger.debug(
            "HTTP request completed",
            method=request.method,
            path=request.path,
            status=http_response.status_code,
            elapsed_ms=round((time.monotonic() - start) * 1000, 2),
        )
        
        return Response(
            status_code=http_response.status_code,
            content=http_response.content,
            headers=dict(http_response.headers),
        )
    
    def close(self) -> None:
        self._client.close()
