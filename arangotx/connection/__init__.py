"""Transport layer: requests, responses and connections."""

from arangotx.connection.base import Connection
from arangotx.connection.http import HttpConnection
from arangotx.connection.request import Request
from arangotx.connection.response import Response

__all__ = ["Connection", "HttpConnection", "Request", "Response"]
