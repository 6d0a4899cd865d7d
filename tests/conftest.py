"""Shared fixtures for arangotx tests."""

import json
from typing import Any, List, Optional

import pytest

from arangotx.connection.base import Connection
from arangotx.connection.request import Request
from arangotx.connection.response import Response
from arangotx.database import Database
from arangotx.utils.config import reset_config


class RecordingConnection(Connection):
    """Connection returning queued responses and recording what was sent."""
    
    def __init__(self, responses: Optional[List[Response]] = None):
        self.responses = list(responses or [])
        self.requests: List[Request] = []
        self.unmarshal_calls = 0
        self.closed = False
    
    def queue(self, status_code: int, body: Any = None) -> None:
        content = b"" if body is None else json.dumps(body).encode("utf-8")
        self.responses.append(Response(status_code, content))
    
    def new_request(self, method: str, path: str) -> Request:
        return Request(method=method, path=path)
    
    def do(self, request: Request) -> Response:
        self.requests.append(request)
        if not self.responses:
            raise RuntimeError("No responses queued")
        return self.responses.pop(0)
    
    def unmarshal(self, raw: Any, result_type: Any = None) -> Any:
        self.unmarshal_calls += 1
        return super().unmarshal(raw, result_type)
    
    def close(self) -> None:
        self.closed = True
    
    def sent_body(self, index: int = -1) -> Any:
        return json.loads(self.requests[index].body)


@pytest.fixture
def connection():
    return RecordingConnection()


@pytest.fixture
def db(connection):
    return Database(connection, "test")


@pytest.fixture(autouse=True)
def clean_config(monkeypatch):
    for name in (
        "ARANGO_ENDPOINT",
        "ARANGO_DATABASE",
        "ARANGO_USERNAME",
        "ARANGO_PASSWORD",
        "ARANGO_REQUEST_TIMEOUT_MS",
        "LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    reset_config()
    yield
    reset_config()
