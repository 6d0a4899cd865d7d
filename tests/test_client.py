"""
Tests for the client entry point.
"""

import json

import httpx

from arangotx import Client, with_wait_for_sync
from arangotx.utils.config import Config


class TestClient:
    """Test Client."""
    
    def test_from_config(self, tmp_path, monkeypatch):
        """Test connection settings and transaction defaults come from config."""
        monkeypatch.setenv("ARANGO_DATABASE", "shop")
        config_file = tmp_path / "arango.yaml"
        config_file.write_text(
            "connection:\n"
            "  endpoint: http://arangodb.test:8529\n"
            "transaction:\n"
            "  lock_timeout: 8\n"
        )
        seen = {}
        
        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["body"] = json.loads(request.content)
            return httpx.Response(201, json={"result": 42})
        
        with Client.from_config(
            Config(str(config_file)), transport=httpx.MockTransport(handler)
        ) as client:
            tx = client.database().begin_transaction(write="orders")
            tx.add_js("return 42;")
            result = tx.execute(result_type=int, options=with_wait_for_sync())
        
        assert result == 42
        assert seen["url"] == "http://arangodb.test:8529/_db/shop/_api/transaction"
        assert seen["body"]["lockTimeout"] == 8
        assert seen["body"]["waitForSync"] is True
    
    def test_database_cached(self, connection):
        """Test database handles are reused per name."""
        client = Client(connection, Config())
        
        assert client.database("a") is client.database("a")
        assert client.database("a") is not client.database("b")
        assert client.database().name == "_system"
    
    def test_close_once(self, connection):
        """Test close closes the connection."""
        client = Client(connection, Config())
        client.close()
        client.close()
        
        assert connection.closed
