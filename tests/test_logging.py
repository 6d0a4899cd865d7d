"""
Tests for logging setup.
"""

import logging

import structlog

from arangotx.utils.config import Config
from arangotx.utils.logging import (
    add_client_context,
    configure_from_config,
    configure_logging,
    get_logger,
)


class TestLogging:
    """Test logging configuration."""

    def teardown_method(self):
        structlog.reset_defaults()

    def test_client_context(self):
        """Test the client name is added without clobbering."""
        assert add_client_context(None, "info", {})["client"] == "arangotx"
        assert add_client_context(None, "info", {"client": "x"})["client"] == "x"

    def test_json_output(self, caplog):
        """Test JSON rendering of structured events."""
        configure_logging(log_level="INFO", log_format="json")
        caplog.set_level(logging.INFO)

        get_logger("arangotx.test").info("Transaction executed", fragment_count=2)

        assert '"event": "Transaction executed"' in caplog.text
        assert '"fragment_count": 2' in caplog.text
        assert '"client": "arangotx"' in caplog.text

    def test_configure_from_config(self):
        """Test the logging section drives configuration."""
        config = Config()
        config.set("logging.format", "console")

        configure_from_config(config)

        assert structlog.is_configured()
