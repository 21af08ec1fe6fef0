"""Tests for logging setup."""

import io

from loguru import logger

from saas_connector.config import get_settings
from saas_connector.utils.log import setup_logging


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_level_filtering(self):
        """Test that messages below the level are dropped."""
        stream = io.StringIO()
        handler_id = setup_logging("INFO", sink=stream)
        try:
            logger.debug("hidden message")
            logger.info("visible message")
        finally:
            logger.remove(handler_id)

        output = stream.getvalue()
        assert "visible message" in output
        assert "INFO" in output
        assert "hidden message" not in output

    def test_level_from_settings(self, monkeypatch):
        """Test that the configured log level is used by default."""
        monkeypatch.setenv("LOG_LEVEL", "WARNING")
        get_settings.cache_clear()
        stream = io.StringIO()
        handler_id = setup_logging(sink=stream)
        try:
            logger.info("info message")
            logger.warning("warning message")
        finally:
            logger.remove(handler_id)
            get_settings.cache_clear()

        output = stream.getvalue()
        assert "warning message" in output
        assert "info message" not in output
