"""
Unit tests for the Logfire monitoring module.

This test suite covers:
- Logfire staying off unless enabled with a token
- Instrumentation of the libraries and the FastAPI app
- Graceful degradation when one instrumentation fails
"""

from unittest.mock import Mock, patch

from fastapi import FastAPI

from abroadly.core.monitoring import initialize_logfire
from abroadly.server.core.config import LogfireConfig


class TestInitializeLogfire:
    """Test initialize_logfire."""

    def test_disabled_by_default(self):
        with patch("abroadly.core.monitoring.logfire") as mock_logfire:
            assert initialize_logfire(config=LogfireConfig()) is False
            mock_logfire.configure.assert_not_called()

    def test_enabled_without_token(self):
        with patch("abroadly.core.monitoring.logfire") as mock_logfire:
            assert initialize_logfire(config=LogfireConfig(enabled=True)) is False
            mock_logfire.configure.assert_not_called()

    def test_enabled_instruments_everything(self):
        app = FastAPI()
        config = LogfireConfig(enabled=True, token="tok", environment="test", service_name="abroadly-test")

        with patch("abroadly.core.monitoring.logfire") as mock_logfire:
            assert initialize_logfire(app, config) is True

            mock_logfire.configure.assert_called_once_with(
                token="tok", service_name="abroadly-test", environment="test"
            )
            mock_logfire.instrument_pydantic_ai.assert_called_once()
            mock_logfire.instrument_sqlalchemy.assert_called_once()
            mock_logfire.instrument_httpx.assert_called_once()
            mock_logfire.instrument_fastapi.assert_called_once_with(app=app)

    def test_failed_instrumentation_is_skipped(self):
        config = LogfireConfig(enabled=True, token="tok")

        with patch("abroadly.core.monitoring.logfire") as mock_logfire:
            mock_logfire.instrument_sqlalchemy = Mock(side_effect=RuntimeError("not installed"))
            assert initialize_logfire(config=config) is True
            mock_logfire.instrument_httpx.assert_called_once()
            mock_logfire.instrument_fastapi.assert_not_called()
