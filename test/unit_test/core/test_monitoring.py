"""
Unit tests for the Logfire monitoring module.

This test suite covers:
- Logfire initialization with various configurations
- Feature flag handling
- Reporting helpers (API requests, component views, errors)
- Graceful degradation when Logfire is disabled or failing
"""

import sys
from unittest.mock import MagicMock, patch

import pytest
from fastapi import FastAPI

from uxperiment.core import monitoring

MODULE = "uxperiment.core.monitoring"


@pytest.fixture
def mock_logfire():
    """Stand-in for the logfire module while monitoring imports it."""
    fake = MagicMock()
    with patch.dict(sys.modules, {"logfire": fake}):
        yield fake


@pytest.fixture
def enabled():
    with (
        patch(f"{MODULE}.LOGFIRE_ENABLED", True),
        patch(f"{MODULE}.LOGFIRE_TOKEN", "test-token"),
    ):
        yield


class TestInitializeLogfire:
    @patch(f"{MODULE}.LOGFIRE_ENABLED", False)
    def test_disabled(self, mock_logfire):
        assert monitoring.initialize_logfire() is False
        mock_logfire.configure.assert_not_called()

    @patch(f"{MODULE}.LOGFIRE_ENABLED", True)
    @patch(f"{MODULE}.LOGFIRE_TOKEN", "")
    @patch(f"{MODULE}.logger")
    def test_enabled_without_token(self, mock_logger, mock_logfire):
        assert monitoring.initialize_logfire() is False
        mock_logger.warning.assert_called_once()
        mock_logfire.configure.assert_not_called()

    @patch(f"{MODULE}.LOGFIRE_SERVICE_NAME", "test-service")
    @patch(f"{MODULE}.LOGFIRE_SERVICE_VERSION", "1.0.0")
    @patch(f"{MODULE}.LOGFIRE_ENVIRONMENT", "test")
    @patch(f"{MODULE}.LOGFIRE_SAMPLE_RATE", 0.5)
    @patch(f"{MODULE}.LOGFIRE_TRACE_SAMPLE_RATE", 0.1)
    @patch(f"{MODULE}.LOGFIRE_TRACE_SQLALCHEMY", False)
    @patch(f"{MODULE}.LOGFIRE_TRACE_FASTAPI", False)
    def test_configure_parameters(self, enabled, mock_logfire):
        assert monitoring.initialize_logfire() is True

        kwargs = mock_logfire.configure.call_args[1]
        assert kwargs["token"] == "test-token"
        assert kwargs["service_name"] == "test-service"
        assert kwargs["service_version"] == "1.0.0"
        assert kwargs["environment"] == "test"
        mock_logfire.SamplingOptions.assert_called_once_with(head=0.5, tail=0.1)
        mock_logfire.instrument_sqlalchemy.assert_not_called()
        mock_logfire.instrument_fastapi.assert_not_called()

    @patch(f"{MODULE}.LOGFIRE_TRACE_SQLALCHEMY", True)
    @patch(f"{MODULE}.LOGFIRE_TRACE_FASTAPI", True)
    def test_instruments_sqlalchemy_and_fastapi(self, enabled, mock_logfire):
        app = FastAPI()

        monitoring.initialize_logfire(app)

        mock_logfire.instrument_sqlalchemy.assert_called_once()
        mock_logfire.instrument_fastapi.assert_called_once_with(app=app)

    @patch(f"{MODULE}.LOGFIRE_TRACE_SQLALCHEMY", False)
    @patch(f"{MODULE}.LOGFIRE_TRACE_FASTAPI", True)
    def test_fastapi_skipped_without_app(self, enabled, mock_logfire):
        assert monitoring.initialize_logfire() is True
        mock_logfire.instrument_fastapi.assert_not_called()

    @patch(f"{MODULE}.LOGFIRE_TRACE_SQLALCHEMY", True)
    @patch(f"{MODULE}.LOGFIRE_TRACE_FASTAPI", False)
    @patch(f"{MODULE}.logger")
    def test_instrumentation_failure_is_only_a_warning(self, mock_logger, enabled, mock_logfire):
        mock_logfire.instrument_sqlalchemy.side_effect = RuntimeError("no engine")

        assert monitoring.initialize_logfire() is True
        mock_logger.warning.assert_called_once()

    @patch(f"{MODULE}.logger")
    def test_configure_failure_returns_false(self, mock_logger, enabled, mock_logfire):
        mock_logfire.configure.side_effect = RuntimeError("bad token")

        assert monitoring.initialize_logfire() is False
        mock_logger.error.assert_called_once()


class TestReportingHelpers:
    def test_api_request(self, enabled, mock_logfire):
        monitoring.log_api_request("GET", "/api/v1/components", 200, 12.5)

        mock_logfire.info.assert_called_once_with(
            "API request completed", method="GET", path="/api/v1/components", status_code=200, duration_ms=12.5
        )

    def test_component_view(self, enabled, mock_logfire):
        monitoring.log_component_view(3, None, "anon-session")

        mock_logfire.info.assert_called_once_with(
            "Component viewed", component_id=3, user_id=None, session_id="anon-session"
        )

    def test_error_with_context(self, enabled, mock_logfire):
        monitoring.log_error("RuntimeError", "boom", {"path": "/api/v1/plans"})

        mock_logfire.error.assert_called_once_with("RuntimeError: boom", path="/api/v1/plans")

    @patch(f"{MODULE}.LOGFIRE_ENABLED", False)
    def test_helpers_are_noops_when_disabled(self, mock_logfire):
        monitoring.log_api_request("GET", "/", 200, 1.0)
        monitoring.log_component_view(1, 2, None)
        monitoring.log_error("ValueError", "bad")

        mock_logfire.info.assert_not_called()
        mock_logfire.error.assert_not_called()

    @patch(f"{MODULE}.logger")
    def test_logfire_failure_is_swallowed_with_debug_log(self, mock_logger, enabled, mock_logfire):
        mock_logfire.info.side_effect = RuntimeError("exporter down")

        monitoring.log_api_request("GET", "/health", 200, 1.0)

        mock_logger.debug.assert_called_once()
