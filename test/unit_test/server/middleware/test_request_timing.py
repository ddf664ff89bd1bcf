"""
Unit tests for the request timing middleware.

This test suite covers:
- Header injection
- Monitoring calls for successful and failing requests
- Slow request detection
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi import FastAPI, Request
from httpx import ASGITransport, AsyncClient
from starlette.responses import Response

from uxperiment.server.middleware import RequestTimingMiddleware

MODULE = "uxperiment.server.middleware.request_timing"


def _mock_request(method: str = "GET", path: str = "/api/v1/components") -> Request:
    request = AsyncMock(spec=Request)
    request.method = method
    request.url.path = path
    request.state = MagicMock()
    return request


class TestRequestTimingDispatch:
    @pytest.mark.asyncio
    async def test_successful_request_is_reported(self):
        middleware = RequestTimingMiddleware(app=AsyncMock())

        async def call_next(request):
            return Response(content="ok", status_code=200)

        with patch(f"{MODULE}.log_api_request") as mock_log:
            response = await middleware.dispatch(_mock_request(), call_next)

        assert response.status_code == 200
        assert float(response.headers["X-Process-Time"]) >= 0
        mock_log.assert_called_once()
        kwargs = mock_log.call_args[1]
        assert kwargs["method"] == "GET"
        assert kwargs["path"] == "/api/v1/components"
        assert kwargs["status_code"] == 200

    @pytest.mark.asyncio
    async def test_failure_is_reported_as_500_and_reraised(self):
        middleware = RequestTimingMiddleware(app=AsyncMock())

        async def call_next(request):
            raise RuntimeError("handler failed")

        with (
            patch(f"{MODULE}.log_api_request") as mock_log,
            patch(f"{MODULE}.logger") as mock_logger,
        ):
            with pytest.raises(RuntimeError):
                await middleware.dispatch(_mock_request("POST"), call_next)

        assert mock_log.call_args[1]["status_code"] == 500
        mock_logger.error.assert_called_once()

    @pytest.mark.asyncio
    async def test_slow_request_logs_warning(self):
        middleware = RequestTimingMiddleware(app=AsyncMock())

        async def call_next(request):
            return Response(status_code=204)

        with (
            patch(f"{MODULE}.log_api_request"),
            patch(f"{MODULE}.logger") as mock_logger,
            patch(f"{MODULE}.settings") as mock_settings,
        ):
            mock_settings.slow_request_threshold_ms = -1
            await middleware.dispatch(_mock_request(), call_next)

        mock_logger.warning.assert_called_once()
        assert "Slow API request" in mock_logger.warning.call_args[0][0]

    @pytest.mark.asyncio
    async def test_fast_request_does_not_warn(self):
        middleware = RequestTimingMiddleware(app=AsyncMock())

        async def call_next(request):
            return Response(status_code=200)

        with (
            patch(f"{MODULE}.log_api_request"),
            patch(f"{MODULE}.logger") as mock_logger,
            patch(f"{MODULE}.settings") as mock_settings,
        ):
            mock_settings.slow_request_threshold_ms = 60_000
            await middleware.dispatch(_mock_request(), call_next)

        mock_logger.warning.assert_not_called()


class TestRequestTimingInApp:
    @pytest.mark.asyncio
    async def test_header_is_added_to_real_responses(self):
        app = FastAPI()
        app.add_middleware(RequestTimingMiddleware)

        @app.get("/ping")
        async def ping():
            return {"pong": True}

        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://localhost") as client:
            response = await client.get("/ping")

        assert response.status_code == 200
        assert "x-process-time" in response.headers
