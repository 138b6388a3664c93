"""Tests for the HTTP transport."""

import json
import logging

import pytest

from lamington_mcp import __version__
from lamington_mcp.server import _HealthFilterLog, app, health


@pytest.mark.asyncio
class TestHealth:
    """Tests for the /health endpoint."""

    async def test_health_body(self):
        response = await health(None)
        assert response.status_code == 200
        assert json.loads(response.body) == {
            "status": "healthy",
            "service": "lamington-parts-mcp",
            "version": __version__,
        }

    async def test_health_route_registered(self):
        assert "/health" in [getattr(route, "path", None) for route in app.routes]


class TestHealthFilterLog:
    """Tests for the access log filter."""

    @pytest.mark.parametrize("message,keep", [
        ('127.0.0.1 - "GET /health HTTP/1.1" 200', False),
        ('127.0.0.1 - "POST /mcp HTTP/1.1" 200', True),
    ])
    def test_filter(self, message: str, keep: bool):
        record = logging.LogRecord("uvicorn.access", logging.INFO, __file__, 1, message, None, None)
        assert _HealthFilterLog().filter(record) is keep
