"""
Notes API — Middleware Tests
=============================

What:  Tests for the request deadline and request ID middleware.
How:   A throwaway FastAPI app for the deadline (so the timeout can be tiny);
       the real app for request IDs.
"""

import asyncio
import logging

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from notes_api.middleware.request_id import RequestIDLogFilter, request_id_var
from notes_api.middleware.timeout import RequestTimeoutMiddleware
from notes_api.responses import JSON_MEDIA_TYPE


@pytest.fixture
def slow_app():
    app = FastAPI()
    app.add_middleware(RequestTimeoutMiddleware, timeout=0.05)

    @app.get("/slow")
    async def slow():
        await asyncio.sleep(1)
        return "late"

    @app.get("/fast")
    async def fast():
        return "ok"

    return app


class TestRequestTimeout:
    @pytest.mark.asyncio
    async def test_deadline_exceeded(self, slow_app):
        """Handlers still running at the deadline are cancelled and answered with 504."""
        async with AsyncClient(transport=ASGITransport(app=slow_app), base_url="http://test") as client:
            response = await client.get("/slow")

        assert response.status_code == 504
        assert response.json() == {"error": "request timed out"}
        assert response.headers["Content-Type"] == JSON_MEDIA_TYPE

    @pytest.mark.asyncio
    async def test_within_deadline(self, slow_app):
        async with AsyncClient(transport=ASGITransport(app=slow_app), base_url="http://test") as client:
            response = await client.get("/fast")

        assert response.status_code == 200
        assert response.json() == "ok"


class TestRequestID:
    @pytest.mark.asyncio
    async def test_generated(self, test_client):
        response = await test_client.get("/health")
        assert len(response.headers["X-Request-ID"]) == 8

    @pytest.mark.asyncio
    async def test_client_supplied_id_is_echoed(self, test_client):
        response = await test_client.get("/health", headers={"X-Request-ID": "trace-123"})
        assert response.headers["X-Request-ID"] == "trace-123"


class TestRequestIDLogFilter:
    def _record(self) -> logging.LogRecord:
        return logging.LogRecord("notes_api", logging.INFO, __file__, 1, "msg", None, None)

    def test_outside_request(self):
        record = self._record()
        assert RequestIDLogFilter().filter(record)
        assert record.request_id == "-"

    def test_inside_request(self):
        token = request_id_var.set("abc12345")
        try:
            record = self._record()
            RequestIDLogFilter().filter(record)
        finally:
            request_id_var.reset(token)
        assert record.request_id == "abc12345"
