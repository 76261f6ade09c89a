"""
Notes API — Access Log Middleware
==================================

What:  Writes one line to the `notes_api.access` logger per HTTP exchange.
How:   Wraps `send` to capture the response status, times the downstream
       call, and logs when the exchange ends (or fails).
When:  Inside RequestIDMiddleware, so the request ID is already bound.

Line format:
    GET /note/65a4f0c2e13b4a7d9c0f1a2b -> 204 in 3.1ms (client 10.0.0.7)

The same values are attached as `extra` fields for structured handlers.
Note names, note text and Authorization headers are never logged.
"""

import logging
import time

from starlette.types import ASGIApp, Message, Receive, Scope, Send

logger = logging.getLogger("notes_api.access")

# Probes hit these every few seconds
QUIET_PATHS = frozenset({"/health"})


def _level_for(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware:
    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http" or scope.get("path") in QUIET_PATHS:
            await self.app(scope, receive, send)
            return

        status = 500
        started = time.perf_counter()

        async def send_and_record(message: Message) -> None:
            nonlocal status
            if message["type"] == "http.response.start":
                status = message["status"]
            await send(message)

        try:
            await self.app(scope, receive, send_and_record)
        finally:
            self._log(scope, status, (time.perf_counter() - started) * 1000)

    @staticmethod
    def _log(scope: Scope, status: int, duration_ms: float) -> None:
        client = scope.get("client")
        client_ip = client[0] if client else "unknown"
        method = scope.get("method", "")
        path = scope.get("path", "")
        logger.log(
            _level_for(status),
            "%s %s -> %d in %.1fms (client %s)",
            method,
            path,
            status,
            duration_ms,
            client_ip,
            extra={
                "method": method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
            },
        )
