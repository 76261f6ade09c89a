"""
Notes API — Request Deadline Middleware
========================================

What:  Bounds every request to REQUEST_TIMEOUT seconds (default 20).
How:   Runs the rest of the ASGI stack under asyncio.wait_for(). When the
       deadline passes the handler task is cancelled, which cancels whatever
       MongoDB or HTTP call it is awaiting, and a 504 is returned.

Written as plain ASGI (not BaseHTTPMiddleware) so that cancellation reaches
the handler coroutine directly and so it can tell whether the response has
already started streaming.
"""

import asyncio
import logging

from starlette.types import ASGIApp, Message, Receive, Scope, Send

from notes_api.responses import error_response

logger = logging.getLogger(__name__)


class RequestTimeoutMiddleware:
    """
    Per-request deadline.

    If the response has already started when the deadline passes, the
    connection is simply abandoned; a second status line cannot be sent.
    """

    def __init__(self, app: ASGIApp, timeout: float = 20.0) -> None:
        self.app = app
        self.timeout = timeout

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        response_started = False

        async def send_wrapper(message: Message) -> None:
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await asyncio.wait_for(self.app(scope, receive, send_wrapper), timeout=self.timeout)
        except asyncio.TimeoutError:
            logger.warning(
                "%s %s exceeded the %.1fs deadline",
                scope.get("method", ""),
                scope.get("path", ""),
                self.timeout,
            )
            if response_started:
                return
            response = error_response(504, "request timed out")
            await response(scope, receive, send)
