import asyncio

from starlette.responses import JSONResponse
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from src.core.logger import logger


class RequestTimeoutMiddleware:
    """
    Abort requests that run longer than `timeout_seconds` with a 504.

    The downstream app runs in a task that is cancelled at the deadline, and
    the 504 is only sent once it has finished unwinding. An order in flight
    therefore releases the stock it had reserved before the client hears
    about the timeout.
    """

    def __init__(self, app: ASGIApp, timeout_seconds: float):
        self.app = app
        self.timeout_seconds = timeout_seconds

    async def __call__(self, scope: Scope, receive: Receive, send: Send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        response_started = False

        async def send_wrapper(message: Message):
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await asyncio.wait_for(
                self.app(scope, receive, send_wrapper), timeout=self.timeout_seconds
            )
        except asyncio.TimeoutError:
            logger.error(
                "Request timed out",
                metadata={
                    "event": "request_timeout",
                    "method": scope["method"],
                    "path": scope["path"],
                    "timeout_seconds": self.timeout_seconds,
                    "response_started": response_started,
                },
            )
            # Headers are already out; nothing valid can follow
            if response_started:
                raise

            response = JSONResponse(
                status_code=504,
                content={
                    "error": "Request timed out",
                    "code": "TIMEOUT",
                    "details": {"timeout_seconds": self.timeout_seconds},
                },
            )
            await response(scope, receive, send)
