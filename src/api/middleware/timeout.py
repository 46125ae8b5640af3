"""Request timeout middleware."""

import asyncio
from typing import Awaitable, Callable

import structlog
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from core.exceptions import ErrorCode

logger = structlog.get_logger()


class RequestTimeoutMiddleware(BaseHTTPMiddleware):
    """Answer 504 when a request outlives ``timeout_seconds``.

    A hung pool checkout or query would otherwise block the caller forever.
    """

    def __init__(self, app: ASGIApp, timeout_seconds: float) -> None:
        super().__init__(app)
        self.timeout_seconds = timeout_seconds

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        if self.timeout_seconds <= 0:
            return await call_next(request)

        try:
            async with asyncio.timeout(self.timeout_seconds):
                return await call_next(request)
        except TimeoutError:
            logger.error(
                "request_timed_out",
                timeout_seconds=self.timeout_seconds,
                path=request.url.path,
            )
            return JSONResponse(
                status_code=504,
                content={
                    "success": False,
                    "error_code": ErrorCode.REQUEST_TIMEOUT.value,
                    "error": "Request timed out",
                    "details": None,
                },
            )
