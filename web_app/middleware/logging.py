"""Request logging middleware."""

import logging
import time
import uuid
from typing import Callable, Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from shortlink.common.logging_config import get_logger
from shortlink.common.public_url import read_forwarded


REQUEST_ID_HEADER = "X-Request-ID"

# Load balancer probes would drown out real traffic at INFO
QUIET_PATHS = frozenset({"/up", "/api/v1/health"})


class LoggingMiddleware(BaseHTTPMiddleware):
    """Log each request with its status, duration and a request id.

    An incoming X-Request-ID is reused, otherwise one is generated; either
    way it is echoed back on the response.
    """

    def __init__(self, app, logger: Optional[logging.Logger] = None):
        super().__init__(app)
        self.logger = logger or get_logger("web")

    async def dispatch(self, request: Request, call_next: Callable):
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex[:16]
        request.state.request_id = request_id

        client = read_forwarded(request.headers).client
        if client is None:
            client = request.client.host if request.client else "unknown"

        start = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start) * 1000

        response.headers[REQUEST_ID_HEADER] = request_id

        if response.status_code >= 500:
            level = logging.WARNING
        elif request.url.path in QUIET_PATHS:
            level = logging.DEBUG
        else:
            level = logging.INFO

        self.logger.log(
            level,
            f"{request.method} {request.url.path} -> {response.status_code} "
            f"in {duration_ms:.1f}ms (client={client})",
            extra={"request_id": request_id},
        )

        return response
