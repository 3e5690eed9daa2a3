"""Request logging middleware.

One log line per HTTP request: method, path, status, latency, request ID and,
once the authentication gate has run, the caller's user id. The request_id is
injected into request.state (error bodies echo it) and returned in the
X-Request-ID header.

Log format:
    INFO [PUT] /users/3f2a... → 200 (41ms) req_a1b2c3d4e5f6 user=3f2a...
"""

import logging
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("erp.request")


class RequestLogMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = f"req_{uuid.uuid4().hex[:12]}"
        request.state.request_id = request_id

        start = time.perf_counter()
        response: Response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000

        response.headers["X-Request-ID"] = request_id
        caller = getattr(request.state, "user", None)
        level = logging.WARNING if response.status_code >= 500 else logging.INFO
        logger.log(
            level,
            "[%s] %s → %d (%.0fms) %s user=%s",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
            request_id,
            caller.id if caller is not None else "-",
        )
        return response
