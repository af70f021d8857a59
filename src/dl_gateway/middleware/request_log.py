"""Request logging middleware.

Assigns each request a short ID (or keeps the caller's X-Request-ID), puts
it on request.state for ApiResponse, echoes it in the response header and
logs method, path, status and latency.

Log format:
    INFO [POST] /api/v1/reserve/mint → 200 (3ms) req=req_a1b2c3d4e5f6 client=127.0.0.1
"""

import logging
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("dl.request")

REQUEST_ID_HEADER = "X-Request-ID"


class RequestLogMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        incoming = request.headers.get(REQUEST_ID_HEADER)
        request.state.request_id = incoming[:64] if incoming else f"req_{uuid.uuid4().hex[:12]}"

        start = time.perf_counter()
        response: Response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000
        response.headers[REQUEST_ID_HEADER] = request.state.request_id

        logger.info(
            "[%s] %s → %d (%.0fms) req=%s client=%s",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
            request.state.request_id,
            request.client.host if request.client else "-",
        )
        return response
