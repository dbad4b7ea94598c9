import logging
import time
import uuid

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from book_catalog_api.context import request_id_var

logger = logging.getLogger("book_catalog_api.request")

REQUEST_ID_HEADER = "X-Request-Id"


class RequestContextMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or f"req-{uuid.uuid4().hex[:12]}"

        token = request_id_var.set(request_id)
        start = time.perf_counter()

        def log_complete(status_code: int) -> None:
            latency_ms = max((time.perf_counter() - start) * 1000, 0.0)
            logger.info(
                "http_request_complete",
                extra={
                    "method": request.method,
                    "path": str(request.url.path),
                    "status_code": status_code,
                    "latency_ms": round(latency_ms, 3),
                },
            )

        try:
            try:
                response = await call_next(request)
            except Exception:
                log_complete(500)
                raise
            response.headers[REQUEST_ID_HEADER] = request_id
            log_complete(response.status_code)
            return response
        finally:
            request_id_var.reset(token)
