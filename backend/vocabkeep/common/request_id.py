"""Request ID middleware: tags each request and logs its outcome."""

import time
import uuid
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from vocabkeep.core.logging import get_logger

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


def _elapsed_ms(started: float) -> int:
    return int((time.perf_counter() - started) * 1000)


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Reuse the caller's X-Request-ID or mint one, and echo it back."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.state.request_id = request_id
        log_extra = {
            "request_id": request_id,
            "method": request.method,
            "path": request.url.path,
            "tenant_id": request.headers.get("X-Tenant-ID"),
        }
        started = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                "Request failed",
                extra={**log_extra, "latency_ms": _elapsed_ms(started), "error": str(e)},
                exc_info=True,
            )
            raise

        response.headers[REQUEST_ID_HEADER] = request_id
        logger.info(
            "Request handled",
            extra={**log_extra, "status_code": response.status_code, "latency_ms": _elapsed_ms(started)},
        )
        return response
