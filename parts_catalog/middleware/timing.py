"""
Request timing middleware
"""

import time

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from parts_catalog.core.logging import log


SLOW_REQUEST_SECONDS = 1.0


class TimingMiddleware(BaseHTTPMiddleware):
    """Add request timing to responses and log slow requests"""

    async def dispatch(self, request: Request, call_next):
        start_time = time.perf_counter()

        response = await call_next(request)

        process_time = time.perf_counter() - start_time
        response.headers["X-Process-Time"] = str(round(process_time * 1000, 2))

        if process_time > SLOW_REQUEST_SECONDS:
            log.warning(
                "Slow request detected",
                method=request.method,
                path=request.url.path,
                duration_ms=round(process_time * 1000, 2),
                status_code=response.status_code,
            )

        return response
