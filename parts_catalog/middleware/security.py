"""
Security headers middleware
"""

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware


DEFAULT_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "strict-origin-when-cross-origin",
}


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers; API responses are also marked non-cacheable"""

    def __init__(self, app, api_prefix: str = "/api"):
        super().__init__(app)
        self.api_prefix = api_prefix

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)

        for header, value in DEFAULT_HEADERS.items():
            response.headers.setdefault(header, value)

        if request.url.path.startswith(self.api_prefix):
            response.headers.setdefault("Cache-Control", "no-store")

        return response
