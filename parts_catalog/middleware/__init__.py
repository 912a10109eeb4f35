"""
Middleware components for FastAPI
"""

from .security import SecurityHeadersMiddleware
from .timing import TimingMiddleware

__all__ = ["TimingMiddleware", "SecurityHeadersMiddleware"]
