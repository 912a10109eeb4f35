"""
Custom exceptions for the application
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi import HTTPException, Request, status
from fastapi.responses import JSONResponse
from starlette_context import context
from starlette_context.header_keys import HeaderKeys

from parts_catalog.core.config import settings
from parts_catalog.core.logging import log


class BaseAPIException(HTTPException):
    """Base exception for API errors"""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    detail: str = "Internal server error"
    headers: Optional[Dict[str, str]] = None

    def __init__(self, detail: Optional[str] = None, headers: Optional[Dict[str, str]] = None, **kwargs):
        super().__init__(status_code=self.status_code, detail=detail or self.detail, headers=headers or self.headers)
        # Store any additional context
        self.context = kwargs


class NotFoundError(BaseAPIException):
    """Resource not found"""

    status_code = status.HTTP_404_NOT_FOUND
    detail = "Resource not found"


class ConflictError(BaseAPIException):
    """Conflict with existing resource"""

    status_code = status.HTTP_409_CONFLICT
    detail = "Resource conflict"


class BadRequestError(BaseAPIException):
    """Bad request"""

    status_code = status.HTTP_400_BAD_REQUEST
    detail = "Bad request"


class ValidationError(BaseAPIException):
    """Validation error"""

    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    detail = "Validation error"


class DatabaseError(BaseAPIException):
    """Database operation error"""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    detail = "Database error"


class DuplicateManufacturerError(ConflictError):
    """A manufacturer with the same name already exists"""

    def __init__(self, name: str, **kwargs):
        super().__init__(f'Manufacturer with name "{name}" already exists', name=name, **kwargs)


class InvalidCountryCodeError(BadRequestError):
    """Country code is not a 2-letter ISO code"""

    detail = "Country code must be a 2-letter uppercase ISO code"

    def __init__(self, country_code: Optional[str] = None):
        super().__init__(country_code=country_code)


def _correlation_id() -> str:
    if context.exists():
        return context.get(HeaderKeys.request_id) or "no-context"
    return "no-context"


# Exception handlers
async def handle_api_exception(request: Request, exc: BaseAPIException) -> JSONResponse:
    """Handle API exceptions with structured response"""
    error_response = {
        "error": exc.detail,
        "type": exc.__class__.__name__,
        "context": getattr(exc, "context", {}),
        "correlation_id": _correlation_id(),
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }

    return JSONResponse(status_code=exc.status_code, content=error_response, headers=getattr(exc, "headers", None))


async def handle_unexpected_exception(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions"""
    log.opt(exception=exc).error("Unexpected error", method=request.method, path=request.url.path)

    # Don't expose internal errors in production
    detail = "Internal server error" if settings.is_production else str(exc) or "Internal server error"

    error_response = {
        "error": detail,
        "type": "InternalServerError",
        "context": {},
        "correlation_id": _correlation_id(),
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }

    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=error_response)
