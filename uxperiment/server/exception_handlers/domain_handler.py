"""
Domain Exception Handler.

Maps ``MarketplaceError`` subclasses raised by services and security
dependencies onto their HTTP status with a ``{"detail", "error_type"}`` body.
"""

from fastapi import Request
from fastapi.responses import JSONResponse

from uxperiment.core.logging_config import get_logger
from uxperiment.server.services.errors import (
    AccessDeniedError,
    AuthenticationError,
    MarketplaceError,
    ValidationFailedError,
)

logger = get_logger(__name__)


async def domain_exception_handler(request: Request, exc: MarketplaceError) -> JSONResponse:
    """Render an expected business failure."""
    logger.info(
        f"{request.method} {request.url.path} -> {exc.status_code} {type(exc).__name__}: {exc.detail}",
        extra={"method": request.method, "path": request.url.path, "status_code": exc.status_code},
    )

    content = {"detail": exc.detail, "error_type": type(exc).__name__}
    if isinstance(exc, ValidationFailedError):
        content["errors"] = exc.errors
    if isinstance(exc, AccessDeniedError) and exc.reason:
        content["reason"] = exc.reason

    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthenticationError) else None
    return JSONResponse(status_code=exc.status_code, content=content, headers=headers)
