"""
Domain exceptions raised by the service layer.

Services never build HTTP responses themselves; they raise one of these and
``uxperiment.server.exception_handlers`` turns it into a JSON error.
"""

from __future__ import annotations

from typing import List, Optional


class MarketplaceError(Exception):
    """Base class for expected, client-facing failures."""

    status_code: int = 400

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


class NotFoundError(MarketplaceError):
    status_code = 404


class ConflictError(MarketplaceError):
    status_code = 409


class ValidationFailedError(MarketplaceError):
    """Input was well-formed but violates a business rule."""

    status_code = 422

    def __init__(self, detail: str, errors: Optional[List[str]] = None) -> None:
        super().__init__(detail)
        self.errors = list(errors or [])


class AccessDeniedError(MarketplaceError):
    """The caller is known but may not perform the action.

    ``reason`` is a machine-readable code such as ``login_required`` or
    ``subscription_required``.
    """

    status_code = 403

    def __init__(self, detail: str, reason: Optional[str] = None) -> None:
        super().__init__(detail)
        self.reason = reason


class AuthenticationError(MarketplaceError):
    status_code = 401
