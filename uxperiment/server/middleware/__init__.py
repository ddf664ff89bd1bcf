"""
Middleware modules for the UXperiment server.

This package contains custom middleware for request/response logging,
timing, and other cross-cutting concerns.
"""

from .request_timing import RequestTimingMiddleware

__all__ = ["RequestTimingMiddleware"]
