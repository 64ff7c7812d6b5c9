"""
Middleware package for FastAPI application.
"""

from .rate_limit import RateLimitMiddleware
from .request_context import RequestContextMiddleware
from .security_headers import SecurityHeadersMiddleware

__all__ = ["RateLimitMiddleware", "RequestContextMiddleware", "SecurityHeadersMiddleware"]
