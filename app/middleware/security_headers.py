"""
Strict-Transport-Security header middleware.
"""

from starlette.middleware.base import BaseHTTPMiddleware


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Adds an HSTS header to every response."""

    def __init__(
        self,
        app,
        max_age_seconds: int = 60 * 24 * 3600,
        include_subdomains: bool = True,
        preload: bool = True
    ):
        super().__init__(app)
        directives = [f"max-age={max_age_seconds}"]
        if include_subdomains:
            directives.append("includeSubDomains")
        if preload:
            directives.append("preload")
        self.hsts_value = "; ".join(directives)

    async def dispatch(self, request, call_next):
        response = await call_next(request)
        response.headers["Strict-Transport-Security"] = self.hsts_value
        return response
