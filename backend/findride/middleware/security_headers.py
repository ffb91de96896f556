"""Security headers attached to every proxy response."""

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

DEFAULT_HEADERS = {
    "Content-Security-Policy": "default-src 'self'",
    "Strict-Transport-Security": "max-age=63072000; includeSubDomains",
    "X-Frame-Options": "DENY",
    "X-Content-Type-Options": "nosniff",
    "Referrer-Policy": "no-referrer",
}


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Attach security headers; API payloads are also marked uncacheable."""

    def __init__(self, app: ASGIApp, api_prefix: str = "/api") -> None:
        super().__init__(app)
        self.api_prefix = api_prefix.rstrip("/")

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        for name, value in DEFAULT_HEADERS.items():
            response.headers.setdefault(name, value)
        # Provider answers depend on live traffic; never let a proxy reuse them
        if request.url.path.startswith(self.api_prefix + "/"):
            response.headers.setdefault("Cache-Control", "no-store")
        return response
