from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from typing import Callable, Dict


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """
    Adds security headers suited to a JSON-only API. Per-user health data
    must never be cached by browsers or shared proxies.
    """

    headers: Dict[str, str] = {
        "Strict-Transport-Security": "max-age=31536000; includeSubDomains",
        "Content-Security-Policy": "default-src 'none'; frame-ancestors 'none'",
        "X-Frame-Options": "DENY",
        "X-Content-Type-Options": "nosniff",
        "Referrer-Policy": "no-referrer",
    }

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        response = await call_next(request)

        for name, value in self.headers.items():
            response.headers[name] = value

        # Routes may set their own caching policy
        if "cache-control" not in response.headers:
            response.headers["Cache-Control"] = "no-store"

        return response
