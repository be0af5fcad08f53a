from fastapi import Request, status
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from nutritrack.core.config import settings
import logging

logger = logging.getLogger(__name__)

DEFAULT_RETRY_AFTER = 60

def get_rate_limit_key(request: Request) -> str:
    """
    Key requests by the user they act on when the URL names one, so users
    behind a shared address do not exhaust each other's quota. Body-only
    requests fall back to the client address.
    """
    user_id = request.query_params.get("userId") or request.path_params.get("user_id")
    if user_id:
        return f"user:{user_id}"
    return f"ip:{get_remote_address(request)}"

limiter = Limiter(
    key_func=get_rate_limit_key,
    default_limits=[settings.DEFAULT_RATE_LIMIT] if settings.RATE_LIMIT_ENABLED else [],
    enabled=settings.RATE_LIMIT_ENABLED
)

def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    logger.warning(
        f"Rate limit exceeded for {get_rate_limit_key(request)} "
        f"on {request.method} {request.url.path} ({exc.detail})"
    )

    retry_after = getattr(exc, "retry_after", None) or DEFAULT_RETRY_AFTER
    return JSONResponse(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        content={"error": "Too many requests, please try again later"},
        headers={"Retry-After": str(retry_after)}
    )

def create_rate_limit_middleware():
    """SlowAPI middleware applying the default limit, or None when limiting is off."""
    if not settings.RATE_LIMIT_ENABLED:
        logger.info("Rate limiting is disabled in settings")
        return None

    logger.info(f"Rate limiting enabled, default limit {settings.DEFAULT_RATE_LIMIT}")
    return SlowAPIMiddleware
