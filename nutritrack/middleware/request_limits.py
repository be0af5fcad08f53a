from fastapi import Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response
from typing import Callable, Optional
from nutritrack.core.config import settings
import logging

logger = logging.getLogger(__name__)

BODY_METHODS = {"POST", "PUT", "PATCH"}

def declared_body_size(request: Request) -> Optional[int]:
    content_length = request.headers.get("content-length")
    if content_length is None or not content_length.isdigit():
        return None
    return int(content_length)

class RequestSizeLimitMiddleware(BaseHTTPMiddleware):
    """
    Rejects meal and health payloads whose declared size exceeds MAX_REQUEST_SIZE.
    Responds directly since exception handlers do not wrap middleware.
    """

    def __init__(self, app, max_request_size: Optional[int] = None):
        super().__init__(app)
        self.max_request_size = max_request_size or settings.MAX_REQUEST_SIZE

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if request.method in BODY_METHODS:
            size = declared_body_size(request)
            if size is not None and size > self.max_request_size:
                logger.warning(f"Rejected {size} byte body on {request.method} {request.url.path}")
                return JSONResponse(
                    status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                    content={"error": f"Request body too large, limit is {self.max_request_size} bytes"}
                )

        return await call_next(request)

def create_request_limit_middleware():
    logger.info(f"Request size limiting enabled with max size: {settings.MAX_REQUEST_SIZE} bytes")
    return RequestSizeLimitMiddleware
