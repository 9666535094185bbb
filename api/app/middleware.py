"""Request size limit middleware."""

import logging

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from app.errors import ErrorCode
from app.response import error_response

logger = logging.getLogger(__name__)


class RequestSizeLimitMiddleware(BaseHTTPMiddleware):
    """Reject requests whose declared body is larger than ``max_body_size`` bytes."""

    def __init__(self, app, max_body_size: int = 2 * 1024 * 1024):
        super().__init__(app)
        self.max_body_size = max_body_size

    async def dispatch(self, request: Request, call_next) -> Response:
        content_length = request.headers.get("content-length")
        if content_length and content_length.isdigit() and int(content_length) > self.max_body_size:
            logger.warning(
                "Rejected %s body of %s bytes (limit %d)",
                request.method,
                content_length,
                self.max_body_size,
            )
            return error_response(
                ErrorCode.PAYLOAD_TOO_LARGE,
                details=f"Max size is {self.max_body_size} bytes.",
            )

        return await call_next(request)
