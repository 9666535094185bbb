"""Standard response envelope for the relay API."""

from typing import Optional

from fastapi.responses import JSONResponse

from app.errors import ErrorCode, RelayError, WebhookNotConfiguredError, WeComApiError
from app.schemas.relay import ApiResponse, ErrorDetail, ForwardResult

CORS_HEADERS = {"Access-Control-Allow-Origin": "*"}
ALLOWED_METHODS = "GET, POST, OPTIONS"

SUCCESS_MESSAGE = "Message delivered to the WeCom group"

# code -> (HTTP status, outward message)
ERROR_TABLE: dict[ErrorCode, tuple[int, str]] = {
    ErrorCode.INVALID_TOKEN: (403, "Request verification failed, check the verification token"),
    ErrorCode.MISSING_PARAMS: (400, "Missing required parameters"),
    ErrorCode.INVALID_MSG_TYPE: (400, "Unsupported message type"),
    ErrorCode.UNSUPPORTED_CONTENT_TYPE: (415, "Unsupported content type"),
    ErrorCode.INVALID_BODY: (400, "Request body could not be parsed"),
    ErrorCode.PAYLOAD_TOO_LARGE: (413, "Request body too large"),
    ErrorCode.WEBHOOK_NOT_CONFIGURED: (500, "WeCom webhook URL is not configured"),
    ErrorCode.WECHAT_API_ERROR: (502, "WeCom API rejected the message"),
    ErrorCode.METHOD_NOT_ALLOWED: (405, "Method not allowed"),
    ErrorCode.UNKNOWN_ERROR: (500, "Sending failed, please try again later"),
}


def _json(status_code: int, body: ApiResponse, headers: Optional[dict] = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(exclude_none=True),
        headers={**CORS_HEADERS, **(headers or {})},
    )


def success_response(result: ForwardResult) -> JSONResponse:
    content = ApiResponse(success=True, message=SUCCESS_MESSAGE).model_dump(exclude_none=True)
    # Remote reply goes out as received, nulls included
    content["data"] = result.model_dump()
    return JSONResponse(status_code=200, content=content, headers=CORS_HEADERS)


def error_response(
    code: ErrorCode,
    details: Optional[str] = None,
    message: Optional[str] = None,
    headers: Optional[dict] = None,
) -> JSONResponse:
    status_code, default_message = ERROR_TABLE[code]
    body = ApiResponse(
        success=False,
        message=message or default_message,
        error=ErrorDetail(code=code.value, details=details),
    )
    return _json(status_code, body, headers)


def relay_error_response(exc: RelayError) -> JSONResponse:
    # Remote rejections surface the remote text as the message itself
    message = str(exc) if isinstance(exc, (WeComApiError, WebhookNotConfiguredError)) else None
    return error_response(exc.code, details=exc.details, message=message)


def method_not_allowed_response(method: str) -> JSONResponse:
    return error_response(
        ErrorCode.METHOD_NOT_ALLOWED,
        message=f"Unsupported HTTP method: {method}",
        headers={"Allow": ALLOWED_METHODS},
    )
