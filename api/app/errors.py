"""Failure kinds raised along the relay pipeline."""

from enum import Enum
from typing import Optional


class ErrorCode(str, Enum):
    INVALID_TOKEN = "INVALID_TOKEN"
    MISSING_PARAMS = "MISSING_PARAMS"
    INVALID_MSG_TYPE = "INVALID_MSG_TYPE"
    UNSUPPORTED_CONTENT_TYPE = "UNSUPPORTED_CONTENT_TYPE"
    INVALID_BODY = "INVALID_BODY"
    PAYLOAD_TOO_LARGE = "PAYLOAD_TOO_LARGE"
    WEBHOOK_NOT_CONFIGURED = "WEBHOOK_NOT_CONFIGURED"
    WECHAT_API_ERROR = "WECHAT_API_ERROR"
    METHOD_NOT_ALLOWED = "METHOD_NOT_ALLOWED"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


class RelayError(Exception):
    """Base class for every failure the relay reports to its caller."""

    code: ErrorCode = ErrorCode.UNKNOWN_ERROR

    def __init__(self, details: Optional[str] = None):
        super().__init__(details or self.code.value)
        self.details = details


class InvalidTokenError(RelayError):
    code = ErrorCode.INVALID_TOKEN


class MissingParamsError(RelayError):
    code = ErrorCode.MISSING_PARAMS


class InvalidMsgTypeError(RelayError):
    code = ErrorCode.INVALID_MSG_TYPE

    def __init__(self, msg_type: str):
        super().__init__(f"Unsupported message type: {msg_type}")
        self.msg_type = msg_type


class UnsupportedContentTypeError(RelayError):
    code = ErrorCode.UNSUPPORTED_CONTENT_TYPE

    def __init__(self, content_type: Optional[str]):
        super().__init__(f"Unsupported content type: {content_type or '(none)'}")
        self.content_type = content_type


class InvalidBodyError(RelayError):
    code = ErrorCode.INVALID_BODY


class PayloadTooLargeError(RelayError):
    code = ErrorCode.PAYLOAD_TOO_LARGE


class WebhookNotConfiguredError(RelayError):
    code = ErrorCode.WEBHOOK_NOT_CONFIGURED

    def __init__(self):
        super().__init__("WECHAT_WEBHOOK_URL is not set")


class WeComApiError(RelayError):
    """The robot webhook answered with a non-zero errcode."""

    code = ErrorCode.WECHAT_API_ERROR

    def __init__(self, errcode, errmsg: str):
        super().__init__(f"WeCom API returned an error: {errmsg} (errcode: {errcode})")
        self.errcode = errcode
        self.errmsg = errmsg


class ForwardingError(RelayError):
    """Connection failure or unreadable reply from the robot webhook."""

    code = ErrorCode.UNKNOWN_ERROR
