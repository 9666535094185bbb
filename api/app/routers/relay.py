import logging
from typing import Optional

import httpx
from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import HTMLResponse

from app.auth import TOKEN_HEADER, is_authorized
from app.channels.dispatcher import get_transport, send_message
from app.channels.wecom import build_message
from app.config import Settings, get_settings
from app.docs import render_docs_page
from app.errors import ErrorCode, InvalidTokenError, MissingParamsError, RelayError
from app.payload import parse_payload
from app.response import (
    ALLOWED_METHODS,
    CORS_HEADERS,
    error_response,
    relay_error_response,
    success_response,
)

relay_logger = logging.getLogger("relay")

router = APIRouter(tags=["relay"])

PREFLIGHT_HEADERS = {
    **CORS_HEADERS,
    "Access-Control-Allow-Methods": ALLOWED_METHODS,
    "Access-Control-Allow-Headers": f"Content-Type, {TOKEN_HEADER}",
    "Access-Control-Max-Age": "86400",
}


@router.options("/{path:path}", summary="CORS preflight")
async def preflight(path: str):
    return Response(status_code=204, headers=PREFLIGHT_HEADERS)


@router.get("/{path:path}", summary="API documentation", response_class=HTMLResponse)
async def docs_page(path: str, settings: Settings = Depends(get_settings)):
    return HTMLResponse(render_docs_page(settings))


@router.post("/{path:path}", summary="Relay a message to the WeCom group")
async def relay_message(
    path: str,
    request: Request,
    settings: Settings = Depends(get_settings),
    transport: Optional[httpx.AsyncBaseTransport] = Depends(get_transport),
):
    try:
        if not is_authorized(request.headers, settings.verification_token):
            raise InvalidTokenError()

        payload = await parse_payload(request)
        if not payload.get("content"):
            raise MissingParamsError("The content parameter is required")

        message = build_message(payload, settings.default_msg_type)
        result = await send_message(
            message,
            settings.wechat_webhook_url,
            timeout=settings.forward_timeout,
            transport=transport,
        )
    except RelayError as exc:
        relay_logger.warning("Relay of /%s failed: %s (%s)", path, exc.code.value, exc)
        return relay_error_response(exc)
    except Exception as exc:
        relay_logger.exception("Unexpected error relaying /%s", path)
        return error_response(ErrorCode.UNKNOWN_ERROR, details=str(exc))

    relay_logger.info("Relayed %s message from /%s", message.msgtype, path)
    return success_response(result)
