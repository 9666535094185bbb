"""Deliver a built message to the WeCom robot webhook."""

import logging
from typing import Optional

import httpx
from pydantic import ValidationError

from app.channels.wecom import OutboundMessage, format_wecom
from app.errors import ForwardingError, WebhookNotConfiguredError, WeComApiError
from app.schemas.relay import ForwardResult

logger = logging.getLogger(__name__)


async def send_message(
    message: OutboundMessage,
    webhook_url: str,
    timeout: float = 10,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> ForwardResult:
    """
    Send a single message via HTTP. One attempt, no retries.

    Args:
        message: Built text or markdown message
        webhook_url: Robot webhook URL including its ``key`` query parameter
        timeout: Request timeout in seconds
        transport: Optional transport override (tests use ``httpx.MockTransport``)

    Raises:
        WebhookNotConfiguredError: ``webhook_url`` is empty; nothing is sent.
        WeComApiError: the reply carried a non-zero ``errcode``.
        ForwardingError: connection failure or a reply that is not a JSON object.
    """
    if not webhook_url:
        raise WebhookNotConfiguredError()

    payload = format_wecom(message, webhook_url)

    try:
        async with httpx.AsyncClient(timeout=timeout, transport=transport) as client:
            response = await client.request(
                method=payload.method,
                url=payload.url,
                headers=payload.headers,
                content=payload.body,
            )
    except httpx.HTTPError as e:
        logger.error(f"Failed to send message to WeCom: {e}", exc_info=True)
        raise ForwardingError(f"Request to WeCom webhook failed: {e}") from e

    try:
        result = response.json()
    except ValueError as e:
        logger.error(
            f"WeCom returned status {response.status_code} with a non-JSON body: {response.text[:200]}"
        )
        raise ForwardingError(
            f"WeCom webhook returned a non-JSON response (HTTP {response.status_code})"
        ) from e

    if not isinstance(result, dict):
        raise ForwardingError(
            f"WeCom webhook returned an unexpected response (HTTP {response.status_code})"
        )

    errcode = result.get("errcode")
    if errcode != 0:
        errmsg = result.get("errmsg", "")
        logger.warning("WeCom rejected message: errcode=%s errmsg=%s", errcode, errmsg)
        raise WeComApiError(errcode, errmsg)

    try:
        forward_result = ForwardResult.model_validate(result)
    except ValidationError as e:
        raise ForwardingError(f"WeCom webhook returned an unexpected response: {e}") from e

    logger.debug("Message delivered to WeCom: %s", forward_result.errmsg)
    return forward_result


def get_transport() -> Optional[httpx.AsyncBaseTransport]:
    """Outbound transport dependency; ``None`` means httpx's default."""
    return None
