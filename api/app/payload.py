"""
Normalize inbound JSON and form bodies into a flat string mapping.

Form bodies already arrive as strings. JSON values are flattened:

- ``null``, ``false``, ``0`` and ``""`` count as absent and are dropped, so
  ``{"content": 0}`` is a missing ``content`` just like ``{"content": ""}``.
- Other scalars become ``str(val)`` (``true`` for a true bool).
- Arrays of scalars are joined with ``,`` so ``["a", "b"]`` reads like the
  comma-separated form field ``a,b``.
- Anything else falls back to compact JSON.
"""

import json
import logging
from typing import Any, Optional

from starlette.datastructures import UploadFile
from starlette.requests import Request

from app.errors import InvalidBodyError, UnsupportedContentTypeError

logger = logging.getLogger(__name__)

JSON_TYPE = "application/json"
FORM_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


def _is_blank(val: Any) -> bool:
    if val is None or val is False or val == "":
        return True
    return isinstance(val, (int, float)) and not isinstance(val, bool) and val == 0


def _scalar(val: Any) -> str:
    if isinstance(val, bool):
        return "true" if val else "false"
    return str(val)


def format_value(val: Any) -> Optional[str]:
    """Return the string form of a JSON value, or ``None`` when it counts as absent."""
    if _is_blank(val):
        return None

    if isinstance(val, str):
        return val

    if not isinstance(val, (dict, list)):
        return _scalar(val)

    if isinstance(val, list) and all(
        v is not None and not isinstance(v, (dict, list)) for v in val
    ):
        return ",".join(_scalar(v) for v in val)

    return json.dumps(val, ensure_ascii=False, separators=(",", ":"), default=str)


def flatten_values(data: dict) -> dict[str, str]:
    flat = {}
    for key, val in data.items():
        formatted = format_value(val)
        if formatted is not None:
            flat[str(key)] = formatted
    return flat


def content_kind(content_type: str) -> str:
    """Classify a Content-Type header as ``json``, ``form`` or ``""``."""
    lowered = content_type.lower()
    if JSON_TYPE in lowered:
        return "json"
    if any(form_type in lowered for form_type in FORM_TYPES):
        return "form"
    return ""


async def parse_payload(request: Request) -> dict[str, str]:
    content_type = request.headers.get("content-type", "")
    kind = content_kind(content_type)

    if kind == "json":
        return await _parse_json(request)
    if kind == "form":
        return await _parse_form(request)
    raise UnsupportedContentTypeError(content_type or None)


async def _parse_json(request: Request) -> dict[str, str]:
    try:
        data = await request.json()
    except ValueError as exc:
        raise InvalidBodyError(f"Malformed JSON body: {exc}") from exc

    if not isinstance(data, dict):
        raise InvalidBodyError(f"JSON body must be an object, got {type(data).__name__}")
    return flatten_values(data)


async def _parse_form(request: Request) -> dict[str, str]:
    try:
        form = await request.form()
    except Exception as exc:
        raise InvalidBodyError(f"Malformed form body: {exc}") from exc

    data = {}
    # Repeated keys: last occurrence wins
    for key, value in form.multi_items():
        if isinstance(value, UploadFile):
            logger.debug("Skipping uploaded file field %r", key)
            continue
        data[key] = value
    return data
