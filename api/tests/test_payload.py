"""Tests for inbound body normalization."""

from __future__ import annotations

import json
from typing import Any

import httpx
import pytest
from starlette.requests import Request

from app.errors import ErrorCode, InvalidBodyError, UnsupportedContentTypeError
from app.payload import content_kind, format_value, parse_payload


def _request(body: bytes, content_type: str | None) -> Request:
    headers = [(b"content-length", str(len(body)).encode())]
    if content_type is not None:
        headers.append((b"content-type", content_type.encode()))
    scope = {
        "type": "http",
        "method": "POST",
        "path": "/",
        "headers": headers,
        "query_string": b"",
    }

    async def receive() -> dict[str, Any]:
        return {"type": "http.request", "body": body, "more_body": False}

    return Request(scope, receive)


def _encoded(**kwargs: Any) -> Request:
    built = httpx.Request("POST", "http://test/", **kwargs)
    return _request(built.read(), built.headers["content-type"])


class TestContentKind:
    @pytest.mark.parametrize(
        "content_type,kind",
        [
            ("application/json", "json"),
            ("application/json; charset=utf-8", "json"),
            ("application/x-www-form-urlencoded", "form"),
            ("multipart/form-data; boundary=abc", "form"),
            ("text/plain", ""),
            ("", ""),
        ],
    )
    def test_classification(self, content_type: str, kind: str) -> None:
        assert content_kind(content_type) == kind


class TestParseJson:
    @pytest.mark.asyncio
    async def test_object_body(self) -> None:
        body = json.dumps({"content": "hi", "msgtype": "markdown"}).encode()
        payload = await parse_payload(_request(body, "application/json"))
        assert payload == {"content": "hi", "msgtype": "markdown"}

    @pytest.mark.asyncio
    async def test_values_flattened_to_strings(self) -> None:
        body = json.dumps(
            {"content": 42, "mentioned_list": ["a", "b"], "extra": None, "flag": True}
        ).encode()
        payload = await parse_payload(_request(body, "application/json"))
        assert payload == {"content": "42", "mentioned_list": "a,b", "flag": "true"}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("content", [0, 0.0, False, None, ""])
    async def test_blank_values_dropped(self, content: Any) -> None:
        body = json.dumps({"content": content, "msgtype": "text"}).encode()
        payload = await parse_payload(_request(body, "application/json"))
        assert payload == {"msgtype": "text"}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", [b"[1, 2]", b'"text"', b"3"])
    async def test_non_object_rejected(self, body: bytes) -> None:
        with pytest.raises(InvalidBodyError) as exc_info:
            await parse_payload(_request(body, "application/json"))
        assert exc_info.value.code is ErrorCode.INVALID_BODY

    @pytest.mark.asyncio
    async def test_malformed_json_rejected(self) -> None:
        with pytest.raises(InvalidBodyError):
            await parse_payload(_request(b"{not json", "application/json"))


class TestParseForm:
    @pytest.mark.asyncio
    async def test_urlencoded(self) -> None:
        request = _request(
            b"content=hello+world&mentioned_mobile_list=%40all",
            "application/x-www-form-urlencoded",
        )
        payload = await parse_payload(request)
        assert payload == {"content": "hello world", "mentioned_mobile_list": "@all"}

    @pytest.mark.asyncio
    async def test_repeated_keys_last_wins(self) -> None:
        request = _request(b"content=first&content=second", "application/x-www-form-urlencoded")
        payload = await parse_payload(request)
        assert payload == {"content": "second"}

    @pytest.mark.asyncio
    async def test_multipart_fields(self) -> None:
        request = _encoded(
            data={"content": "hi", "msgtype": "text"},
            files={"attachment": ("note.txt", b"ignored", "text/plain")},
        )
        payload = await parse_payload(request)
        assert payload == {"content": "hi", "msgtype": "text"}


class TestUnsupported:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("content_type", ["text/plain", None])
    async def test_other_content_types_rejected(self, content_type: str | None) -> None:
        with pytest.raises(UnsupportedContentTypeError) as exc_info:
            await parse_payload(_request(b"content=hi", content_type))
        assert exc_info.value.code is ErrorCode.UNSUPPORTED_CONTENT_TYPE


class TestFormatValue:
    @pytest.mark.parametrize(
        "value,expected",
        [
            ("hi", "hi"),
            ("0", "0"),
            (7, "7"),
            (True, "true"),
            (["13800000000", "@all"], "13800000000,@all"),
            ({"k": "v"}, '{"k":"v"}'),
            ([{"k": 1}], '[{"k":1}]'),
        ],
    )
    def test_flattening(self, value: Any, expected: str) -> None:
        assert format_value(value) == expected

    @pytest.mark.parametrize("value", [None, False, 0, 0.0, ""])
    def test_blank_values(self, value: Any) -> None:
        assert format_value(value) is None
