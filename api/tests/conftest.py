"""Shared test fixtures for the relay API."""

from __future__ import annotations

import json
from typing import Any, Callable

import httpx
import pytest

from app.channels.dispatcher import get_transport
from app.config import Settings, get_settings, load_settings
from app.main import app

WEBHOOK_URL = "https://qyapi.weixin.qq.com/cgi-bin/webhook/send?key=test-key"


def make_settings(**overrides: Any) -> Settings:
    env = {"WECHAT_WEBHOOK_URL": WEBHOOK_URL}
    env.update({k.upper(): str(v) for k, v in overrides.items()})
    return load_settings(env)


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it answered."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.requests: list[httpx.Request] = []

        def _record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(_record)

    @property
    def sent_json(self) -> list[dict[str, Any]]:
        return [json.loads(r.content) for r in self.requests]


def wecom_reply(body: Any, status_code: int = 200) -> RecordingTransport:
    return RecordingTransport(lambda request: httpx.Response(status_code, json=body))


@pytest.fixture
def wecom_ok() -> RecordingTransport:
    return wecom_reply({"errcode": 0, "errmsg": "ok"})


@pytest.fixture
def relay_app():
    """Return a configurator that pins settings and outbound transport on the app."""

    def _configure(
        settings: Settings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        resolved = settings or make_settings()
        app.dependency_overrides[get_settings] = lambda: resolved
        app.dependency_overrides[get_transport] = lambda: transport
        return app

    yield _configure
    app.dependency_overrides.clear()


def client_for(asgi_app) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.ASGITransport(app=asgi_app), base_url="http://test")
