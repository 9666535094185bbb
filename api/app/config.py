import logging
from collections.abc import Mapping
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)

MSG_TYPES = ("text", "markdown")


class Settings(BaseSettings):
    # WeCom group robot, e.g. https://qyapi.weixin.qq.com/cgi-bin/webhook/send?key=...
    wechat_webhook_url: str = ""
    # Empty disables the X-Verification-Token check
    verification_token: str = ""
    default_msg_type: str = "text"

    app_name: str = "WeCom Form Relay"
    forward_timeout: float = 10
    max_body_bytes: int = 2 * 1024 * 1024
    log_level: str = "INFO"

    host: str = "0.0.0.0"
    port: int = 8000

    model_config = {"env_file": ".env", "extra": "ignore", "frozen": True}

    @field_validator("default_msg_type", mode="before")
    @classmethod
    def _fallback_msg_type(cls, value):
        if value in MSG_TYPES:
            return value
        if value:
            logger.warning("Ignoring unsupported DEFAULT_MSG_TYPE %r, using 'text'", value)
        return "text"


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Resolve settings for a single request.

    With ``environ`` given, only that mapping is consulted (keys are the
    upper-case env names). Otherwise the process environment and ``.env``
    are read.
    """
    if environ is None:
        return Settings()

    values = {}
    for name, field in Settings.model_fields.items():
        env_name = name.upper()
        values[name] = environ[env_name] if env_name in environ else field.default
    return Settings(_env_file=None, **values)


def get_settings() -> Settings:
    return load_settings()
