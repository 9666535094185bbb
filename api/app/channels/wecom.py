"""WeCom (WeChat Work) group robot message adapter."""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from app.channels import ChannelPayload
from app.errors import InvalidMsgTypeError


class TextBody(BaseModel):
    content: str
    mentioned_list: list[str] = Field(default_factory=list)
    mentioned_mobile_list: list[str] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


class MarkdownBody(BaseModel):
    content: str

    model_config = ConfigDict(frozen=True)


class TextMessage(BaseModel):
    msgtype: Literal["text"] = "text"
    text: TextBody

    model_config = ConfigDict(frozen=True)


class MarkdownMessage(BaseModel):
    msgtype: Literal["markdown"] = "markdown"
    markdown: MarkdownBody

    model_config = ConfigDict(frozen=True)


OutboundMessage = Annotated[Union[TextMessage, MarkdownMessage], Field(discriminator="msgtype")]


def split_mentions(value) -> list[str]:
    """
    Split a comma-separated mention field.

    Entries are kept verbatim: no trimming, no de-duplication, and empty
    entries from stray commas survive. ``@all`` is passed through.
    """
    return value.split(",") if value else []


def resolve_msg_type(payload: dict[str, str], default_msg_type: str) -> str:
    return payload.get("msgtype") or default_msg_type


def build_message(payload: dict[str, str], default_msg_type: str) -> OutboundMessage:
    msg_type = resolve_msg_type(payload, default_msg_type)
    content = payload.get("content") or ""

    if msg_type == "text":
        return TextMessage(
            text=TextBody(
                content=content,
                mentioned_list=split_mentions(payload.get("mentioned_list")),
                mentioned_mobile_list=split_mentions(payload.get("mentioned_mobile_list")),
            )
        )
    if msg_type == "markdown":
        return MarkdownMessage(markdown=MarkdownBody(content=content))

    raise InvalidMsgTypeError(msg_type)


def format_wecom(message: OutboundMessage, webhook_url: str) -> ChannelPayload:
    return ChannelPayload(
        method="POST",
        url=webhook_url,
        headers={"Content-Type": "application/json"},
        body=message.model_dump_json(),
    )
