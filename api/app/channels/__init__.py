"""Base types for outbound chat channel adapters."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ChannelPayload:
    """Represents the HTTP request payload for a chat webhook."""
    method: str
    url: str
    headers: dict[str, str]
    body: str  # JSON string
