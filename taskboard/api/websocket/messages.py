"""Client -> server WebSocket messages (closed set, tagged by ``type``)."""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class AuthMessage(BaseModel):
    """Announces which user this connection belongs to."""

    model_config = ConfigDict(populate_by_name=True)

    type: Literal["auth"]
    user_id: int = Field(alias="userId", gt=0)
    token: str | None = None


class PingMessage(BaseModel):
    """Keep-alive; answered with ``{type: "pong"}``."""

    type: Literal["ping"]


ClientMessage = Annotated[AuthMessage | PingMessage, Field(discriminator="type")]

client_message_adapter: TypeAdapter[AuthMessage | PingMessage] = TypeAdapter(ClientMessage)


def parse_client_message(raw: str | bytes) -> AuthMessage | PingMessage:
    """Parse one inbound frame.

    Raises:
        pydantic.ValidationError: On invalid JSON, an unknown ``type`` or bad fields.
    """
    return client_message_adapter.validate_json(raw)
