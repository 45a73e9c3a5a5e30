"""Client WebSocket messages: tagged-union parsing and per-message handling."""

import pytest
from pydantic import ValidationError

from taskboard.api.websocket.handler import handle_client_message
from taskboard.api.websocket.messages import AuthMessage, PingMessage, parse_client_message
from taskboard.api.websocket.registry import ConnectionRegistry
from taskboard.infrastructure.security.jwt import create_user_token


def test_parse_auth_message() -> None:
    message = parse_client_message('{"type": "auth", "userId": 42}')
    assert isinstance(message, AuthMessage)
    assert message.user_id == 42
    assert message.token is None


def test_parse_ping_message() -> None:
    assert isinstance(parse_client_message('{"type": "ping"}'), PingMessage)


@pytest.mark.parametrize(
    "raw",
    [
        "not json",
        '{"type": "subscribe"}',
        '{"type": "auth"}',
        '{"type": "auth", "userId": 0}',
        '{"type": "auth", "userId": "abc"}',
        '{"userId": 3}',
    ],
)
def test_parse_rejects_malformed(raw: str) -> None:
    with pytest.raises(ValidationError):
        parse_client_message(raw)


async def test_auth_message_binds_identity(make_transport) -> None:
    registry = ConnectionRegistry()
    ws = make_transport()
    await registry.register(ws)
    await handle_client_message(registry, ws, '{"type": "auth", "userId": 5}')
    assert ws.of_type("auth_success")
    assert len(await registry.connections_for_user(5)) == 1


async def test_ping_gets_pong(make_transport) -> None:
    registry = ConnectionRegistry()
    ws = make_transport()
    await registry.register(ws)
    await handle_client_message(registry, ws, '{"type": "ping"}')
    assert ws.sent[-1] == {"type": "pong"}


async def test_malformed_message_is_dropped(make_transport, caplog) -> None:
    """Garbage is logged and ignored; nothing is sent back and identity is unchanged."""
    registry = ConnectionRegistry()
    ws = make_transport()
    await registry.register(ws)
    before = list(ws.sent)
    await handle_client_message(registry, ws, "{oops")
    assert ws.sent == before
    assert await registry.get_authenticated_count() == 0
    assert "malformed" in caplog.text.lower()


async def test_require_token_rejects_missing_token(make_transport) -> None:
    registry = ConnectionRegistry()
    ws = make_transport()
    await registry.register(ws)
    await handle_client_message(
        registry, ws, '{"type": "auth", "userId": 5}', require_token=True
    )
    assert ws.sent[-1] == {"type": "auth_error", "message": "Token required"}
    assert await registry.get_authenticated_count() == 0


async def test_require_token_rejects_other_users_token(make_transport) -> None:
    registry = ConnectionRegistry()
    ws = make_transport()
    await registry.register(ws)
    token = create_user_token(6, "mallory")
    await handle_client_message(
        registry,
        ws,
        f'{{"type": "auth", "userId": 5, "token": "{token}"}}',
        require_token=True,
    )
    assert ws.sent[-1]["type"] == "auth_error"
    assert await registry.connections_for_user(5) == []


async def test_require_token_accepts_matching_token(make_transport) -> None:
    registry = ConnectionRegistry()
    ws = make_transport()
    await registry.register(ws)
    token = create_user_token(5, "alice")
    await handle_client_message(
        registry,
        ws,
        f'{{"type": "auth", "userId": 5, "token": "{token}"}}',
        require_token=True,
    )
    assert ws.sent[-1]["type"] == "auth_success"
