"""FanOutDispatcher: targeted vs broadcast routing and skipping dead sockets."""

from starlette.websockets import WebSocketState

from taskboard.api.websocket import ConnectionRegistry, FanOutDispatcher


def _setup() -> tuple[ConnectionRegistry, FanOutDispatcher]:
    registry = ConnectionRegistry()
    return registry, FanOutDispatcher(registry)


async def test_notify_user_reaches_only_that_user(make_transport) -> None:
    """An authenticated connection for 42 gets the message; an anonymous one does not."""
    registry, dispatcher = _setup()
    authed, anonymous = make_transport(), make_transport()
    await registry.register(authed)
    await registry.register(anonymous)
    await registry.authenticate(authed, 42)

    delivered = await dispatcher.notify_user(42, {"message": "hi"})

    assert delivered == 1
    assert authed.of_type("notification") == [{"type": "notification", "data": {"message": "hi"}}]
    assert anonymous.of_type("notification") == []


async def test_notify_user_falsy_id_is_noop(make_transport) -> None:
    registry, dispatcher = _setup()
    ws = make_transport()
    await registry.register(ws)
    await registry.authenticate(ws, 1)
    assert await dispatcher.notify_user(None, {"x": 1}) == 0
    assert await dispatcher.notify_user(0, {"x": 1}) == 0
    assert ws.of_type("notification") == []


async def test_notify_user_without_connections(make_transport) -> None:
    _, dispatcher = _setup()
    assert await dispatcher.notify_user(99, {"x": 1}) == 0


async def test_broadcast_reaches_everyone(make_transport) -> None:
    registry, dispatcher = _setup()
    authed, anonymous = make_transport(), make_transport()
    await registry.register(authed)
    await registry.register(anonymous)
    await registry.authenticate(authed, 1)

    payload = {"action": "created", "task": {"id": 1}}
    assert await dispatcher.broadcast(payload) == 2
    for ws in (authed, anonymous):
        assert ws.of_type("task_update") == [{"type": "task_update", "data": payload}]


async def test_closed_connections_are_skipped_not_pruned(make_transport) -> None:
    registry, dispatcher = _setup()
    open_ws, closed_ws = make_transport(), make_transport()
    await registry.register(open_ws)
    await registry.register(closed_ws)
    closed_ws.client_state = WebSocketState.DISCONNECTED

    assert await dispatcher.broadcast({"action": "deleted"}) == 1
    assert closed_ws.of_type("task_update") == []
    assert await registry.get_connection_count() == 2


async def test_failed_send_does_not_stop_fan_out(make_transport) -> None:
    registry, dispatcher = _setup()
    broken, healthy = make_transport(), make_transport()
    await registry.register(broken)
    await registry.register(healthy)
    broken.fail = True

    assert await dispatcher.broadcast({"action": "updated"}) == 1
    assert len(healthy.of_type("task_update")) == 1
