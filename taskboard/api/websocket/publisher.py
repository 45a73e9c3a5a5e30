"""Turns committed task mutations into WebSocket envelopes."""

from __future__ import annotations

from taskboard.api.websocket.dispatcher import FanOutDispatcher
from taskboard.application.dtos.notification import LiveNotice
from taskboard.application.dtos.task import TaskResult
from taskboard.domain.enums import TaskAction
from taskboard.schemas.notification import LiveNotificationPayload
from taskboard.schemas.task import TaskResponse
from taskboard.schemas.websocket import TaskUpdatePayload


class TaskEventPublisher:
    """ITaskEventPublisher backed by the fan-out dispatcher."""

    def __init__(self, dispatcher: FanOutDispatcher) -> None:
        self.dispatcher = dispatcher

    async def task_changed(
        self,
        action: TaskAction,
        task: TaskResult,
        notices: list[LiveNotice],
    ) -> None:
        for notice in notices:
            payload = LiveNotificationPayload(
                id=notice.notification_id,
                task_id=notice.task_id,
                title=notice.title,
                message=notice.message,
                type=notice.type,
            )
            await self.dispatcher.notify_user(
                notice.recipient_id, payload.model_dump(mode="json", by_alias=True)
            )
        update = TaskUpdatePayload(action=action, task=TaskResponse.model_validate(task))
        await self.dispatcher.broadcast(update.model_dump(mode="json", by_alias=True))
