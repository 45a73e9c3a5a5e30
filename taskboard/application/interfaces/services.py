"""Service interfaces (ports) for the application layer."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from taskboard.application.dtos.notification import LiveNotice
    from taskboard.application.dtos.task import TaskResult
    from taskboard.domain.enums import TaskAction


class ITaskEventPublisher(Protocol):
    """Pushes committed task mutations to live clients (best effort)."""

    async def task_changed(
        self,
        action: TaskAction,
        task: TaskResult,
        notices: list[LiveNotice],
    ) -> None:
        """Send each notice to its recipient and broadcast ``{action, task}`` to everyone."""
