"""Task API: create, read, lists, filters, mutations and authorization."""

from datetime import timedelta

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import select

from taskboard.infrastructure.persistence.database import get_session_factory
from taskboard.infrastructure.persistence.models import Notification
from taskboard.infrastructure.persistence.repositories import TaskRepository
from taskboard.shared.utils.datetime import utc_now
from tests.conftest import auth_headers


def _body(assigned_to_id: int, **overrides) -> dict:
    body = {
        "title": "Fix bug",
        "description": "Crashes on save",
        "dueDate": (utc_now() + timedelta(days=1)).isoformat(),
        "priority": "high",
        "assignedToId": assigned_to_id,
    }
    body.update(overrides)
    return body


@pytest.fixture
async def team(make_user):
    """alice (creator), bob (assignee), carol (outsider)."""
    return {name: await make_user(name) for name in ("alice", "bob", "carol")}


@pytest.fixture
async def task(client: AsyncClient, team) -> dict:
    response = await client.post(
        "/api/tasks", json=_body(team["bob"].id), headers=auth_headers(team["alice"])
    )
    assert response.status_code == 201
    return response.json()


async def test_create_task(client: AsyncClient, team, task) -> None:
    """Example task: status defaults to todo and bob gets one task_assigned row."""
    assert task["id"] > 0
    assert task["status"] == "todo"
    assert task["createdById"] == team["alice"].id
    assert task["assignedToId"] == team["bob"].id

    async with get_session_factory()() as s:
        rows = (await s.execute(select(Notification))).scalars().all()
    assert [(n.user_id, n.sender_id, n.type.value) for n in rows] == [
        (team["bob"].id, team["alice"].id, "task_assigned")
    ]


async def test_create_requires_auth(client: AsyncClient, team) -> None:
    response = await client.post("/api/tasks", json=_body(team["bob"].id))
    assert response.status_code == 401


async def test_create_validation(client: AsyncClient, team) -> None:
    response = await client.post(
        "/api/tasks",
        json=_body(team["bob"].id, title="ab", description="tiny", priority="urgent"),
        headers=auth_headers(team["alice"]),
    )
    assert response.status_code == 400
    fields = {e["field"] for e in response.json()["errors"]}
    assert fields == {"title", "description", "priority"}


async def test_create_unknown_assignee(client: AsyncClient, team) -> None:
    response = await client.post(
        "/api/tasks", json=_body(9999), headers=auth_headers(team["alice"])
    )
    assert response.status_code == 400
    assert response.json()["errors"] == [
        {"field": "assignedToId", "message": "Assigned user does not exist"}
    ]


async def test_get_task(client: AsyncClient, team, task) -> None:
    headers = auth_headers(team["carol"])
    assert (await client.get(f"/api/tasks/{task['id']}", headers=headers)).json() == task
    missing = await client.get("/api/tasks/9999", headers=headers)
    assert missing.status_code == 404
    assert missing.json() == {"message": "Task not found"}


async def test_lists_include_user_map(client: AsyncClient, team, task) -> None:
    created = await client.get("/api/tasks/created", headers=auth_headers(team["alice"]))
    assigned = await client.get("/api/tasks/assigned", headers=auth_headers(team["bob"]))
    for response in (created, assigned):
        data = response.json()
        assert [t["id"] for t in data["tasks"]] == [task["id"]]
        assert set(data["users"]) == {str(team["alice"].id), str(team["bob"].id)}
        assert data["users"][str(team["bob"].id)]["username"] == "bob"

    none = await client.get("/api/tasks/assigned", headers=auth_headers(team["carol"]))
    assert none.json() == {"tasks": [], "users": {}}


async def test_list_filter_sentinels_and_errors(client: AsyncClient, team, task) -> None:
    headers = auth_headers(team["alice"])
    everything = await client.get(
        "/api/tasks/created",
        params={"status": "all_statuses", "priority": "all_priorities", "dueDate": "all_dates"},
        headers=headers,
    )
    assert len(everything.json()["tasks"]) == 1

    todo_high = await client.get(
        "/api/tasks/created", params={"status": "todo", "priority": "high"}, headers=headers
    )
    assert len(todo_high.json()["tasks"]) == 1

    bad = await client.get("/api/tasks/created", params={"status": "nope"}, headers=headers)
    assert bad.status_code == 400
    assert bad.json()["errors"][0]["field"] == "status"


async def test_overdue_endpoint(client: AsyncClient, team) -> None:
    headers = auth_headers(team["alice"])
    past = (utc_now() - timedelta(days=1)).isoformat()
    late = (
        await client.post("/api/tasks", json=_body(team["bob"].id, dueDate=past), headers=headers)
    ).json()
    await client.post("/api/tasks", json=_body(team["bob"].id), headers=headers)

    # The bucket parameter is ignored on this endpoint.
    response = await client.get(
        "/api/tasks/overdue", params={"dueDate": "next_week"}, headers=headers
    )
    assert [t["id"] for t in response.json()["tasks"]] == [late["id"]]
    bob_view = await client.get("/api/tasks/overdue", headers=auth_headers(team["bob"]))
    assert [t["id"] for t in bob_view.json()["tasks"]] == [late["id"]]


async def test_update_permissions(client: AsyncClient, team, task) -> None:
    url = f"/api/tasks/{task['id']}"
    outsider = await client.patch(url, json={"title": "Hijacked"}, headers=auth_headers(team["carol"]))
    assert outsider.status_code == 403

    by_assignee = await client.patch(
        url, json={"title": "Fix bug today"}, headers=auth_headers(team["bob"])
    )
    assert by_assignee.status_code == 200
    assert by_assignee.json()["title"] == "Fix bug today"
    assert by_assignee.json()["updatedAt"] >= task["updatedAt"]

    reassign_by_assignee = await client.patch(
        url, json={"assignedToId": team["carol"].id}, headers=auth_headers(team["bob"])
    )
    assert reassign_by_assignee.status_code == 403


async def test_status_endpoint(client: AsyncClient, team, task) -> None:
    url = f"/api/tasks/{task['id']}/status"
    assert (
        await client.patch(url, json={"status": "done"}, headers=auth_headers(team["carol"]))
    ).status_code == 403
    response = await client.patch(url, json={"status": "done"}, headers=auth_headers(team["bob"]))
    assert response.status_code == 200
    assert response.json()["status"] == "done"
    bad = await client.patch(url, json={"status": "finished"}, headers=auth_headers(team["bob"]))
    assert bad.status_code == 400


async def test_only_creator_can_reassign(client: AsyncClient, team, task) -> None:
    url = f"/api/tasks/{task['id']}/assignee"
    forbidden = await client.patch(
        url, json={"assigneeId": team["carol"].id}, headers=auth_headers(team["bob"])
    )
    assert forbidden.status_code == 403

    ok = await client.patch(
        url, json={"assigneeId": team["carol"].id}, headers=auth_headers(team["alice"])
    )
    assert ok.status_code == 200
    assert ok.json()["assignedToId"] == team["carol"].id


async def test_only_creator_can_delete(client: AsyncClient, team, task) -> None:
    url = f"/api/tasks/{task['id']}"
    assert (await client.delete(url, headers=auth_headers(team["bob"]))).status_code == 403

    response = await client.delete(url, headers=auth_headers(team["alice"]))
    assert response.status_code == 200
    assert response.json() == {"message": "Task deleted successfully"}
    assert (await client.get(url, headers=auth_headers(team["alice"]))).status_code == 404


async def test_stats(client: AsyncClient, team, task) -> None:
    await client.patch(
        f"/api/tasks/{task['id']}/status", json={"status": "in-progress"},
        headers=auth_headers(team["bob"]),
    )
    stats = await client.get("/api/tasks/stats", headers=auth_headers(team["alice"]))
    assert stats.json() == {"total": 1, "completed": 0, "inProgress": 1, "overdue": 0}

    team_stats = await client.get("/api/team/stats", headers=auth_headers(team["alice"]))
    rows = {r["username"]: r for r in team_stats.json()}
    assert list(rows) == ["alice", "bob", "carol"]
    assert rows["bob"]["totalTasks"] == 1
    assert rows["bob"]["inProgressTasks"] == 1
    assert rows["alice"]["totalTasks"] == 0


async def test_users_directory(client: AsyncClient, team) -> None:
    response = await client.get("/api/users", headers=auth_headers(team["carol"]))
    assert [u["username"] for u in response.json()] == ["alice", "bob", "carol"]
    assert (await client.get("/api/users")).status_code == 401


async def test_unexpected_store_error_surfaces_message(
    db, app, team, monkeypatch
) -> None:
    """A failure below the use case returns 500 with its message and no traceback."""

    async def broken_get_task(self, task_id: int):
        raise RuntimeError("store unavailable")

    monkeypatch.setattr(TaskRepository, "get_task", broken_get_task)
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        response = await ac.get("/api/tasks/1", headers=auth_headers(team["alice"]))

    assert response.status_code == 500
    assert response.json() == {"message": "store unavailable"}
