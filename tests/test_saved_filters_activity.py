"""저장된 필터 및 활동 로그 API 테스트.

Saved filter and activity log API tests — default-filter exclusivity,
scoped lookups, and the audit trail written by todo mutations.
"""

import uuid

from httpx import AsyncClient

from tests.conftest import create_tag, create_todo

FILTERS = "/api/v1/saved-filters"
LOGS = "/api/v1/activity-logs"


async def _create_filter(client: AsyncClient, headers, name: str, **fields) -> dict:
    res = await client.post(FILTERS, json={"name": name, **fields}, headers=headers)
    assert res.status_code == 201, res.text
    return res.json()["data"]


async def _logs(client: AsyncClient, headers, **params) -> list[dict]:
    res = await client.get(LOGS, params=params, headers=headers)
    assert res.status_code == 200, res.text
    return res.json()["data"]


class TestSavedFilters:
    """저장된 필터 CRUD 테스트."""

    async def test_create(self, client: AsyncClient, headers):
        saved = await _create_filter(client, headers, "Urgent", filters={"priority": "URGENT"})
        assert saved["filters"] == {"priority": "URGENT"}
        assert saved["is_default"] is False

    async def test_single_default(self, client: AsyncClient, headers):
        """기본 필터는 하나만 유지."""
        first = await _create_filter(client, headers, "First", is_default=True)
        second = await _create_filter(client, headers, "Second", is_default=True)

        res = await client.get(FILTERS, headers=headers)
        defaults = {f["id"]: f["is_default"] for f in res.json()["data"]}
        assert defaults == {first["id"]: False, second["id"]: True}

    async def test_update_to_default_clears_others(self, client: AsyncClient, headers):
        first = await _create_filter(client, headers, "First", is_default=True)
        second = await _create_filter(client, headers, "Second")

        res = await client.patch(f"{FILTERS}/{second['id']}", json={"is_default": True}, headers=headers)
        assert res.json()["data"]["is_default"] is True

        res = await client.get(f"{FILTERS}/{first['id']}", headers=headers)
        assert res.json()["data"]["is_default"] is False

    async def test_list_default_first(self, client: AsyncClient, headers):
        await _create_filter(client, headers, "Alpha")
        await _create_filter(client, headers, "Zulu", is_default=True)
        res = await client.get(FILTERS, headers=headers)
        assert [f["name"] for f in res.json()["data"]] == ["Zulu", "Alpha"]

    async def test_foreign_filter_not_found(self, client: AsyncClient, headers, other_headers):
        saved = await _create_filter(client, other_headers, "Theirs")
        res = await client.get(f"{FILTERS}/{saved['id']}", headers=headers)
        assert res.status_code == 404

    async def test_delete(self, client: AsyncClient, headers):
        saved = await _create_filter(client, headers, "Temp")
        res = await client.delete(f"{FILTERS}/{saved['id']}", headers=headers)
        assert res.status_code == 204
        res = await client.get(f"{FILTERS}/{saved['id']}", headers=headers)
        assert res.status_code == 404

    async def test_empty_name(self, client: AsyncClient, headers):
        res = await client.post(FILTERS, json={"name": ""}, headers=headers)
        assert res.status_code == 400


class TestActivityTrail:
    """할일 변경 시 기록되는 활동 로그 테스트."""

    async def test_create_logged(self, client: AsyncClient, headers):
        todo = await create_todo(client, headers, title="Audit me")
        logs = await _logs(client, headers, todo_id=todo["id"])
        assert [log["type"] for log in logs] == ["CREATED"]
        assert logs[0]["changes"] == {"title": "Audit me"}
        assert logs[0]["todo"]["title"] == "Audit me"

    async def test_update_records_from_to(self, client: AsyncClient, headers):
        todo = await create_todo(client, headers, title="Old")
        await client.patch(f"/api/v1/todos/{todo['id']}", json={"title": "New"}, headers=headers)

        logs = await _logs(client, headers, todo_id=todo["id"], type="UPDATED")
        assert logs[0]["changes"] == {"title": {"from": "Old", "to": "New"}}

    async def test_status_change_type(self, client: AsyncClient, headers):
        todo = await create_todo(client, headers)
        await client.patch(f"/api/v1/todos/{todo['id']}", json={"status": "IN_PROGRESS"}, headers=headers)
        logs = await _logs(client, headers, todo_id=todo["id"], type="STATUS_CHANGED")
        assert logs[0]["changes"]["status"] == {"from": "TODO", "to": "IN_PROGRESS"}

    async def test_complete_and_tag_types(self, client: AsyncClient, headers):
        tag = await create_tag(client, headers)
        todo = await create_todo(client, headers)
        await client.post(f"/api/v1/todos/{todo['id']}/complete", headers=headers)
        await client.post(f"/api/v1/todos/{todo['id']}/tags/{tag['id']}", headers=headers)

        types = {log["type"] for log in await _logs(client, headers, todo_id=todo["id"])}
        assert types == {"CREATED", "COMPLETED", "TAGGED"}

    async def test_delete_keeps_log(self, client: AsyncClient, headers):
        """할일 삭제 후에도 DELETED 로그는 남음."""
        todo = await create_todo(client, headers, title="Gone soon")
        await client.delete(f"/api/v1/todos/{todo['id']}", headers=headers)

        logs = await _logs(client, headers, type="DELETED")
        assert len(logs) == 1
        assert logs[0]["changes"] == {"title": "Gone soon"}
        assert logs[0]["todo"] is None

    async def test_only_own_logs(self, client: AsyncClient, headers, other_headers):
        await create_todo(client, other_headers)
        assert await _logs(client, headers) == []

    async def test_pagination_meta(self, client: AsyncClient, headers):
        for i in range(3):
            await create_todo(client, headers, title=f"t{i}")
        res = await client.get(LOGS, params={"limit": 2}, headers=headers)
        body = res.json()
        assert body["meta"]["total"] == 3
        assert body["meta"]["pages"] == 2
        assert len(body["data"]) == 2

    async def test_invalid_type_filter(self, client: AsyncClient, headers):
        res = await client.get(LOGS, params={"type": "EXPLODED"}, headers=headers)
        assert res.status_code == 400


class TestManualActivity:
    """수동 활동 로그 생성 테스트."""

    async def test_log_for_owned_todo(self, client: AsyncClient, headers):
        todo = await create_todo(client, headers)
        res = await client.post(
            LOGS, json={"todo_id": todo["id"], "type": "UPDATED", "changes": {"note": "synced"}}, headers=headers
        )
        assert res.status_code == 201
        data = res.json()["data"]
        assert data["type"] == "UPDATED"
        assert data["changes"] == {"note": "synced"}

    async def test_log_for_foreign_todo(self, client: AsyncClient, headers, other_headers):
        todo = await create_todo(client, other_headers)
        res = await client.post(LOGS, json={"todo_id": todo["id"], "type": "UPDATED"}, headers=headers)
        assert res.status_code == 404

    async def test_log_for_missing_todo(self, client: AsyncClient, headers):
        res = await client.post(LOGS, json={"todo_id": str(uuid.uuid4()), "type": "UPDATED"}, headers=headers)
        assert res.status_code == 404
