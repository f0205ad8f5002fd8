"""일괄 작업 API 테스트.

Bulk operation API tests — every endpoint applies to owned todos only and
reports the rest in ``failed``.
"""

import uuid

from httpx import AsyncClient

from tests.conftest import create_category, create_tag, create_todo

BULK = "/api/v1/bulk/todos"


async def _get(client: AsyncClient, headers, todo_id: str) -> dict:
    res = await client.get(f"/api/v1/todos/{todo_id}", headers=headers)
    return res.json()["data"]


class TestBulkStatus:
    """상태 일괄 변경 테스트."""

    async def test_update_status(self, client: AsyncClient, headers):
        a = await create_todo(client, headers, title="a")
        b = await create_todo(client, headers, title="b")
        res = await client.put(
            f"{BULK}/status", json={"todo_ids": [a["id"], b["id"]], "status": "DONE"}, headers=headers
        )
        assert res.status_code == 200
        assert res.json()["data"] == {"updated": 2, "failed": []}

        for todo_id in (a["id"], b["id"]):
            todo = await _get(client, headers, todo_id)
            assert todo["status"] == "DONE"
            assert todo["completed_at"] is not None

    async def test_foreign_and_missing_ids_fail(self, client: AsyncClient, headers, other_headers):
        """소유하지 않은 ID는 failed로 보고되고 변경되지 않음."""
        mine = await create_todo(client, headers)
        theirs = await create_todo(client, other_headers)
        missing = str(uuid.uuid4())

        res = await client.put(
            f"{BULK}/status",
            json={"todo_ids": [mine["id"], theirs["id"], missing], "status": "IN_PROGRESS"},
            headers=headers,
        )
        data = res.json()["data"]
        assert data["updated"] == 1
        assert sorted(data["failed"]) == sorted([theirs["id"], missing])

        untouched = await _get(client, other_headers, theirs["id"])
        assert untouched["status"] == "TODO"

    async def test_duplicate_ids_counted_once(self, client: AsyncClient, headers):
        todo = await create_todo(client, headers)
        res = await client.put(
            f"{BULK}/status", json={"todo_ids": [todo["id"], todo["id"]], "status": "DONE"}, headers=headers
        )
        assert res.json()["data"]["updated"] == 1

    async def test_empty_ids(self, client: AsyncClient, headers):
        res = await client.put(f"{BULK}/status", json={"todo_ids": [], "status": "DONE"}, headers=headers)
        assert res.status_code == 400

    async def test_logs_completed(self, client: AsyncClient, headers):
        todo = await create_todo(client, headers)
        await client.put(f"{BULK}/status", json={"todo_ids": [todo["id"]], "status": "DONE"}, headers=headers)
        res = await client.get(
            "/api/v1/activity-logs", params={"todo_id": todo["id"], "type": "COMPLETED"}, headers=headers
        )
        assert len(res.json()["data"]) == 1


class TestBulkFields:
    """우선순위/마감일/카테고리 일괄 변경 테스트."""

    async def test_priority(self, client: AsyncClient, headers):
        todo = await create_todo(client, headers)
        res = await client.put(
            f"{BULK}/priority", json={"todo_ids": [todo["id"]], "priority": "URGENT"}, headers=headers
        )
        assert res.json()["data"]["updated"] == 1
        assert (await _get(client, headers, todo["id"]))["priority"] == "URGENT"

    async def test_due_date_set_and_clear(self, client: AsyncClient, headers):
        todo = await create_todo(client, headers)
        await client.put(
            f"{BULK}/due-date", json={"todo_ids": [todo["id"]], "due_date": "2030-06-01T12:00:00Z"}, headers=headers
        )
        assert (await _get(client, headers, todo["id"]))["due_date"].startswith("2030-06-01T12:00:00")

        await client.put(f"{BULK}/due-date", json={"todo_ids": [todo["id"]], "due_date": None}, headers=headers)
        assert (await _get(client, headers, todo["id"]))["due_date"] is None

    async def test_move_to_category(self, client: AsyncClient, headers):
        category = await create_category(client, headers)
        todo = await create_todo(client, headers)
        res = await client.put(
            f"{BULK}/category", json={"todo_ids": [todo["id"]], "category_id": category["id"]}, headers=headers
        )
        assert res.json()["data"]["updated"] == 1
        assert (await _get(client, headers, todo["id"]))["category"]["id"] == category["id"]

    async def test_move_to_foreign_category(self, client: AsyncClient, headers, other_headers):
        category = await create_category(client, other_headers)
        todo = await create_todo(client, headers)
        res = await client.put(
            f"{BULK}/category", json={"todo_ids": [todo["id"]], "category_id": category["id"]}, headers=headers
        )
        assert res.status_code == 404

    async def test_multi_field_update(self, client: AsyncClient, headers):
        todo = await create_todo(client, headers)
        res = await client.put(
            f"{BULK}/update",
            json={"todo_ids": [todo["id"]], "status": "IN_PROGRESS", "priority": "LOW"},
            headers=headers,
        )
        assert res.json()["data"]["updated"] == 1
        updated = await _get(client, headers, todo["id"])
        assert updated["status"] == "IN_PROGRESS"
        assert updated["priority"] == "LOW"

    async def test_multi_field_requires_a_field(self, client: AsyncClient, headers):
        todo = await create_todo(client, headers)
        res = await client.put(f"{BULK}/update", json={"todo_ids": [todo["id"]]}, headers=headers)
        assert res.status_code == 400

    async def test_multi_field_all_null_rejected(self, client: AsyncClient, headers):
        """null만 있는 상태/우선순위는 변경 필드로 인정되지 않음."""
        todo = await create_todo(client, headers)
        res = await client.put(
            f"{BULK}/update", json={"todo_ids": [todo["id"]], "status": None, "priority": None}, headers=headers
        )
        assert res.status_code == 400

        logs = await client.get("/api/v1/activity-logs", params={"todo_id": todo["id"]}, headers=headers)
        assert [log["type"] for log in logs.json()["data"]] == ["CREATED"]

    async def test_multi_field_null_clears_due_date(self, client: AsyncClient, headers):
        todo = await create_todo(client, headers, due_date="2030-06-01T12:00:00Z")
        res = await client.put(f"{BULK}/update", json={"todo_ids": [todo["id"]], "due_date": None}, headers=headers)
        assert res.status_code == 200
        assert res.json()["data"]["updated"] == 1
        assert (await _get(client, headers, todo["id"]))["due_date"] is None


class TestBulkTags:
    """태그 일괄 변경 테스트."""

    async def test_add_remove_replace(self, client: AsyncClient, headers):
        red = await create_tag(client, headers, name="red")
        blue = await create_tag(client, headers, name="blue")
        todo = await create_todo(client, headers, tag_ids=[red["id"]])

        await client.put(
            f"{BULK}/tags", json={"todo_ids": [todo["id"]], "tag_ids": [blue["id"]], "action": "add"}, headers=headers
        )
        assert sorted(t["name"] for t in (await _get(client, headers, todo["id"]))["tags"]) == ["blue", "red"]

        await client.put(
            f"{BULK}/tags", json={"todo_ids": [todo["id"]], "tag_ids": [red["id"]], "action": "remove"}, headers=headers
        )
        assert [t["name"] for t in (await _get(client, headers, todo["id"]))["tags"]] == ["blue"]

        await client.put(
            f"{BULK}/tags", json={"todo_ids": [todo["id"]], "tag_ids": [red["id"]], "action": "replace"}, headers=headers
        )
        assert [t["name"] for t in (await _get(client, headers, todo["id"]))["tags"]] == ["red"]

    async def test_invalid_action(self, client: AsyncClient, headers):
        todo = await create_todo(client, headers)
        res = await client.put(
            f"{BULK}/tags", json={"todo_ids": [todo["id"]], "tag_ids": [], "action": "merge"}, headers=headers
        )
        assert res.status_code == 400


class TestBulkDelete:
    """할일 일괄 삭제 테스트."""

    async def test_delete(self, client: AsyncClient, headers, other_headers):
        a = await create_todo(client, headers, title="a")
        b = await create_todo(client, headers, title="b")
        theirs = await create_todo(client, other_headers)

        res = await client.post(
            f"{BULK}/delete", json={"todo_ids": [a["id"], b["id"], theirs["id"]]}, headers=headers
        )
        assert res.status_code == 200
        assert res.json()["data"] == {"deleted": 2, "failed": [theirs["id"]]}

        listing = await client.get("/api/v1/todos", headers=headers)
        assert listing.json()["data"] == []
        assert (await client.get(f"/api/v1/todos/{theirs['id']}", headers=other_headers)).status_code == 200
