"""하위 작업/첨부파일 API 테스트.

Subtask and attachment API tests — nested CRUD under a todo, ordering,
toggling and ownership.
"""

import uuid

from httpx import AsyncClient

from tests.conftest import create_todo


def _subtasks_url(todo_id: str) -> str:
    return f"/api/v1/todos/{todo_id}/subtasks"


def _attachments_url(todo_id: str) -> str:
    return f"/api/v1/todos/{todo_id}/attachments"


async def _add_subtask(client: AsyncClient, headers, todo_id: str, title: str) -> dict:
    res = await client.post(_subtasks_url(todo_id), json={"title": title}, headers=headers)
    assert res.status_code == 201, res.text
    return res.json()["data"]


class TestSubtasks:
    """하위 작업 CRUD 테스트."""

    async def test_create_appends(self, client: AsyncClient, headers):
        todo = await create_todo(client, headers)
        first = await _add_subtask(client, headers, todo["id"], "step 1")
        second = await _add_subtask(client, headers, todo["id"], "step 2")
        assert first["ordering"] == 0
        assert second["ordering"] == 1
        assert second["completed"] is False
        assert second["todo_id"] == todo["id"]

    async def test_list_in_order(self, client: AsyncClient, headers):
        todo = await create_todo(client, headers)
        for title in ["a", "b", "c"]:
            await _add_subtask(client, headers, todo["id"], title)
        res = await client.get(_subtasks_url(todo["id"]), headers=headers)
        assert res.status_code == 200
        assert [s["title"] for s in res.json()["data"]] == ["a", "b", "c"]
        assert res.json()["meta"]["total"] == 3

    async def test_counts_on_todo(self, client: AsyncClient, headers):
        """할일 응답에 하위 작업 수가 반영됨."""
        todo = await create_todo(client, headers)
        sub = await _add_subtask(client, headers, todo["id"], "a")
        await _add_subtask(client, headers, todo["id"], "b")
        await client.patch(
            f"{_subtasks_url(todo['id'])}/{sub['id']}/toggle", json={"completed": True}, headers=headers
        )

        res = await client.get(f"/api/v1/todos/{todo['id']}", headers=headers)
        data = res.json()["data"]
        assert data["subtask_count"] == 2
        assert data["completed_subtask_count"] == 1

    async def test_update_title(self, client: AsyncClient, headers):
        todo = await create_todo(client, headers)
        sub = await _add_subtask(client, headers, todo["id"], "draft")
        res = await client.patch(
            f"{_subtasks_url(todo['id'])}/{sub['id']}", json={"title": "final"}, headers=headers
        )
        assert res.status_code == 200
        assert res.json()["data"]["title"] == "final"

    async def test_toggle(self, client: AsyncClient, headers):
        todo = await create_todo(client, headers)
        sub = await _add_subtask(client, headers, todo["id"], "a")
        url = f"{_subtasks_url(todo['id'])}/{sub['id']}/toggle"
        res = await client.patch(url, json={"completed": True}, headers=headers)
        assert res.json()["data"]["completed"] is True
        res = await client.patch(url, json={"completed": False}, headers=headers)
        assert res.json()["data"]["completed"] is False

    async def test_delete(self, client: AsyncClient, headers):
        todo = await create_todo(client, headers)
        sub = await _add_subtask(client, headers, todo["id"], "a")
        res = await client.delete(f"{_subtasks_url(todo['id'])}/{sub['id']}", headers=headers)
        assert res.status_code == 204

        res = await client.get(f"{_subtasks_url(todo['id'])}/{sub['id']}", headers=headers)
        assert res.status_code == 404

    async def test_subtask_under_wrong_todo(self, client: AsyncClient, headers):
        """다른 할일 경로로 접근하면 404."""
        todo = await create_todo(client, headers, title="one")
        other = await create_todo(client, headers, title="two")
        sub = await _add_subtask(client, headers, todo["id"], "a")
        res = await client.get(f"{_subtasks_url(other['id'])}/{sub['id']}", headers=headers)
        assert res.status_code == 404

    async def test_foreign_todo(self, client: AsyncClient, headers, other_headers):
        todo = await create_todo(client, other_headers)
        res = await client.post(_subtasks_url(todo["id"]), json={"title": "sneaky"}, headers=headers)
        assert res.status_code == 403

    async def test_empty_title(self, client: AsyncClient, headers):
        todo = await create_todo(client, headers)
        res = await client.post(_subtasks_url(todo["id"]), json={"title": ""}, headers=headers)
        assert res.status_code == 400


class TestReorderSubtasks:
    """하위 작업 재정렬 테스트."""

    async def test_reorder(self, client: AsyncClient, headers):
        todo = await create_todo(client, headers)
        a = await _add_subtask(client, headers, todo["id"], "a")
        b = await _add_subtask(client, headers, todo["id"], "b")
        c = await _add_subtask(client, headers, todo["id"], "c")

        res = await client.post(
            f"{_subtasks_url(todo['id'])}/reorder",
            json={"subtask_ids": [c["id"], a["id"], b["id"]]},
            headers=headers,
        )
        assert res.status_code == 200
        data = res.json()["data"]
        assert [s["title"] for s in data] == ["c", "a", "b"]
        assert [s["ordering"] for s in data] == [0, 1, 2]

    async def test_reorder_with_subtask_of_other_todo(self, client: AsyncClient, headers):
        todo = await create_todo(client, headers, title="one")
        other = await create_todo(client, headers, title="two")
        stray = await _add_subtask(client, headers, other["id"], "stray")
        res = await client.post(
            f"{_subtasks_url(todo['id'])}/reorder",
            json={"subtask_ids": [stray["id"]]},
            headers=headers,
        )
        assert res.status_code == 403

    async def test_reorder_unknown_subtask(self, client: AsyncClient, headers):
        todo = await create_todo(client, headers)
        res = await client.post(
            f"{_subtasks_url(todo['id'])}/reorder",
            json={"subtask_ids": [str(uuid.uuid4())]},
            headers=headers,
        )
        assert res.status_code == 404


class TestAttachments:
    """첨부파일 메타데이터 테스트."""

    _payload = {
        "file_name": "report.pdf",
        "file_size": 1024,
        "mime_type": "application/pdf",
        "url": "https://files.example.com/report.pdf",
    }

    async def test_create_and_list(self, client: AsyncClient, headers):
        todo = await create_todo(client, headers)
        res = await client.post(_attachments_url(todo["id"]), json=self._payload, headers=headers)
        assert res.status_code == 201
        data = res.json()["data"]
        assert data["file_name"] == "report.pdf"
        assert data["url"] == "https://files.example.com/report.pdf"

        res = await client.get(_attachments_url(todo["id"]), headers=headers)
        assert [a["id"] for a in res.json()["data"]] == [data["id"]]

        todo_res = await client.get(f"/api/v1/todos/{todo['id']}", headers=headers)
        assert todo_res.json()["data"]["attachment_count"] == 1

    async def test_non_positive_size(self, client: AsyncClient, headers):
        todo = await create_todo(client, headers)
        res = await client.post(
            _attachments_url(todo["id"]), json={**self._payload, "file_size": 0}, headers=headers
        )
        assert res.status_code == 400

    async def test_rename_and_clear_url(self, client: AsyncClient, headers):
        todo = await create_todo(client, headers)
        created = (await client.post(_attachments_url(todo["id"]), json=self._payload, headers=headers)).json()["data"]
        res = await client.patch(
            f"{_attachments_url(todo['id'])}/{created['id']}",
            json={"file_name": "final.pdf", "url": None},
            headers=headers,
        )
        assert res.status_code == 200
        data = res.json()["data"]
        assert data["file_name"] == "final.pdf"
        assert data["url"] is None

    async def test_delete(self, client: AsyncClient, headers):
        todo = await create_todo(client, headers)
        created = (await client.post(_attachments_url(todo["id"]), json=self._payload, headers=headers)).json()["data"]
        res = await client.delete(f"{_attachments_url(todo['id'])}/{created['id']}", headers=headers)
        assert res.status_code == 204

        res = await client.get(f"{_attachments_url(todo['id'])}/{created['id']}", headers=headers)
        assert res.status_code == 404

    async def test_foreign_todo(self, client: AsyncClient, headers, other_headers):
        todo = await create_todo(client, other_headers)
        res = await client.get(_attachments_url(todo["id"]), headers=headers)
        assert res.status_code == 403
