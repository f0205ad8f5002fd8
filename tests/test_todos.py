"""할일 API 테스트 — CRUD, 필터/정렬/페이지네이션, 완료 처리, 복제, 태그 연결, 소유권.

Todo API tests — CRUD, filtering/sorting/pagination, completion,
duplication, tag links and ownership checks.
"""

import uuid

from httpx import AsyncClient

from tests.conftest import create_category, create_tag, create_todo

TODOS = "/api/v1/todos"


class TestCreateTodo:
    """할일 생성 테스트."""

    async def test_create_minimal(self, client: AsyncClient, headers):
        """제목만으로 생성 — 기본값 적용."""
        res = await client.post(TODOS, json={"title": "Buy milk"}, headers=headers)
        assert res.status_code == 201
        data = res.json()["data"]
        assert data["title"] == "Buy milk"
        assert data["description"] == ""
        assert data["status"] == "TODO"
        assert data["priority"] == "MEDIUM"
        assert data["completed_at"] is None
        assert data["tags"] == []
        assert data["subtasks"] == []
        assert data["recurrence_rule"] is None

    async def test_create_with_category_and_tags(self, client: AsyncClient, headers):
        category = await create_category(client, headers)
        tag = await create_tag(client, headers)
        data = await create_todo(
            client, headers,
            title="Quarterly report",
            priority="HIGH",
            due_date="2030-01-15T12:00:00Z",
            category_id=category["id"],
            tag_ids=[tag["id"]],
        )
        assert data["category"]["name"] == "Work"
        assert [t["name"] for t in data["tags"]] == ["urgent"]
        assert data["due_date"].startswith("2030-01-15T12:00:00")

    async def test_create_done_sets_completed_at(self, client: AsyncClient, headers):
        data = await create_todo(client, headers, status="DONE")
        assert data["completed_at"] is not None

    async def test_create_empty_title(self, client: AsyncClient, headers):
        res = await client.post(TODOS, json={"title": ""}, headers=headers)
        assert res.status_code == 400
        assert res.json()["kind"] == "validation_error"

    async def test_create_invalid_status(self, client: AsyncClient, headers):
        res = await client.post(TODOS, json={"title": "x", "status": "WAITING"}, headers=headers)
        assert res.status_code == 400

    async def test_create_with_unknown_category(self, client: AsyncClient, headers):
        res = await client.post(
            TODOS, json={"title": "x", "category_id": str(uuid.uuid4())}, headers=headers
        )
        assert res.status_code == 404

    async def test_create_with_foreign_tag(self, client: AsyncClient, headers, other_headers):
        """다른 사용자의 태그는 찾을 수 없음."""
        tag = await create_tag(client, other_headers, name="theirs")
        res = await client.post(TODOS, json={"title": "x", "tag_ids": [tag["id"]]}, headers=headers)
        assert res.status_code == 404


class TestGetTodo:
    """할일 조회 테스트."""

    async def test_get_detail(self, client: AsyncClient, headers):
        todo = await create_todo(client, headers)
        res = await client.get(f"{TODOS}/{todo['id']}", headers=headers)
        assert res.status_code == 200
        data = res.json()["data"]
        assert data["id"] == todo["id"]
        assert "subtasks" in data and "attachments" in data and "reminders" in data

    async def test_get_not_found(self, client: AsyncClient, headers):
        res = await client.get(f"{TODOS}/{uuid.uuid4()}", headers=headers)
        assert res.status_code == 404
        assert res.json()["kind"] == "not_found"

    async def test_get_foreign_todo_forbidden(self, client: AsyncClient, headers, other_headers):
        """다른 사용자의 할일은 403."""
        todo = await create_todo(client, other_headers)
        res = await client.get(f"{TODOS}/{todo['id']}", headers=headers)
        assert res.status_code == 403
        assert res.json()["kind"] == "forbidden"

    async def test_invalid_uuid(self, client: AsyncClient, headers):
        res = await client.get(f"{TODOS}/not-a-uuid", headers=headers)
        assert res.status_code == 400


class TestListTodos:
    """할일 목록 테스트."""

    async def test_list_only_own(self, client: AsyncClient, headers, other_headers):
        await create_todo(client, headers, title="mine")
        await create_todo(client, other_headers, title="theirs")
        res = await client.get(TODOS, headers=headers)
        assert res.status_code == 200
        body = res.json()
        assert [t["title"] for t in body["data"]] == ["mine"]
        assert body["meta"]["total"] == 1

    async def test_pagination_meta(self, client: AsyncClient, headers):
        for i in range(5):
            await create_todo(client, headers, title=f"todo {i}")
        res = await client.get(TODOS, params={"page": 2, "limit": 2}, headers=headers)
        meta = res.json()["meta"]
        assert meta == {"total": 5, "page": 2, "limit": 2, "pages": 3}
        assert len(res.json()["data"]) == 2

    async def test_filter_by_status_and_priority(self, client: AsyncClient, headers):
        await create_todo(client, headers, title="a", status="DONE", priority="HIGH")
        await create_todo(client, headers, title="b", status="TODO", priority="HIGH")
        await create_todo(client, headers, title="c", status="DONE", priority="LOW")
        res = await client.get(TODOS, params={"status": "DONE", "priority": "HIGH"}, headers=headers)
        assert [t["title"] for t in res.json()["data"]] == ["a"]

    async def test_filter_by_tag(self, client: AsyncClient, headers):
        tag = await create_tag(client, headers)
        await create_todo(client, headers, title="tagged", tag_ids=[tag["id"]])
        await create_todo(client, headers, title="plain")
        res = await client.get(TODOS, params={"tag_id": tag["id"]}, headers=headers)
        assert [t["title"] for t in res.json()["data"]] == ["tagged"]

    async def test_filter_by_due_range(self, client: AsyncClient, headers):
        await create_todo(client, headers, title="jan", due_date="2030-01-10T00:00:00Z")
        await create_todo(client, headers, title="mar", due_date="2030-03-10T00:00:00Z")
        res = await client.get(
            TODOS,
            params={"due_date_from": "2030-01-01T00:00:00Z", "due_date_to": "2030-01-31T00:00:00Z"},
            headers=headers,
        )
        assert [t["title"] for t in res.json()["data"]] == ["jan"]

    async def test_search_title_and_description(self, client: AsyncClient, headers):
        await create_todo(client, headers, title="Plan trip")
        await create_todo(client, headers, title="Groceries", description="plan meals")
        await create_todo(client, headers, title="Other")
        res = await client.get(TODOS, params={"search": "plan"}, headers=headers)
        assert sorted(t["title"] for t in res.json()["data"]) == ["Groceries", "Plan trip"]

    async def test_search_wildcards_literal(self, client: AsyncClient, headers):
        await create_todo(client, headers, title="Save 20% on rent")
        await create_todo(client, headers, title="file_a.txt")
        await create_todo(client, headers, title="fileXa.txt")
        res = await client.get(TODOS, params={"search": "%"}, headers=headers)
        assert [t["title"] for t in res.json()["data"]] == ["Save 20% on rent"]
        res = await client.get(TODOS, params={"search": "file_a"}, headers=headers)
        assert [t["title"] for t in res.json()["data"]] == ["file_a.txt"]

    async def test_sort_by_priority(self, client: AsyncClient, headers):
        await create_todo(client, headers, title="low", priority="LOW")
        await create_todo(client, headers, title="urgent", priority="URGENT")
        await create_todo(client, headers, title="medium", priority="MEDIUM")
        res = await client.get(TODOS, params={"sort_by": "priority", "sort_order": "desc"}, headers=headers)
        assert [t["title"] for t in res.json()["data"]] == ["urgent", "medium", "low"]

    async def test_sort_by_title_asc(self, client: AsyncClient, headers):
        for title in ["b", "c", "a"]:
            await create_todo(client, headers, title=title)
        res = await client.get(TODOS, params={"sort_by": "title", "sort_order": "asc"}, headers=headers)
        assert [t["title"] for t in res.json()["data"]] == ["a", "b", "c"]

    async def test_invalid_sort_field(self, client: AsyncClient, headers):
        res = await client.get(TODOS, params={"sort_by": "color"}, headers=headers)
        assert res.status_code == 400


class TestUpdateTodo:
    """할일 수정 테스트."""

    async def test_partial_update(self, client: AsyncClient, headers):
        todo = await create_todo(client, headers, description="keep me")
        res = await client.patch(f"{TODOS}/{todo['id']}", json={"title": "Renamed"}, headers=headers)
        assert res.status_code == 200
        data = res.json()["data"]
        assert data["title"] == "Renamed"
        assert data["description"] == "keep me"

    async def test_status_done_sets_completed_at(self, client: AsyncClient, headers):
        todo = await create_todo(client, headers)
        res = await client.patch(f"{TODOS}/{todo['id']}", json={"status": "DONE"}, headers=headers)
        assert res.json()["data"]["completed_at"] is not None

        res = await client.patch(f"{TODOS}/{todo['id']}", json={"status": "IN_PROGRESS"}, headers=headers)
        assert res.json()["data"]["completed_at"] is None

    async def test_null_category_detaches(self, client: AsyncClient, headers):
        category = await create_category(client, headers)
        todo = await create_todo(client, headers, category_id=category["id"])
        res = await client.patch(f"{TODOS}/{todo['id']}", json={"category_id": None}, headers=headers)
        data = res.json()["data"]
        assert data["category_id"] is None
        assert data["category"] is None

    async def test_tag_ids_replace_set(self, client: AsyncClient, headers):
        first = await create_tag(client, headers, name="first")
        second = await create_tag(client, headers, name="second")
        todo = await create_todo(client, headers, tag_ids=[first["id"]])
        res = await client.patch(f"{TODOS}/{todo['id']}", json={"tag_ids": [second["id"]]}, headers=headers)
        assert [t["name"] for t in res.json()["data"]["tags"]] == ["second"]

    async def test_null_title_ignored(self, client: AsyncClient, headers):
        todo = await create_todo(client, headers, title="Stays")
        res = await client.patch(f"{TODOS}/{todo['id']}", json={"title": None}, headers=headers)
        assert res.status_code == 200
        assert res.json()["data"]["title"] == "Stays"

    async def test_update_foreign_todo(self, client: AsyncClient, headers, other_headers):
        todo = await create_todo(client, other_headers)
        res = await client.patch(f"{TODOS}/{todo['id']}", json={"title": "hijack"}, headers=headers)
        assert res.status_code == 403


class TestDeleteTodo:
    """할일 삭제 테스트."""

    async def test_delete(self, client: AsyncClient, headers):
        todo = await create_todo(client, headers)
        res = await client.delete(f"{TODOS}/{todo['id']}", headers=headers)
        assert res.status_code == 204
        assert res.content == b""

        again = await client.get(f"{TODOS}/{todo['id']}", headers=headers)
        assert again.status_code == 404

    async def test_delete_cascades_children(self, client: AsyncClient, headers):
        todo = await create_todo(client, headers)
        await client.post(f"{TODOS}/{todo['id']}/subtasks", json={"title": "step"}, headers=headers)
        await client.delete(f"{TODOS}/{todo['id']}", headers=headers)

        res = await client.get(f"{TODOS}/{todo['id']}/subtasks", headers=headers)
        assert res.status_code == 404

    async def test_delete_foreign(self, client: AsyncClient, headers, other_headers):
        todo = await create_todo(client, other_headers)
        res = await client.delete(f"{TODOS}/{todo['id']}", headers=headers)
        assert res.status_code == 403


class TestCompletion:
    """완료/미완료 처리 테스트."""

    async def test_complete_and_incomplete(self, client: AsyncClient, headers):
        todo = await create_todo(client, headers)
        res = await client.post(f"{TODOS}/{todo['id']}/complete", headers=headers)
        assert res.status_code == 200
        data = res.json()["data"]
        assert data["status"] == "DONE"
        assert data["completed_at"] is not None

        res = await client.post(f"{TODOS}/{todo['id']}/incomplete", headers=headers)
        data = res.json()["data"]
        assert data["status"] == "TODO"
        assert data["completed_at"] is None


class TestDuplicate:
    """할일 복제 테스트."""

    async def test_duplicate_with_tags_and_subtasks(self, client: AsyncClient, headers):
        tag = await create_tag(client, headers)
        todo = await create_todo(client, headers, title="Original", tag_ids=[tag["id"]])
        await client.post(f"{TODOS}/{todo['id']}/subtasks", json={"title": "step 1"}, headers=headers)

        res = await client.post(f"{TODOS}/{todo['id']}/duplicate", headers=headers)
        assert res.status_code == 201
        copy = res.json()["data"]
        assert copy["id"] != todo["id"]
        assert copy["title"] == "Original (copy)"
        assert [t["id"] for t in copy["tags"]] == [tag["id"]]
        assert [s["title"] for s in copy["subtasks"]] == ["step 1"]

    async def test_duplicate_without_tags_or_subtasks(self, client: AsyncClient, headers):
        tag = await create_tag(client, headers)
        todo = await create_todo(client, headers, tag_ids=[tag["id"]])
        await client.post(f"{TODOS}/{todo['id']}/subtasks", json={"title": "step"}, headers=headers)

        res = await client.post(
            f"{TODOS}/{todo['id']}/duplicate",
            json={"include_tags": False, "include_subtasks": False},
            headers=headers,
        )
        copy = res.json()["data"]
        assert copy["tags"] == []
        assert copy["subtasks"] == []


class TestTodoTags:
    """할일 태그 연결 테스트."""

    async def test_add_tag_idempotent(self, client: AsyncClient, headers):
        tag = await create_tag(client, headers)
        todo = await create_todo(client, headers)
        url = f"{TODOS}/{todo['id']}/tags/{tag['id']}"
        await client.post(url, headers=headers)
        res = await client.post(url, headers=headers)
        assert res.status_code == 200
        assert len(res.json()["data"]["tags"]) == 1

    async def test_remove_tag(self, client: AsyncClient, headers):
        tag = await create_tag(client, headers)
        todo = await create_todo(client, headers, tag_ids=[tag["id"]])
        res = await client.delete(f"{TODOS}/{todo['id']}/tags/{tag['id']}", headers=headers)
        assert res.status_code == 200
        assert res.json()["data"]["tags"] == []

    async def test_add_foreign_tag(self, client: AsyncClient, headers, other_headers):
        tag = await create_tag(client, other_headers, name="theirs")
        todo = await create_todo(client, headers)
        res = await client.post(f"{TODOS}/{todo['id']}/tags/{tag['id']}", headers=headers)
        assert res.status_code == 403
