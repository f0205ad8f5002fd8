"""검색/분석 API 테스트.

Search and analytics API tests — relevance ranking, filters, label name
search, summary statistics and productivity streaks.
"""

from datetime import date, datetime, timedelta, timezone

from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.todo import Todo
from app.models.user import User
from app.services.analytics_service import _current_streak, _longest_streak
from tests.conftest import create_category, create_tag, create_todo

SEARCH = "/api/v1/search"
ANALYTICS = "/api/v1/analytics"


class TestTodoSearch:
    """할일 검색 테스트."""

    async def test_relevance_order(self, client: AsyncClient, headers):
        """정확 일치 > 제목 포함 > 설명 포함 순서."""
        await create_todo(client, headers, title="Notes", description="budget review")
        await create_todo(client, headers, title="Budget planning")
        await create_todo(client, headers, title="Budget")
        await create_todo(client, headers, title="Unrelated")

        res = await client.get(f"{SEARCH}/todos", params={"q": "budget"}, headers=headers)
        assert res.status_code == 200
        data = res.json()["data"]
        assert [t["title"] for t in data] == ["Budget", "Budget planning", "Notes"]
        assert [t["relevance_score"] for t in data] == [30, 10, 5]
        assert res.json()["meta"]["total"] == 3

    async def test_priority_breaks_ties(self, client: AsyncClient, headers):
        await create_todo(client, headers, title="Call plumber", priority="LOW")
        await create_todo(client, headers, title="Call bank", priority="URGENT")
        res = await client.get(f"{SEARCH}/todos", params={"q": "call"}, headers=headers)
        assert [t["title"] for t in res.json()["data"]] == ["Call bank", "Call plumber"]

    async def test_counts_included(self, client: AsyncClient, headers):
        todo = await create_todo(client, headers, title="Pack boxes")
        await client.post(f"/api/v1/todos/{todo['id']}/subtasks", json={"title": "tape"}, headers=headers)
        res = await client.get(f"{SEARCH}/todos", params={"q": "pack"}, headers=headers)
        counts = res.json()["data"][0]["counts"]
        assert counts == {"subtasks": 1, "attachments": 0, "reminders": 0}

    async def test_filters(self, client: AsyncClient, headers):
        category = await create_category(client, headers)
        tag = await create_tag(client, headers)
        await create_todo(client, headers, title="Report A", category_id=category["id"], tag_ids=[tag["id"]])
        await create_todo(client, headers, title="Report B", status="DONE")

        res = await client.get(
            f"{SEARCH}/todos", params={"q": "report", "category_id": category["id"]}, headers=headers
        )
        assert [t["title"] for t in res.json()["data"]] == ["Report A"]

        res = await client.get(f"{SEARCH}/todos", params={"q": "report", "tag_ids": tag["id"]}, headers=headers)
        assert [t["title"] for t in res.json()["data"]] == ["Report A"]

        res = await client.get(f"{SEARCH}/todos", params={"q": "report", "status": "DONE"}, headers=headers)
        assert [t["title"] for t in res.json()["data"]] == ["Report B"]

    async def test_only_own(self, client: AsyncClient, headers, other_headers):
        await create_todo(client, other_headers, title="Secret plan")
        res = await client.get(f"{SEARCH}/todos", params={"q": "plan"}, headers=headers)
        assert res.json()["data"] == []

    async def test_percent_matches_literally(self, client: AsyncClient, headers):
        await create_todo(client, headers, title="Reach 100% coverage")
        await create_todo(client, headers, title="Buy milk")
        res = await client.get(f"{SEARCH}/todos", params={"q": "%"}, headers=headers)
        assert [t["title"] for t in res.json()["data"]] == ["Reach 100% coverage"]

    async def test_underscore_matches_literally(self, client: AsyncClient, headers):
        await create_todo(client, headers, title="rename user_id column")
        await create_todo(client, headers, title="rename userXid later")
        res = await client.get(f"{SEARCH}/todos", params={"q": "user_id"}, headers=headers)
        assert [t["title"] for t in res.json()["data"]] == ["rename user_id column"]

    async def test_blank_query(self, client: AsyncClient, headers):
        res = await client.get(f"{SEARCH}/todos", params={"q": "   "}, headers=headers)
        assert res.status_code == 400
        assert res.json()["kind"] == "validation_error"

    async def test_missing_query(self, client: AsyncClient, headers):
        res = await client.get(f"{SEARCH}/todos", headers=headers)
        assert res.status_code == 400


class TestLabelSearch:
    """태그/카테고리 이름 검색 테스트."""

    async def test_search_tags(self, client: AsyncClient, headers):
        await create_tag(client, headers, name="work-urgent")
        await create_tag(client, headers, name="home")
        res = await client.get(f"{SEARCH}/tags", params={"q": "URG"}, headers=headers)
        assert [t["name"] for t in res.json()["data"]] == ["work-urgent"]
        assert res.json()["meta"]["total"] == 1

    async def test_wildcards_in_tag_search(self, client: AsyncClient, headers):
        await create_tag(client, headers, name="50%")
        await create_tag(client, headers, name="500")
        res = await client.get(f"{SEARCH}/tags", params={"q": "0%"}, headers=headers)
        assert [t["name"] for t in res.json()["data"]] == ["50%"]

    async def test_search_categories(self, client: AsyncClient, headers):
        await create_category(client, headers, name="Personal")
        await create_category(client, headers, name="Work")
        res = await client.get(f"{SEARCH}/categories", params={"q": "pers"}, headers=headers)
        assert [c["name"] for c in res.json()["data"]] == ["Personal"]


class TestAnalyticsSummary:
    """분석 요약 테스트."""

    async def test_empty(self, client: AsyncClient, headers):
        res = await client.get(f"{ANALYTICS}/summary", headers=headers)
        assert res.status_code == 200
        data = res.json()["data"]
        assert data["overview"]["total_todos"] == 0
        assert data["overview"]["completion_rate"] == 0.0
        assert data["distribution"]["by_status"] == {"TODO": 0, "IN_PROGRESS": 0, "DONE": 0, "CANCELLED": 0}
        assert len(data["trends"]["completion_trend"]) == 30

    async def test_counts(self, client: AsyncClient, headers):
        category = await create_category(client, headers)
        await create_todo(client, headers, status="DONE", priority="HIGH", category_id=category["id"])
        await create_todo(client, headers, priority="HIGH", due_date="2000-01-01T00:00:00Z")
        await create_todo(client, headers, status="CANCELLED", due_date="2000-01-01T00:00:00Z")
        await create_todo(client, headers)

        data = (await client.get(f"{ANALYTICS}/summary", headers=headers)).json()["data"]
        overview = data["overview"]
        assert overview["total_todos"] == 4
        assert overview["completed_todos"] == 1
        assert overview["overdue_todos"] == 1
        assert overview["completion_rate"] == 25.0
        assert overview["created_this_year"] == 4

        distribution = data["distribution"]
        assert distribution["by_status"]["DONE"] == 1
        assert distribution["by_priority"]["HIGH"] == 2
        by_category = {c["name"]: c["count"] for c in distribution["by_category"]}
        assert by_category == {None: 3, "Work": 1}

        today = datetime.now(timezone.utc).date().isoformat()
        trend = data["trends"]["completion_trend"]
        assert trend[-1] == {"date": today, "count": 1}


async def _completed_todo(db: AsyncSession, user: User, completed_at: datetime, hours: float = 2) -> None:
    db.add(Todo(
        user_id=user.id,
        title="done",
        status="DONE",
        priority="MEDIUM",
        created_at=completed_at - timedelta(hours=hours),
        completed_at=completed_at,
    ))
    await db.commit()


class TestProductivity:
    """생산성 지표 테스트."""

    async def test_empty(self, client: AsyncClient, headers):
        res = await client.get(f"{ANALYTICS}/productivity", headers=headers)
        data = res.json()["data"]
        assert data == {
            "completed_last_week": 0,
            "completed_last_month": 0,
            "avg_completion_time_hours": 0.0,
            "current_streak": 0,
            "longest_streak": 0,
        }

    async def test_metrics(self, client: AsyncClient, db: AsyncSession, user, headers):
        now = datetime.now(timezone.utc)
        await _completed_todo(db, user, now, hours=2)
        await _completed_todo(db, user, now - timedelta(days=1), hours=4)
        await _completed_todo(db, user, now - timedelta(days=20), hours=6)

        data = (await client.get(f"{ANALYTICS}/productivity", headers=headers)).json()["data"]
        assert data["completed_last_week"] == 2
        assert data["completed_last_month"] == 3
        assert data["avg_completion_time_hours"] == 4.0
        assert data["current_streak"] == 2
        assert data["longest_streak"] == 2


class TestStreakHelpers:
    """연속 완료 일수 계산 테스트."""

    today = date(2024, 3, 10)

    def test_current_streak_from_today(self):
        days = {self.today, self.today - timedelta(days=1), self.today - timedelta(days=2)}
        assert _current_streak(days, self.today) == 3

    def test_current_streak_from_yesterday(self):
        days = {self.today - timedelta(days=1), self.today - timedelta(days=2)}
        assert _current_streak(days, self.today) == 2

    def test_current_streak_broken(self):
        assert _current_streak({self.today - timedelta(days=2)}, self.today) == 0

    def test_longest_streak(self):
        days = {date(2024, 1, 1), date(2024, 1, 2), date(2024, 1, 5), date(2024, 1, 6), date(2024, 1, 7)}
        assert _longest_streak(days) == 3
        assert _longest_streak(set()) == 0
