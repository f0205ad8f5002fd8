"""사용자 프로필 및 환경설정 API 테스트.

User profile and preferences API tests — profile read/update, preference
merge, view preferences, todo defaults and working hours.
"""

from datetime import datetime, timezone

from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user import User
from app.services.user_preferences_service import user_preferences_service

USERS = "/api/v1/users"
PREFS = "/api/v1/preferences"


class TestProfile:
    """프로필 조회/수정 테스트."""

    async def test_get_profile(self, client: AsyncClient, user, headers):
        res = await client.get(f"{USERS}/profile", headers=headers)
        assert res.status_code == 200
        data = res.json()["data"]
        assert data["id"] == str(user.id)
        assert data["email"] == "alice@example.com"
        assert "password_hash" not in data

    async def test_update_profile_partial(self, client: AsyncClient, headers):
        """제공된 필드만 변경."""
        res = await client.patch(f"{USERS}/profile", json={"display_name": "Alice B."}, headers=headers)
        assert res.status_code == 200
        data = res.json()["data"]
        assert data["display_name"] == "Alice B."
        assert data["timezone"] == "UTC"

    async def test_update_profile_invalid_timezone(self, client: AsyncClient, headers):
        res = await client.patch(f"{USERS}/profile", json={"timezone": "Nowhere/City"}, headers=headers)
        assert res.status_code == 400

    async def test_update_profile_settings(self, client: AsyncClient, headers):
        """프로필 설정은 환경설정 규칙으로 검증 후 저장."""
        res = await client.patch(
            f"{USERS}/profile",
            json={"settings": {"default_priority": "HIGH", "work_hours_start": "08:00"}},
            headers=headers,
        )
        assert res.status_code == 200
        assert res.json()["data"]["settings"] == {"default_priority": "HIGH", "work_hours_start": "08:00"}

        hours = (await client.get(f"{PREFS}/working-hours", headers=headers)).json()["data"]
        assert hours["start"] == "08:00"

        todo = await client.post("/api/v1/todos", json={"title": "x"}, headers=headers)
        assert todo.json()["data"]["priority"] == "HIGH"

    async def test_update_profile_settings_bad_hours(self, client: AsyncClient, headers):
        res = await client.patch(
            f"{USERS}/profile", json={"settings": {"work_hours_start": "9am"}}, headers=headers
        )
        assert res.status_code == 400
        assert res.json()["kind"] == "validation_error"

        hours = await client.get(f"{PREFS}/working-hours", headers=headers)
        assert hours.status_code == 200
        assert hours.json()["data"]["start"] == "09:00"

    async def test_update_profile_settings_bad_priority(self, client: AsyncClient, headers):
        res = await client.patch(
            f"{USERS}/profile", json={"settings": {"default_priority": "BOGUS"}}, headers=headers
        )
        assert res.status_code == 400

        todo = await client.post("/api/v1/todos", json={"title": "x"}, headers=headers)
        assert todo.json()["data"]["priority"] == "MEDIUM"

    async def test_update_profile_settings_timezone(self, client: AsyncClient, headers):
        """설정 안의 시간대는 계정 시간대로 반영."""
        res = await client.patch(
            f"{USERS}/profile", json={"settings": {"timezone": "Asia/Seoul"}}, headers=headers
        )
        data = res.json()["data"]
        assert data["timezone"] == "Asia/Seoul"
        assert "timezone" not in data["settings"]


class TestPreferences:
    """환경설정 조회/수정 테스트."""

    async def test_defaults_when_nothing_stored(self, client: AsyncClient, headers):
        """저장된 설정이 없으면 기본값."""
        res = await client.get(PREFS, headers=headers)
        assert res.status_code == 200
        prefs = res.json()["data"]["preferences"]
        assert prefs["default_priority"] == "MEDIUM"
        assert prefs["theme"] == "system"
        assert prefs["work_days"] == [1, 2, 3, 4, 5]

    async def test_update_merges_keys(self, client: AsyncClient, headers):
        """변경한 키만 덮어쓰고 나머지는 유지."""
        await client.patch(PREFS, json={"theme": "dark"}, headers=headers)
        res = await client.patch(PREFS, json={"default_priority": "HIGH"}, headers=headers)
        assert res.status_code == 200
        prefs = res.json()["data"]["preferences"]
        assert prefs["theme"] == "dark"
        assert prefs["default_priority"] == "HIGH"
        assert prefs["time_format"] == "12h"

    async def test_timezone_updates_user(self, client: AsyncClient, headers):
        """환경설정의 시간대는 계정 시간대를 변경."""
        res = await client.patch(PREFS, json={"timezone": "Asia/Seoul"}, headers=headers)
        assert res.json()["data"]["timezone"] == "Asia/Seoul"

        profile = await client.get(f"{USERS}/profile", headers=headers)
        assert profile.json()["data"]["timezone"] == "Asia/Seoul"

    async def test_invalid_value_rejected(self, client: AsyncClient, headers):
        res = await client.patch(PREFS, json={"theme": "neon"}, headers=headers)
        assert res.status_code == 400

    async def test_default_priority_applied_to_new_todo(self, client: AsyncClient, headers):
        """우선순위 미지정 할일은 기본 우선순위를 사용."""
        await client.patch(PREFS, json={"default_priority": "LOW"}, headers=headers)
        res = await client.post("/api/v1/todos", json={"title": "Call mom"}, headers=headers)
        assert res.json()["data"]["priority"] == "LOW"


class TestViewPreferences:
    """보기 설정 테스트."""

    async def test_default_view_preference(self, client: AsyncClient, headers):
        res = await client.get(f"{PREFS}/views/BOARD", headers=headers)
        assert res.status_code == 200
        data = res.json()["data"]
        assert data["filters"] == {}
        assert data["sorting"] == {"sort_by": "created_at", "sort_order": "desc"}

    async def test_upsert_view_preference(self, client: AsyncClient, headers):
        body = {"filters": {"status": "TODO"}, "sorting": {"sort_by": "due_date", "sort_order": "asc"}}
        res = await client.put(f"{PREFS}/views/LIST", json=body, headers=headers)
        assert res.status_code == 200

        body["filters"] = {"priority": "HIGH"}
        await client.put(f"{PREFS}/views/LIST", json=body, headers=headers)

        res = await client.get(f"{PREFS}/views/LIST", headers=headers)
        assert res.json()["data"]["filters"] == {"priority": "HIGH"}

    async def test_unknown_view_type(self, client: AsyncClient, headers):
        res = await client.get(f"{PREFS}/views/GANTT", headers=headers)
        assert res.status_code == 400


class TestTodoDefaults:
    """할일 기본값 테스트."""

    async def test_todo_defaults(self, client: AsyncClient, headers):
        res = await client.get(f"{PREFS}/todo-defaults", headers=headers)
        assert res.status_code == 200
        data = res.json()["data"]
        assert data["priority"] == "MEDIUM"
        assert data["reminder_lead_time"] == 15
        assert data["reminder_channel"] == "IN_APP"
        assert data["category_id"] is None
        assert data["tag_ids"] == []


class TestWorkingHours:
    """근무 시간 계산 테스트 (서비스 단위)."""

    def _user(self, tz: str = "UTC", **settings) -> User:
        return User(email="wh@example.com", display_name="WH", timezone=tz, settings=settings)

    def test_inside_working_hours(self):
        # 2024-01-03 은 수요일 (Wednesday)
        at = datetime(2024, 1, 3, 10, 0, tzinfo=timezone.utc)
        result = user_preferences_service.get_working_hours(self._user(), at)
        assert result.is_working_now is True

    def test_end_is_exclusive(self):
        at = datetime(2024, 1, 3, 17, 0, tzinfo=timezone.utc)
        result = user_preferences_service.get_working_hours(self._user(), at)
        assert result.is_working_now is False

    def test_weekend(self):
        # 2024-01-07 은 일요일 (Sunday = 0)
        at = datetime(2024, 1, 7, 10, 0, tzinfo=timezone.utc)
        result = user_preferences_service.get_working_hours(self._user(), at)
        assert result.is_working_now is False

    def test_user_timezone_applied(self):
        """UTC 01:00 은 서울 10:00 (근무 중)."""
        at = datetime(2024, 1, 3, 1, 0, tzinfo=timezone.utc)
        result = user_preferences_service.get_working_hours(self._user("Asia/Seoul"), at)
        assert result.is_working_now is True
        assert result.timezone == "Asia/Seoul"

    def test_custom_hours(self):
        at = datetime(2024, 1, 3, 20, 30, tzinfo=timezone.utc)
        user = self._user(work_hours_start="20:00", work_hours_end="23:00")
        result = user_preferences_service.get_working_hours(user, at)
        assert result.is_working_now is True
        assert result.start == "20:00"

    def test_malformed_stored_hours_fall_back(self):
        at = datetime(2024, 1, 3, 10, 0, tzinfo=timezone.utc)
        user = self._user(work_hours_start="9am", work_hours_end=17, work_days="weekdays")
        result = user_preferences_service.get_working_hours(user, at)
        assert result.start == "09:00"
        assert result.end == "17:00"
        assert result.work_days == [1, 2, 3, 4, 5]
        assert result.is_working_now is True

    async def test_working_hours_endpoint(self, client: AsyncClient, headers):
        res = await client.get(f"{PREFS}/working-hours", headers=headers)
        assert res.status_code == 200
        data = res.json()["data"]
        assert data["start"] == "09:00"
        assert data["end"] == "17:00"
        assert isinstance(data["is_working_now"], bool)


class TestStoredSettingsFallback:
    """저장된 설정이 잘못된 경우 기본값 사용 테스트."""

    async def test_invalid_stored_values_ignored(self, client: AsyncClient, db: AsyncSession, user, headers):
        user.settings = {"work_hours_start": "9am", "default_priority": "BOGUS", "theme": "dark"}
        await db.commit()

        hours = await client.get(f"{PREFS}/working-hours", headers=headers)
        assert hours.status_code == 200
        assert hours.json()["data"]["start"] == "09:00"

        prefs = (await client.get(PREFS, headers=headers)).json()["data"]["preferences"]
        assert prefs["default_priority"] == "MEDIUM"
        assert prefs["theme"] == "dark"

        todo = await client.post("/api/v1/todos", json={"title": "x"}, headers=headers)
        assert todo.status_code == 201
        assert todo.json()["data"]["priority"] == "MEDIUM"
