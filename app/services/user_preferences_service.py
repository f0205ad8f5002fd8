"""사용자 환경설정 서비스 — 설정 병합, 보기 설정, 할일 기본값, 근무 시간.

User Preferences Service — Effective preferences (defaults merged under the
stored ``users.settings``), per-view preferences, todo defaults and
working-hours evaluation in the user's timezone.
"""

import copy
import logging
from datetime import datetime, time
from typing import Any
from uuid import UUID
from zoneinfo import ZoneInfo

from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user import User, ViewPreference
from app.repositories.user_repository import user_repository, view_preference_repository
from app.schemas.preferences import (
    DEFAULT_PREFERENCES,
    PreferencesResponse,
    PreferencesUpdate,
    TodoDefaultsResponse,
    ViewPreferenceResponse,
    ViewPreferenceUpdate,
    WorkingHoursResponse,
)
from app.utils.dates import utcnow

# 보기 설정 기본값 — Default sorting when no view preference is stored
DEFAULT_VIEW_SORTING: dict[str, str] = {"sort_by": "created_at", "sort_order": "desc"}

logger: logging.Logger = logging.getLogger(__name__)


def _parse_hhmm(value: str) -> time:
    hours, minutes = value.split(":")
    return time(int(hours), int(minutes))


def _valid_stored_settings(stored: dict[str, Any]) -> dict[str, Any]:
    """저장된 설정 중 유효한 값만 반환합니다.

    Keep only stored values that pass ``PreferencesUpdate`` validation, so
    a malformed key falls back to its default. Keys without a schema field
    are kept when they are known defaults.
    """
    valid: dict[str, Any] = {}
    for key, value in stored.items():
        if key not in PreferencesUpdate.model_fields:
            if key in DEFAULT_PREFERENCES:
                valid[key] = value
            continue
        if value is None and key != "default_category":
            continue
        try:
            parsed: PreferencesUpdate = PreferencesUpdate.model_validate({key: value})
        except ValidationError:
            logger.warning("Ignoring invalid stored preference %s=%r", key, value)
            continue
        valid[key] = parsed.model_dump(mode="json")[key]
    return valid


class UserPreferencesService:
    """사용자 환경설정 비즈니스 로직을 처리하는 서비스.

    Service handling user preference business logic.
    """

    def effective_preferences(self, user: User) -> dict[str, Any]:
        """기본값 위에 저장된 설정을 덮어쓴 최종 설정을 반환합니다.

        Return the defaults overlaid with the user's stored settings.
        """
        merged: dict[str, Any] = copy.deepcopy(DEFAULT_PREFERENCES)
        merged.update(_valid_stored_settings(user.settings or {}))
        merged["timezone"] = user.timezone
        return merged

    def _to_response(self, user: User) -> PreferencesResponse:
        return PreferencesResponse(
            user_id=str(user.id),
            email=user.email,
            display_name=user.display_name,
            timezone=user.timezone,
            preferences=self.effective_preferences(user),
        )

    async def get_user_preferences(
        self,
        db: AsyncSession,
        user: User,
    ) -> PreferencesResponse:
        """사용자 환경설정을 조회합니다 — Get effective preferences."""
        return self._to_response(user)

    async def update_user_preferences(
        self,
        db: AsyncSession,
        user: User,
        data: PreferencesUpdate,
    ) -> PreferencesResponse:
        """환경설정을 수정합니다.

        Merge the provided keys into the stored settings. A provided
        timezone also becomes the user's account timezone.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            user: 현재 사용자 (Current user)
            data: 변경할 설정 (Preference changes)

        Returns:
            PreferencesResponse: 변경 후 최종 설정 (Effective preferences after the update)
        """
        # default_category만 null로 해제 가능 — Only default_category may be cleared with null
        changes: dict[str, Any] = {
            k: v
            for k, v in data.model_dump(exclude_unset=True, mode="json").items()
            if v is not None or k == "default_category"
        }

        update_data: dict[str, Any] = {}
        timezone_name: str | None = changes.pop("timezone", None)
        if timezone_name is not None:
            update_data["timezone"] = timezone_name

        # JSON 컬럼 변경 감지를 위해 새 dict 할당 — Assign a new dict so the JSON change is detected
        settings: dict[str, Any] = dict(user.settings or {})
        settings.update(changes)
        update_data["settings"] = settings

        user = await user_repository.update(db, user, update_data)
        return self._to_response(user)

    async def get_view_preferences(
        self,
        db: AsyncSession,
        user: User,
        view_type: str,
    ) -> ViewPreferenceResponse:
        """보기 유형별 설정을 조회합니다 (없으면 기본값).

        Get the stored preference for a view type, or the defaults.
        """
        pref: ViewPreference | None = await view_preference_repository.get_for_view(
            db, user.id, view_type
        )
        if pref is None:
            return ViewPreferenceResponse(
                view_type=view_type, filters={}, sorting=dict(DEFAULT_VIEW_SORTING)
            )
        return ViewPreferenceResponse(
            view_type=pref.view_type, filters=pref.filters or {}, sorting=pref.sorting or {}
        )

    async def update_view_preferences(
        self,
        db: AsyncSession,
        user: User,
        view_type: str,
        data: ViewPreferenceUpdate,
    ) -> ViewPreferenceResponse:
        """보기 설정을 저장합니다 (없으면 생성, 있으면 교체).

        Upsert the filters and sorting stored for a view type.
        """
        pref: ViewPreference | None = await view_preference_repository.get_for_view(
            db, user.id, view_type
        )
        if pref is None:
            pref = await view_preference_repository.create(
                db,
                {
                    "user_id": user.id,
                    "view_type": view_type,
                    "filters": data.filters,
                    "sorting": data.sorting,
                },
            )
        else:
            pref = await view_preference_repository.update(
                db, pref, {"filters": data.filters, "sorting": data.sorting}
            )
        return ViewPreferenceResponse(
            view_type=pref.view_type, filters=pref.filters, sorting=pref.sorting
        )

    def get_default_todo_values(self, user: User) -> TodoDefaultsResponse:
        """새 할일에 적용할 기본값을 반환합니다.

        Defaults applied to new todos, taken from the effective preferences.
        """
        prefs: dict[str, Any] = self.effective_preferences(user)
        default_category = prefs.get("default_category")
        return TodoDefaultsResponse(
            priority=prefs["default_priority"],
            reminder_lead_time=prefs["default_reminder_lead_time"],
            reminder_channel=prefs["default_reminder_channel"],
            category_id=str(default_category) if default_category else None,
            tag_ids=[str(t) for t in prefs.get("default_tags") or []],
            auto_create_reminders=prefs["auto_create_reminders"],
        )

    def get_working_hours(
        self,
        user: User,
        at: datetime | None = None,
    ) -> WorkingHoursResponse:
        """사용자 시간대 기준 근무 시간과 현재 근무 중 여부를 계산합니다.

        Working hours, and whether ``at`` (default now) falls inside them
        in the user's timezone. ``work_days`` uses 0 = Sunday.

        Args:
            user: 현재 사용자 (Current user)
            at: 평가 시각 (Instant to evaluate, default now)

        Returns:
            WorkingHoursResponse: 근무 시간 정보 (Working hours and is_working_now)
        """
        prefs: dict[str, Any] = self.effective_preferences(user)
        local: datetime = (at or utcnow()).astimezone(ZoneInfo(user.timezone))

        start: time = _parse_hhmm(prefs["work_hours_start"])
        end: time = _parse_hhmm(prefs["work_hours_end"])
        work_days: list[int] = list(prefs["work_days"])

        # Python weekday(): 월=0 → 일요일 기준으로 변환 (Convert to 0 = Sunday)
        weekday: int = (local.weekday() + 1) % 7
        now_time: time = local.time().replace(tzinfo=None)

        return WorkingHoursResponse(
            start=prefs["work_hours_start"],
            end=prefs["work_hours_end"],
            work_days=work_days,
            timezone=user.timezone,
            is_working_now=weekday in work_days and start <= now_time < end,
        )


# 싱글턴 인스턴스 — Singleton instance
user_preferences_service: UserPreferencesService = UserPreferencesService()
