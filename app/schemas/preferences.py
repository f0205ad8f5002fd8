"""사용자 환경설정 Pydantic 스키마 정의.

User preference Pydantic request/response schema definitions.
Stored preferences live in ``users.settings``; unset keys fall back to
``DEFAULT_PREFERENCES``.
"""

from typing import Annotated, Any
from uuid import UUID

from pydantic import BaseModel, Field

from app.models.constants import (
    REMINDER_CHANNELS,
    TODO_PRIORITIES,
    VIEW_TYPES,
    choice_pattern,
)
from app.schemas.common import TimezoneName

_HHMM_PATTERN: str = r"^([01]\d|2[0-3]):[0-5]\d$"
VIEW_TYPE_PATTERN: str = choice_pattern(VIEW_TYPES)

# 기본 환경설정 — Default preferences applied when a key is not stored
DEFAULT_PREFERENCES: dict[str, Any] = {
    # 화면 — Display
    "default_view": "LIST",
    "theme": "system",
    "compact_mode": False,
    "show_completed_todos": True,
    # 지역/시간 — Locale and time
    "timezone": "UTC",
    "week_starts_on": "1",
    "date_format": "MM/DD/YYYY",
    "time_format": "12h",
    "work_hours_start": "09:00",
    "work_hours_end": "17:00",
    "work_days": [1, 2, 3, 4, 5],
    # 알림 — Notifications
    "default_reminder_lead_time": 15,
    "default_reminder_channel": "IN_APP",
    "enable_email_reminders": False,
    "enable_push_reminders": True,
    "notify_on_due_date": True,
    "notify_on_overdue": True,
    "notify_on_assignment": True,
    "notify_on_comments": True,
    # 생산성 — Productivity
    "enable_streaks": True,
    "enable_analytics": True,
    "show_time_tracking": False,
    # 할일 기본값 — Todo defaults
    "default_priority": "MEDIUM",
    "default_category": None,
    "default_tags": [],
    "auto_create_reminders": True,
    # 기능 — Features
    "enable_bulk_operations": True,
    "enable_advanced_search": True,
    "enable_recurrence": True,
    # 개인정보 — Privacy
    "share_analytics": False,
    "public_profile": False,
}


class PreferencesUpdate(BaseModel):
    """환경설정 수정 요청 스키마 (부분 업데이트).

    Preferences update request schema. Provided keys are merged into the
    stored settings; a provided timezone also updates the user's timezone.
    """

    default_view: str | None = Field(None, pattern=VIEW_TYPE_PATTERN)
    theme: str | None = Field(None, pattern=r"^(light|dark|system)$")
    compact_mode: bool | None = None
    show_completed_todos: bool | None = None
    timezone: TimezoneName | None = None
    week_starts_on: str | None = Field(None, pattern=r"^[0-6]$")
    date_format: str | None = Field(None, max_length=20)
    time_format: str | None = Field(None, pattern=r"^(12h|24h)$")
    work_hours_start: str | None = Field(None, pattern=_HHMM_PATTERN)
    work_hours_end: str | None = Field(None, pattern=_HHMM_PATTERN)
    work_days: list[Annotated[int, Field(ge=0, le=6)]] | None = None  # 0=일요일 (0 = Sunday)
    default_reminder_lead_time: int | None = Field(None, ge=0)
    default_reminder_channel: str | None = Field(None, pattern=choice_pattern(REMINDER_CHANNELS))
    enable_email_reminders: bool | None = None
    enable_push_reminders: bool | None = None
    notify_on_due_date: bool | None = None
    notify_on_overdue: bool | None = None
    enable_streaks: bool | None = None
    enable_analytics: bool | None = None
    default_priority: str | None = Field(None, pattern=choice_pattern(TODO_PRIORITIES))
    default_category: UUID | None = None
    default_tags: list[UUID] | None = None
    auto_create_reminders: bool | None = None
    share_analytics: bool | None = None
    public_profile: bool | None = None


class PreferencesResponse(BaseModel):
    """환경설정 응답 스키마 — User profile plus effective preferences."""

    user_id: str
    email: str
    display_name: str
    timezone: str
    preferences: dict[str, Any]


class ViewPreferenceUpdate(BaseModel):
    """보기 설정 저장 요청 스키마 — Upsert body for a view type."""

    filters: dict[str, Any] = Field(default_factory=dict)
    sorting: dict[str, Any] = Field(default_factory=lambda: {"sort_by": "created_at", "sort_order": "desc"})


class ViewPreferenceResponse(BaseModel):
    """보기 설정 응답 스키마 — Stored or default view preference."""

    view_type: str
    filters: dict[str, Any]
    sorting: dict[str, Any]


class TodoDefaultsResponse(BaseModel):
    """할일 기본값 응답 — Defaults applied to new todos."""

    priority: str
    reminder_lead_time: int
    reminder_channel: str
    category_id: str | None
    tag_ids: list[str]
    auto_create_reminders: bool


class WorkingHoursResponse(BaseModel):
    """근무 시간 응답 — Working hours evaluated in the user's timezone."""

    start: str
    end: str
    work_days: list[int]
    timezone: str
    is_working_now: bool
