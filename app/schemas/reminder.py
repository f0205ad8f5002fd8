"""리마인더 Pydantic 스키마 정의.

Reminder Pydantic request/response schema definitions.
"""

from uuid import UUID

from pydantic import BaseModel, Field

from app.models.constants import REMINDER_CHANNELS, choice_pattern
from app.schemas.common import UTCDateTime

_CHANNEL_PATTERN: str = choice_pattern(REMINDER_CHANNELS)


class ReminderCreate(BaseModel):
    """리마인더 생성 요청 스키마.

    Reminder creation request schema.

    Attributes:
        todo_id: 대상 할일 UUID (Target todo)
        scheduled_at: 예약 일시 (When the reminder is due)
        channel: 전달 채널 (IN_APP | EMAIL | PUSH, default IN_APP)
    """

    todo_id: UUID
    scheduled_at: UTCDateTime
    channel: str = Field("IN_APP", pattern=_CHANNEL_PATTERN)


class ReminderUpdate(BaseModel):
    """리마인더 수정 요청 스키마 (부분 업데이트).

    Reminder update request schema (partial update).
    """

    scheduled_at: UTCDateTime | None = None
    channel: str | None = Field(None, pattern=_CHANNEL_PATTERN)


class ReminderResponse(BaseModel):
    """리마인더 응답 스키마 — Reminder response schema."""

    id: str
    todo_id: str
    scheduled_at: UTCDateTime
    channel: str
    sent: bool
    sent_at: UTCDateTime | None
    created_at: UTCDateTime


class UpcomingReminderResponse(ReminderResponse):
    """다가오는 리마인더 응답 — Upcoming reminder with its todo title."""

    todo_title: str
