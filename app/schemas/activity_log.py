"""활동 로그 Pydantic 스키마 정의.

Activity log Pydantic request/response schema definitions.
"""

from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field

from app.models.constants import ACTIVITY_TYPES, choice_pattern
from app.schemas.common import UTCDateTime

_TYPE_PATTERN: str = choice_pattern(ACTIVITY_TYPES)


class ActivityLogQuery(BaseModel):
    """활동 로그 조회 쿼리 파라미터.

    Activity log query parameters. Results are newest first.
    """

    todo_id: UUID | None = None
    type: str | None = Field(None, pattern=_TYPE_PATTERN)
    date_from: UTCDateTime | None = None
    date_to: UTCDateTime | None = None
    page: int = Field(1, ge=1)
    limit: int = Field(20, ge=1, le=100)


class ActivityLogCreate(BaseModel):
    """활동 로그 생성 요청 스키마 — Manual activity entry for an owned todo."""

    todo_id: UUID
    type: str = Field(..., pattern=_TYPE_PATTERN)
    changes: dict[str, Any] = Field(default_factory=dict)


class ActivityTodoSummary(BaseModel):
    """활동 로그에 포함되는 할일 요약 — Todo summary embedded in log entries."""

    id: str
    title: str
    status: str
    priority: str


class ActivityLogResponse(BaseModel):
    """활동 로그 응답 스키마.

    Activity log response schema. ``todo`` is null once the todo is deleted.
    """

    id: str
    todo_id: str | None
    type: str
    changes: dict[str, Any]
    created_at: UTCDateTime
    todo: ActivityTodoSummary | None
