"""하위 작업 Pydantic 스키마 정의.

Subtask Pydantic request/response schema definitions.
"""

from uuid import UUID

from pydantic import BaseModel, Field

from app.schemas.common import UTCDateTime


class SubtaskCreate(BaseModel):
    """하위 작업 생성 요청 스키마.

    Subtask creation request schema. New subtasks are appended last.
    """

    title: str = Field(..., min_length=1, max_length=500)  # 제목 (Title)


class SubtaskUpdate(BaseModel):
    """하위 작업 수정 요청 스키마 (부분 업데이트).

    Subtask update request schema (partial update).
    """

    title: str | None = Field(None, min_length=1, max_length=500)
    completed: bool | None = None
    ordering: int | None = Field(None, ge=0)


class SubtaskToggle(BaseModel):
    """완료 상태 토글 요청 스키마 — Set the completed flag."""

    completed: bool


class SubtaskReorderRequest(BaseModel):
    """하위 작업 재정렬 요청 스키마.

    Subtask reorder request schema. The position of each id in
    ``subtask_ids`` becomes its new ordering.
    """

    subtask_ids: list[UUID] = Field(..., min_length=1)


class SubtaskResponse(BaseModel):
    """하위 작업 응답 스키마 — Subtask response schema."""

    id: str
    todo_id: str
    title: str
    completed: bool
    ordering: int
    created_at: UTCDateTime
    updated_at: UTCDateTime
