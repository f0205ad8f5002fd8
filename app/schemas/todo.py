"""할일 Pydantic 요청/응답 스키마 정의.

Todo Pydantic request/response schema definitions.
Includes list query parameters, duplicate options, and the detailed
response that embeds subtasks, attachments, reminders and the recurrence rule.
"""

from uuid import UUID

from pydantic import BaseModel, Field

from app.models.constants import TODO_PRIORITIES, TODO_STATUSES, choice_pattern
from app.schemas.attachment import AttachmentResponse
from app.schemas.common import UTCDateTime
from app.schemas.label import CategorySummary, TagSummary
from app.schemas.recurrence import RecurrenceRuleResponse
from app.schemas.reminder import ReminderResponse
from app.schemas.subtask import SubtaskResponse

STATUS_PATTERN: str = choice_pattern(TODO_STATUSES)
PRIORITY_PATTERN: str = choice_pattern(TODO_PRIORITIES)
SORT_FIELD_PATTERN: str = r"^(created_at|due_date|priority|title)$"
SORT_ORDER_PATTERN: str = r"^(asc|desc)$"


class TodoCreate(BaseModel):
    """할일 생성 요청 스키마.

    Todo creation request schema.
    ``priority`` falls back to the user's default priority preference.

    Attributes:
        title: 제목 (Title, 1-500 chars)
        description: 설명 (Description, up to 5000 chars)
        status: 상태 (Default TODO)
        priority: 우선순위 (Optional, preference default otherwise)
        start_date: 시작 일시 (Optional)
        due_date: 마감 일시 (Optional)
        reminder_lead_time: 리마인더 선행 시간(분) (Minutes, >= 0)
        category_id: 카테고리 UUID (Optional)
        recurrence_rule_id: 반복 규칙 UUID (Optional)
        tag_ids: 태그 UUID 목록 (Tags to attach)
    """

    title: str = Field(..., min_length=1, max_length=500)
    description: str = Field("", max_length=5000)
    status: str = Field("TODO", pattern=STATUS_PATTERN)
    priority: str | None = Field(None, pattern=PRIORITY_PATTERN)
    start_date: UTCDateTime | None = None
    due_date: UTCDateTime | None = None
    reminder_lead_time: int | None = Field(None, ge=0)
    category_id: UUID | None = None
    recurrence_rule_id: UUID | None = None
    tag_ids: list[UUID] = Field(default_factory=list)


class TodoUpdate(BaseModel):
    """할일 수정 요청 스키마 (부분 업데이트).

    Todo update request schema (partial update).
    Explicit ``null`` clears nullable fields (category, dates, rule);
    ``tag_ids`` replaces the tag set when present.
    """

    title: str | None = Field(None, min_length=1, max_length=500)
    description: str | None = Field(None, max_length=5000)
    status: str | None = Field(None, pattern=STATUS_PATTERN)
    priority: str | None = Field(None, pattern=PRIORITY_PATTERN)
    start_date: UTCDateTime | None = None
    due_date: UTCDateTime | None = None
    reminder_lead_time: int | None = Field(None, ge=0)
    category_id: UUID | None = None
    recurrence_rule_id: UUID | None = None
    tag_ids: list[UUID] | None = None


class TodoListQuery(BaseModel):
    """할일 목록 조회 쿼리 파라미터.

    Todo list query parameters (filters, sorting, pagination).
    """

    page: int = Field(1, ge=1)
    limit: int = Field(20, ge=1, le=100)
    status: str | None = Field(None, pattern=STATUS_PATTERN)
    priority: str | None = Field(None, pattern=PRIORITY_PATTERN)
    category_id: UUID | None = None
    tag_id: UUID | None = None
    due_date_from: UTCDateTime | None = None
    due_date_to: UTCDateTime | None = None
    search: str | None = Field(None, max_length=200)
    sort_by: str = Field("created_at", pattern=SORT_FIELD_PATTERN)
    sort_order: str = Field("desc", pattern=SORT_ORDER_PATTERN)


class DuplicateTodoRequest(BaseModel):
    """할일 복제 옵션 — Duplicate options."""

    include_tags: bool = True
    include_subtasks: bool = True


class TodoResponse(BaseModel):
    """할일 응답 스키마.

    Todo response schema used in lists.

    Attributes:
        subtask_count: 하위 작업 수 (Number of subtasks)
        completed_subtask_count: 완료된 하위 작업 수 (Completed subtasks)
        attachment_count: 첨부파일 수 (Number of attachments)
    """

    id: str
    title: str
    description: str
    status: str
    priority: str
    start_date: UTCDateTime | None
    due_date: UTCDateTime | None
    reminder_lead_time: int | None
    completed_at: UTCDateTime | None
    category_id: str | None
    recurrence_rule_id: str | None
    category: CategorySummary | None
    tags: list[TagSummary]
    subtask_count: int
    completed_subtask_count: int
    attachment_count: int
    created_at: UTCDateTime
    updated_at: UTCDateTime


class TodoDetailResponse(TodoResponse):
    """할일 상세 응답 스키마.

    Detailed todo response with nested subtasks, attachments, reminders
    and recurrence rule.
    """

    subtasks: list[SubtaskResponse]
    attachments: list[AttachmentResponse]
    reminders: list[ReminderResponse]
    recurrence_rule: RecurrenceRuleResponse | None
