"""일괄 작업 Pydantic 스키마 정의.

Bulk operation Pydantic request/response schema definitions.
Every request names the target todos; ids the caller does not own are
reported back in ``failed`` and left untouched.
"""

from uuid import UUID

from pydantic import BaseModel, Field, model_validator

from app.schemas.common import UTCDateTime
from app.schemas.todo import PRIORITY_PATTERN, STATUS_PATTERN


class BulkTodoIds(BaseModel):
    """대상 할일 ID 목록 — Target todo ids (at least one)."""

    todo_ids: list[UUID] = Field(..., min_length=1)


class BulkStatusUpdate(BulkTodoIds):
    status: str = Field(..., pattern=STATUS_PATTERN)


class BulkPriorityUpdate(BulkTodoIds):
    priority: str = Field(..., pattern=PRIORITY_PATTERN)


class BulkDueDateUpdate(BulkTodoIds):
    """마감일 일괄 변경 — null clears the due date."""

    due_date: UTCDateTime | None


class BulkCategoryMove(BulkTodoIds):
    """카테고리 일괄 이동 — null removes the category."""

    category_id: UUID | None


class BulkTagUpdate(BulkTodoIds):
    """태그 일괄 변경.

    Bulk tag change. ``action`` is add, remove or replace.
    """

    tag_ids: list[UUID]
    action: str = Field(..., pattern=r"^(add|remove|replace)$")


_BULK_UPDATE_FIELDS: frozenset[str] = frozenset({"status", "priority", "due_date", "category_id"})
_CLEARABLE_FIELDS: frozenset[str] = frozenset({"due_date", "category_id"})


class BulkFieldUpdate(BulkTodoIds):
    """여러 필드 일괄 변경 — At least one field must be provided."""

    status: str | None = Field(None, pattern=STATUS_PATTERN)
    priority: str | None = Field(None, pattern=PRIORITY_PATTERN)
    due_date: UTCDateTime | None = None
    category_id: UUID | None = None

    @model_validator(mode="after")
    def _require_field(self) -> "BulkFieldUpdate":
        # null은 due_date/category_id 해제에만 의미가 있음 — null only clears due_date or category_id
        provided: set[str] = {
            name
            for name in self.model_fields_set & _BULK_UPDATE_FIELDS
            if getattr(self, name) is not None or name in _CLEARABLE_FIELDS
        }
        if not provided:
            raise ValueError("At least one field to update is required")
        return self


class BulkUpdateResult(BaseModel):
    """일괄 변경 결과 — Count of updated todos and ids that failed."""

    updated: int
    failed: list[str]


class BulkDeleteResult(BaseModel):
    """일괄 삭제 결과 — Count of deleted todos and ids that failed."""

    deleted: int
    failed: list[str]
