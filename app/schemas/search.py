"""검색 Pydantic 스키마 정의.

Search Pydantic request/response schema definitions.
"""

from uuid import UUID

from pydantic import BaseModel, Field

from app.schemas.common import UTCDateTime
from app.schemas.todo import PRIORITY_PATTERN, STATUS_PATTERN, TodoResponse


class TodoSearchQuery(BaseModel):
    """할일 검색 쿼리 파라미터.

    Todo search query parameters.

    Attributes:
        q: 검색어 (Search term, required)
        tag_ids: 태그 UUID 목록 — 하나라도 일치 (Any-of tag filter)
        date_from / date_to: 마감일 범위 (Due date range)
    """

    q: str = Field(..., min_length=1, max_length=200)
    page: int = Field(1, ge=1)
    limit: int = Field(20, ge=1, le=50)
    status: str | None = Field(None, pattern=STATUS_PATTERN)
    priority: str | None = Field(None, pattern=PRIORITY_PATTERN)
    category_id: UUID | None = None
    tag_ids: list[UUID] = Field(default_factory=list)
    date_from: UTCDateTime | None = None
    date_to: UTCDateTime | None = None


class LabelSearchQuery(BaseModel):
    """태그/카테고리 이름 검색 쿼리 — Name search for tags and categories."""

    q: str = Field(..., min_length=1, max_length=255)


class SearchCounts(BaseModel):
    """검색 결과 연관 개수 — Related record counts on a search hit."""

    subtasks: int
    attachments: int
    reminders: int


class TodoSearchResult(TodoResponse):
    """할일 검색 결과 — Todo with relevance score and counts."""

    relevance_score: int
    counts: SearchCounts


class LabelSearchResult(BaseModel):
    """태그/카테고리 검색 결과 — Tag or category name hit."""

    id: str
    name: str
    color: str
