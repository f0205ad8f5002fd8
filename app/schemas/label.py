"""카테고리/태그 Pydantic 스키마 정의.

Category and tag Pydantic request/response schema definitions.
"""

from uuid import UUID

from pydantic import BaseModel, Field

from app.models.constants import DEFAULT_CATEGORY_COLOR, DEFAULT_TAG_COLOR
from app.schemas.common import HexColor, UTCDateTime


# === 카테고리 (Category) 스키마 ===

class CategoryCreate(BaseModel):
    """카테고리 생성 요청 스키마.

    Category creation request schema.

    Attributes:
        name: 카테고리 이름 (Name, unique per user)
        color: 색상 (Hex color, default #3b82f6)
    """

    name: str = Field(..., min_length=1, max_length=255)
    color: HexColor = DEFAULT_CATEGORY_COLOR


class CategoryUpdate(BaseModel):
    """카테고리 수정 요청 스키마 (부분 업데이트).

    Category update request schema (partial update).
    """

    name: str | None = Field(None, min_length=1, max_length=255)
    color: HexColor | None = None
    ordering: int | None = Field(None, ge=0)


class CategoryOrderItem(BaseModel):
    """카테고리 순서 항목 — One (id, ordering) pair."""

    id: UUID
    ordering: int = Field(..., ge=0)


class CategoryReorderRequest(BaseModel):
    """카테고리 재정렬 요청 스키마.

    Category reorder request schema. Every id must belong to the caller.
    """

    ordering: list[CategoryOrderItem] = Field(..., min_length=1)


class CategorySummary(BaseModel):
    """할일 응답에 포함되는 카테고리 요약 — Category summary embedded in todos."""

    id: str
    name: str
    color: str


class CategoryResponse(BaseModel):
    """카테고리 응답 스키마.

    Category response schema.

    Attributes:
        todo_count: 연결된 할일 수 (Number of todos in the category)
    """

    id: str
    name: str
    color: str
    ordering: int
    todo_count: int = 0
    created_at: UTCDateTime
    updated_at: UTCDateTime


# === 태그 (Tag) 스키마 ===

class TagCreate(BaseModel):
    """태그 생성 요청 스키마.

    Tag creation request schema.

    Attributes:
        name: 태그 이름 (Name, unique per user)
        color: 색상 (Hex color, default #10b981)
    """

    name: str = Field(..., min_length=1, max_length=255)
    color: HexColor = DEFAULT_TAG_COLOR


class TagUpdate(BaseModel):
    """태그 수정 요청 스키마 (부분 업데이트).

    Tag update request schema (partial update).
    """

    name: str | None = Field(None, min_length=1, max_length=255)
    color: HexColor | None = None


class TagSummary(BaseModel):
    """할일 응답에 포함되는 태그 요약 — Tag summary embedded in todos."""

    id: str
    name: str
    color: str


class TagResponse(BaseModel):
    """태그 응답 스키마.

    Tag response schema.
    """

    id: str
    name: str
    color: str
    created_at: UTCDateTime
    updated_at: UTCDateTime
