"""저장된 필터 Pydantic 스키마 정의.

Saved filter Pydantic request/response schema definitions.
"""

from typing import Any

from pydantic import BaseModel, Field

from app.schemas.common import UTCDateTime


class SavedFilterCreate(BaseModel):
    """저장된 필터 생성 요청 스키마.

    Saved filter creation request schema.

    Attributes:
        name: 필터 이름 (Name, 1-100 chars)
        filters: 필터 조건 (Filter criteria object)
        is_default: 기본 필터 여부 (Marks this filter as the user's default)
    """

    name: str = Field(..., min_length=1, max_length=100)
    filters: dict[str, Any] = Field(default_factory=dict)
    is_default: bool = False


class SavedFilterUpdate(BaseModel):
    """저장된 필터 수정 요청 스키마 (부분 업데이트)."""

    name: str | None = Field(None, min_length=1, max_length=100)
    filters: dict[str, Any] | None = None
    is_default: bool | None = None


class SavedFilterResponse(BaseModel):
    """저장된 필터 응답 스키마 — Saved filter response schema."""

    id: str
    name: str
    filters: dict[str, Any]
    is_default: bool
    created_at: UTCDateTime
    updated_at: UTCDateTime
