"""첨부파일 Pydantic 스키마 정의.

Attachment Pydantic request/response schema definitions.
Only metadata is handled; file bytes never pass through this API.
"""

from pydantic import BaseModel, Field, HttpUrl

from app.schemas.common import UTCDateTime


class AttachmentCreate(BaseModel):
    """첨부파일 생성 요청 스키마.

    Attachment creation request schema.

    Attributes:
        file_name: 파일 이름 (File name, 1-255 chars)
        file_size: 파일 크기 (Size in bytes, positive)
        mime_type: MIME 유형 (MIME type)
        url: 파일 URL (Where the file lives, optional)
    """

    file_name: str = Field(..., min_length=1, max_length=255)
    file_size: int = Field(..., gt=0)
    mime_type: str = Field(..., min_length=1, max_length=255)
    url: HttpUrl | None = None


class AttachmentUpdate(BaseModel):
    """첨부파일 수정 요청 스키마 (부분 업데이트).

    Attachment update request schema (partial update).
    """

    file_name: str | None = Field(None, min_length=1, max_length=255)
    url: HttpUrl | None = None


class AttachmentResponse(BaseModel):
    """첨부파일 응답 스키마 — Attachment response schema."""

    id: str
    todo_id: str
    file_name: str
    file_size: int
    mime_type: str
    url: str | None
    created_at: UTCDateTime
    updated_at: UTCDateTime
