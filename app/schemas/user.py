"""사용자 프로필 Pydantic 스키마 정의.

User profile Pydantic request/response schema definitions.
"""

from typing import Any

from pydantic import BaseModel, Field

from app.schemas.common import TimezoneName, UTCDateTime
from app.schemas.preferences import PreferencesUpdate


class UserResponse(BaseModel):
    """사용자 응답 스키마.

    User response schema. The password hash is never exposed.

    Attributes:
        id: 사용자 UUID (User identifier)
        email: 이메일 (Email address)
        display_name: 표시 이름 (Display name)
        timezone: 시간대 (IANA timezone)
        settings: 저장된 설정 (Stored preference overrides)
        created_at: 생성 일시 (Creation timestamp)
        updated_at: 수정 일시 (Last update timestamp)
    """

    id: str
    email: str
    display_name: str
    timezone: str
    settings: dict[str, Any]
    created_at: UTCDateTime
    updated_at: UTCDateTime


class UserProfileUpdate(BaseModel):
    """사용자 프로필 수정 요청 스키마 (부분 업데이트).

    User profile update request schema (partial update).
    Only provided fields are changed.
    """

    display_name: str | None = Field(None, min_length=1, max_length=255)  # 표시 이름 (Display name)
    timezone: TimezoneName | None = None  # 시간대 (IANA timezone)
    settings: PreferencesUpdate | None = None  # 설정 객체 — 전체 교체 (Settings object, replaces stored settings)
