"""사용자 및 보기 설정 관련 SQLAlchemy ORM 모델 정의.

User and view preference SQLAlchemy ORM model definitions.
Every other record in the system is owned by exactly one user.

Tables:
    - users: 사용자 계정 (User accounts, globally unique email)
    - view_preferences: 보기 유형별 필터/정렬 설정 (Per-view filter and sort settings)
"""

import uuid
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import String, DateTime, ForeignKey, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base, JSONType


class User(Base):
    """사용자 모델 — 시스템 사용자 계정 정보.

    User model — System user account information.
    Email is globally unique. ``settings`` holds the user's stored
    preferences as a JSON object; unset keys fall back to defaults.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        email: 이메일 (Login email, unique)
        display_name: 표시 이름 (Display name)
        password_hash: bcrypt 해시된 비밀번호 (bcrypt-hashed password, nullable)
        timezone: IANA 시간대 이름 (IANA timezone name)
        settings: 사용자 설정 JSON (Stored preference overrides)
        created_at: 생성 일시 UTC (Creation timestamp)
        updated_at: 수정 일시 UTC (Last update timestamp)

    Relationships:
        refresh_tokens: 리프레시 토큰 목록 (Active refresh tokens, cascade delete)
        view_preferences: 보기 설정 목록 (View preferences, cascade delete)
    """

    __tablename__ = "users"

    # 사용자 고유 식별자 — User unique identifier (UUID v4, auto-generated)
    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    # 이메일 — Login email (전역 고유, globally unique)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    # 표시 이름 — Display name
    display_name: Mapped[str] = mapped_column(String(255), nullable=False)
    # 비밀번호 해시 — bcrypt hashed password (비밀번호 없는 계정은 NULL)
    password_hash: Mapped[str | None] = mapped_column(String(255), nullable=True)
    # 시간대 — IANA timezone name
    timezone: Mapped[str] = mapped_column(String(64), default="UTC", nullable=False)
    # 사용자 설정 — Stored preference overrides
    settings: Mapped[dict[str, Any]] = mapped_column(JSONType, default=dict, nullable=False)
    # 생성 일시 — Record creation timestamp (UTC)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    # 수정 일시 — Last modification timestamp (UTC, auto-updated)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    # 관계 — Relationships
    refresh_tokens = relationship("RefreshToken", back_populates="user", cascade="all, delete-orphan")
    view_preferences = relationship("ViewPreference", back_populates="user", cascade="all, delete-orphan")


class ViewPreference(Base):
    """보기 설정 모델 — 보기 유형별 저장된 필터와 정렬.

    View preference model — Stored filters and sorting per view type.

    Constraints:
        uq_view_pref_user_type: 사용자당 보기 유형 하나 (One row per user and view type)
    """

    __tablename__ = "view_preferences"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    # 소유 사용자 FK — Owner (CASCADE)
    user_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    # 보기 유형 — LIST | BOARD | CALENDAR | TIMELINE
    view_type: Mapped[str] = mapped_column(String(20), nullable=False)
    # 필터 — Stored filter object
    filters: Mapped[dict[str, Any]] = mapped_column(JSONType, default=dict, nullable=False)
    # 정렬 — Stored sorting object ({"sort_by": ..., "sort_order": ...})
    sorting: Mapped[dict[str, Any]] = mapped_column(JSONType, default=dict, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    __table_args__ = (
        UniqueConstraint("user_id", "view_type", name="uq_view_pref_user_type"),
    )

    user = relationship("User", back_populates="view_preferences")
