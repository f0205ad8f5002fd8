"""저장된 필터 모델.

Saved filter model — A persisted search/filter configuration for a user.
At most one filter per user has ``is_default`` set; the service keeps that true.
"""

import uuid
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import Boolean, DateTime, ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base, JSONType


class SavedFilter(Base):
    """저장된 필터 테이블.

    Saved filter table.
    """

    __tablename__ = "saved_filters"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    # 필터 조건 — Filter criteria (same keys as the todo list query)
    filters: Mapped[dict[str, Any]] = mapped_column(JSONType, default=dict, nullable=False)
    # 기본 필터 여부 — Whether this is the user's default filter
    is_default: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))
