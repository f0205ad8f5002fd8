"""활동 로그 모델 — 할일 변경 감사 기록.

Activity log model — Audit record of mutations made to a todo.
``todo_id`` is nulled when the todo is deleted so DELETED entries survive.
"""

import uuid
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import DateTime, ForeignKey, Index, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base, JSONType


class ActivityLog(Base):
    """활동 로그 테이블.

    Activity log table.

    Attributes:
        user_id: 작업 수행 사용자 FK (Acting user)
        todo_id: 대상 할일 FK (Target todo, nullable after deletion)
        type: 활동 유형 (CREATED | UPDATED | STATUS_CHANGED | COMPLETED | TAGGED | DELETED)
        changes: 변경 내용 JSON (Change details)
        created_at: 기록 일시 (When the activity happened)
    """

    __tablename__ = "activity_logs"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    todo_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, ForeignKey("todos.id", ondelete="SET NULL"), nullable=True)
    type: Mapped[str] = mapped_column(String(30), nullable=False)
    changes: Mapped[dict[str, Any]] = mapped_column(JSONType, default=dict, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    __table_args__ = (
        Index("ix_activity_logs_user_created", "user_id", "created_at"),
    )

    todo = relationship("Todo", back_populates="activity_logs", lazy="selectin")
