"""분류 라벨 모델 — 카테고리와 태그.

Classification label models — categories and tags.
Names are unique per user.

Tables:
    - categories: 사용자 정의 카테고리 (User-defined categories, ordered)
    - tags: 사용자 정의 태그 (User-defined tags)
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, Integer, String, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base
from app.models.todo import todo_tags


class Category(Base):
    """카테고리 모델 — 할일을 하나의 분류로 묶는 라벨.

    Category model — A single-choice classification label for todos.

    Constraints:
        uq_category_user_name: 사용자 내 이름 고유 (Unique name per user)
    """

    __tablename__ = "categories"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    # 색상 — Hex color (#RRGGBB)
    color: Mapped[str] = mapped_column(String(7), nullable=False)
    # 정렬 순서 — Display order
    ordering: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    __table_args__ = (
        UniqueConstraint("user_id", "name", name="uq_category_user_name"),
    )

    todos = relationship("Todo", back_populates="category", passive_deletes=True)


class Tag(Base):
    """태그 모델 — 할일에 여러 개 붙일 수 있는 라벨.

    Tag model — A multi-choice label attached to todos.

    Constraints:
        uq_tag_user_name: 사용자 내 이름 고유 (Unique name per user)
    """

    __tablename__ = "tags"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    color: Mapped[str] = mapped_column(String(7), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    __table_args__ = (
        UniqueConstraint("user_id", "name", name="uq_tag_user_name"),
    )

    todos = relationship("Todo", secondary=todo_tags, back_populates="tags", passive_deletes=True)
