"""할일 관련 SQLAlchemy ORM 모델 정의.

Todo-related SQLAlchemy ORM model definitions.

Tables:
    - todos: 할일 (User-owned tasks with status/priority/scheduling metadata)
    - todo_tags: 할일-태그 연결 (Todo ↔ Tag association)
    - subtasks: 하위 작업 (Ordered checklist items under a todo)
    - attachments: 첨부파일 메타데이터 (Attachment metadata, no file storage)
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Table,
    Text,
    Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base

# 할일-태그 연결 테이블 — Todo ↔ Tag association table (복합 PK)
todo_tags: Table = Table(
    "todo_tags",
    Base.metadata,
    Column("todo_id", Uuid, ForeignKey("todos.id", ondelete="CASCADE"), primary_key=True),
    Column("tag_id", Uuid, ForeignKey("tags.id", ondelete="CASCADE"), primary_key=True),
)


class Todo(Base):
    """할일 모델 — 사용자 소유 작업.

    Todo model — A user-owned task.
    ``completed_at`` is set exactly when ``status`` is DONE.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        user_id: 소유 사용자 FK (Owner user foreign key)
        category_id: 카테고리 FK (Category, nullable)
        recurrence_rule_id: 반복 규칙 FK (Recurrence rule, nullable)
        title: 제목 (Title, max 500)
        description: 설명 (Description, max 5000)
        status: 상태 (TODO | IN_PROGRESS | DONE | CANCELLED)
        priority: 우선순위 (LOW | MEDIUM | HIGH | URGENT)
        start_date: 시작 일시 (Start date, nullable)
        due_date: 마감 일시 (Due date, nullable)
        reminder_lead_time: 리마인더 선행 시간(분) (Reminder lead time in minutes)
        completed_at: 완료 일시 (Completion timestamp, nullable)

    Relationships:
        category, recurrence_rule, tags, subtasks, attachments, reminders, activity_logs
    """

    __tablename__ = "todos"

    # 할일 고유 식별자 — Todo unique identifier
    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    # 소유 사용자 FK — Owner (CASCADE: 사용자 삭제 시 할일도 삭제)
    user_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    # 카테고리 FK — Category (SET NULL: 카테고리 삭제 시 분류 해제)
    category_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, ForeignKey("categories.id", ondelete="SET NULL"), nullable=True)
    # 반복 규칙 FK — Recurrence rule (SET NULL)
    recurrence_rule_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, ForeignKey("recurrence_rules.id", ondelete="SET NULL"), nullable=True)
    # 제목 — Title
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    # 설명 — Description
    description: Mapped[str] = mapped_column(Text, default="", nullable=False)
    # 상태 — Status
    status: Mapped[str] = mapped_column(String(20), default="TODO", nullable=False)
    # 우선순위 — Priority
    priority: Mapped[str] = mapped_column(String(20), default="MEDIUM", nullable=False)
    # 시작/마감 일시 — Start and due dates
    start_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    due_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    # 리마인더 선행 시간(분) — Reminder lead time in minutes
    reminder_lead_time: Mapped[int | None] = mapped_column(Integer, nullable=True)
    # 완료 일시 — Completion timestamp
    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    __table_args__ = (
        Index("ix_todos_user_status", "user_id", "status"),
        Index("ix_todos_user_due_date", "user_id", "due_date"),
    )

    # 관계 — Relationships (응답 구성에 필요한 관계는 selectin으로 즉시 로드)
    category = relationship("Category", back_populates="todos", lazy="selectin")
    recurrence_rule = relationship("RecurrenceRule", lazy="selectin")
    tags = relationship("Tag", secondary=todo_tags, back_populates="todos", lazy="selectin", order_by="Tag.name")
    subtasks = relationship(
        "Subtask", back_populates="todo", cascade="all, delete-orphan",
        lazy="selectin", order_by="Subtask.ordering",
    )
    attachments = relationship(
        "Attachment", back_populates="todo", cascade="all, delete-orphan",
        lazy="selectin", order_by="Attachment.created_at",
    )
    reminders = relationship(
        "Reminder", back_populates="todo", cascade="all, delete-orphan",
        lazy="selectin", order_by="Reminder.scheduled_at",
    )
    activity_logs = relationship("ActivityLog", back_populates="todo", passive_deletes=True)


class Subtask(Base):
    """하위 작업 모델 — 할일 아래의 정렬된 체크 항목.

    Subtask model — Ordered checklist entry under a todo.
    """

    __tablename__ = "subtasks"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    # 상위 할일 FK — Parent todo (CASCADE)
    todo_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("todos.id", ondelete="CASCADE"), nullable=False, index=True)
    # 소유 사용자 FK — Owner
    user_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    completed: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    # 정렬 순서 — Display order within the todo
    ordering: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    todo = relationship("Todo", back_populates="subtasks")


class Attachment(Base):
    """첨부파일 모델 — 할일에 연결된 파일 메타데이터.

    Attachment model — File metadata linked to a todo. The file itself is
    stored elsewhere; only its name, size, MIME type and URL are kept.
    """

    __tablename__ = "attachments"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    todo_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("todos.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    # 파일 이름 — File name
    file_name: Mapped[str] = mapped_column(String(255), nullable=False)
    # 파일 크기(바이트) — File size in bytes
    file_size: Mapped[int] = mapped_column(Integer, nullable=False)
    # MIME 유형 — MIME type
    mime_type: Mapped[str] = mapped_column(String(255), nullable=False)
    # 파일 URL — Where the file can be fetched (optional)
    url: Mapped[str | None] = mapped_column(String(2048), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    todo = relationship("Todo", back_populates="attachments")
