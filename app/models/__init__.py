"""SQLAlchemy ORM 모델 패키지 — 모든 도메인 모델의 중앙 임포트 지점.

SQLAlchemy ORM models package — Central import point for all domain models.
Importing from this package ensures all models are registered with the
SQLAlchemy metadata, which is required for Alembic migrations and
relationship resolution.

Modules:
    user: 사용자 및 보기 설정 (User and ViewPreference)
    token: 리프레시 토큰 (Refresh tokens)
    todo: 할일, 하위 작업, 첨부파일 (Todo, Subtask, Attachment, todo_tags)
    label: 카테고리와 태그 (Category and Tag)
    schedule: 리마인더와 반복 규칙 (Reminder and RecurrenceRule)
    activity: 활동 로그 (ActivityLog)
    filter: 저장된 필터 (SavedFilter)
"""

from app.models.user import User, ViewPreference
from app.models.token import RefreshToken
from app.models.todo import Todo, Subtask, Attachment, todo_tags
from app.models.label import Category, Tag
from app.models.schedule import Reminder, RecurrenceRule
from app.models.activity import ActivityLog
from app.models.filter import SavedFilter

__all__ = [
    "User", "ViewPreference",
    "RefreshToken",
    "Todo", "Subtask", "Attachment", "todo_tags",
    "Category", "Tag",
    "Reminder", "RecurrenceRule",
    "ActivityLog",
    "SavedFilter",
]
