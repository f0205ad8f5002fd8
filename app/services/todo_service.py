"""할일 서비스 — 할일 CRUD, 완료 처리, 복제, 태그 연결 비즈니스 로직.

Todo Service — Business logic for todo CRUD, completion, duplication and
tag links. Every mutation records an activity log entry in the same
transaction. ``completed_at`` is kept in step with the DONE status.
"""

from datetime import datetime
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.constants import STATUS_DONE, STATUS_TODO, TODO_PRIORITIES
from app.models.label import Tag
from app.models.todo import Subtask, Todo
from app.models.user import User
from app.repositories.schedule_repository import recurrence_rule_repository
from app.repositories.todo_repository import todo_repository
from app.schemas.preferences import DEFAULT_PREFERENCES
from app.schemas.todo import (
    DuplicateTodoRequest,
    TodoCreate,
    TodoDetailResponse,
    TodoListQuery,
    TodoResponse,
    TodoUpdate,
)
from app.services.activity_log_service import activity_log_service
from app.services.category_service import category_service
from app.services.reminder_service import reminder_service
from app.services.tag_service import tag_service
from app.services.user_preferences_service import user_preferences_service
from app.utils.dates import ensure_utc, utcnow
from app.utils.exceptions import ForbiddenError, NotFoundError
from app.utils.pagination import page_meta

# null로 덮어쓸 수 없는 필드 — Fields that an explicit null must not clear
_NON_NULLABLE_FIELDS: frozenset[str] = frozenset({"title", "description", "status", "priority"})


def _json_value(value: Any) -> Any:
    """활동 로그에 저장할 수 있는 값으로 변환 — Make a value JSON-serializable."""
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, UUID):
        return str(value)
    return value


class TodoService:
    """할일 관련 비즈니스 로직을 처리하는 서비스.

    Service handling todo business logic.
    """

    # --- 응답 변환 (Response conversion) ---

    def _base_fields(self, todo: Todo) -> dict[str, Any]:
        subtasks: list[Subtask] = list(todo.subtasks)
        return {
            "id": str(todo.id),
            "title": todo.title,
            "description": todo.description,
            "status": todo.status,
            "priority": todo.priority,
            "start_date": todo.start_date,
            "due_date": todo.due_date,
            "reminder_lead_time": todo.reminder_lead_time,
            "completed_at": todo.completed_at,
            "category_id": str(todo.category_id) if todo.category_id else None,
            "recurrence_rule_id": str(todo.recurrence_rule_id) if todo.recurrence_rule_id else None,
            "category": category_service.to_summary(todo.category) if todo.category else None,
            "tags": [tag_service.to_summary(t) for t in todo.tags],
            "subtask_count": len(subtasks),
            "completed_subtask_count": sum(1 for s in subtasks if s.completed),
            "attachment_count": len(todo.attachments),
            "created_at": todo.created_at,
            "updated_at": todo.updated_at,
        }

    def to_response(self, todo: Todo) -> TodoResponse:
        """할일 모델을 목록 응답으로 변환합니다 — Convert to the list response."""
        return TodoResponse(**self._base_fields(todo))

    def to_detail(self, todo: Todo) -> TodoDetailResponse:
        """할일 모델을 상세 응답으로 변환합니다.

        Convert to the detailed response with nested subtasks, attachments,
        reminders and recurrence rule.
        """
        from app.services.attachment_service import attachment_service
        from app.services.recurrence_service import recurrence_service
        from app.services.subtask_service import subtask_service

        return TodoDetailResponse(
            **self._base_fields(todo),
            subtasks=[subtask_service.to_response(s) for s in todo.subtasks],
            attachments=[attachment_service.to_response(a) for a in todo.attachments],
            reminders=[reminder_service.to_response(r) for r in todo.reminders],
            recurrence_rule=(
                recurrence_service.to_response(todo.recurrence_rule)
                if todo.recurrence_rule else None
            ),
        )

    # --- 조회/검증 헬퍼 (Lookup helpers) ---

    async def get_owned_todo(
        self,
        db: AsyncSession,
        todo_id: UUID,
        user_id: UUID,
    ) -> Todo:
        """할일을 조회하고 소유권을 확인합니다.

        Retrieve a todo and verify the caller owns it.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            todo_id: 할일 UUID (Todo UUID)
            user_id: 요청 사용자 UUID (Caller UUID)

        Returns:
            Todo: 검증된 할일 (Verified todo)

        Raises:
            NotFoundError: 할일이 없을 때 (Todo not found)
            ForbiddenError: 다른 사용자의 할일일 때 (Todo belongs to another user)
        """
        todo: Todo | None = await todo_repository.get_by_id(db, todo_id)
        if todo is None:
            raise NotFoundError("할일을 찾을 수 없습니다 (Todo not found)")
        if todo.user_id != user_id:
            raise ForbiddenError("해당 할일에 대한 권한이 없습니다 (No permission for this todo)")
        return todo

    async def _load_detail(self, db: AsyncSession, todo_id: UUID) -> TodoDetailResponse:
        todo: Todo | None = await todo_repository.get_detail(db, todo_id)
        if todo is None:
            raise NotFoundError("할일을 찾을 수 없습니다 (Todo not found)")
        return self.to_detail(todo)

    async def _validate_recurrence_rule(
        self,
        db: AsyncSession,
        rule_id: UUID,
        user_id: UUID,
    ) -> None:
        rule = await recurrence_rule_repository.get_by_id(db, rule_id, user_id)
        if rule is None:
            raise NotFoundError("반복 규칙을 찾을 수 없습니다 (Recurrence rule not found)")

    # --- CRUD ---

    async def create_todo(
        self,
        db: AsyncSession,
        user: User,
        data: TodoCreate,
    ) -> TodoDetailResponse:
        """새 할일을 생성합니다.

        Create a new todo. Priority falls back to the user's default
        priority preference; a DONE status stamps ``completed_at``.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            user: 현재 사용자 (Current user)
            data: 할일 생성 데이터 (Todo creation data)

        Returns:
            TodoDetailResponse: 생성된 할일 상세 (Created todo detail)

        Raises:
            NotFoundError: 카테고리/태그/반복 규칙이 없거나 다른 사용자의 것일 때
                           (Category, tag or rule missing or not owned)
        """
        if data.category_id is not None:
            await category_service.resolve_category(db, data.category_id, user.id)
        if data.recurrence_rule_id is not None:
            await self._validate_recurrence_rule(db, data.recurrence_rule_id, user.id)
        tags: list[Tag] = await tag_service.resolve_tags(db, data.tag_ids, user.id)

        priority: str = data.priority or user_preferences_service.effective_preferences(user)[
            "default_priority"
        ]
        if priority not in TODO_PRIORITIES:
            priority = DEFAULT_PREFERENCES["default_priority"]

        todo: Todo = await todo_repository.create(
            db,
            {
                "user_id": user.id,
                "title": data.title,
                "description": data.description,
                "status": data.status,
                "priority": priority,
                "start_date": data.start_date,
                "due_date": data.due_date,
                "reminder_lead_time": data.reminder_lead_time,
                "category_id": data.category_id,
                "recurrence_rule_id": data.recurrence_rule_id,
                "completed_at": utcnow() if data.status == STATUS_DONE else None,
                "tags": tags,
            },
        )

        await activity_log_service.create_activity_log(
            db, user.id, todo.id, "CREATED", {"title": todo.title}
        )
        return await self._load_detail(db, todo.id)

    async def get_todo(
        self,
        db: AsyncSession,
        todo_id: UUID,
        user_id: UUID,
    ) -> TodoDetailResponse:
        """할일 상세를 조회합니다 — Get a todo with all related records."""
        todo: Todo = await self.get_owned_todo(db, todo_id, user_id)
        return await self._load_detail(db, todo.id)

    async def list_todos(
        self,
        db: AsyncSession,
        user_id: UUID,
        params: TodoListQuery,
    ) -> tuple[list[TodoResponse], dict[str, int]]:
        """할일 목록을 조회합니다 (필터/정렬/페이지네이션).

        List the caller's todos with filters, sorting and pagination.

        Returns:
            tuple[list[TodoResponse], dict[str, int]]: (할일 목록, 페이지 메타)
                (Todo responses and pagination meta)
        """
        todos, total = await todo_repository.list_todos(db, user_id, params)
        return (
            [self.to_response(t) for t in todos],
            page_meta(total, params.page, params.limit),
        )

    async def update_todo(
        self,
        db: AsyncSession,
        todo_id: UUID,
        user_id: UUID,
        data: TodoUpdate,
    ) -> TodoDetailResponse:
        """할일을 수정합니다 (부분 업데이트).

        Update a todo; unspecified fields are kept. ``category_id: null``
        detaches the category and ``tag_ids`` replaces the tag set.
        A status change is logged as STATUS_CHANGED, anything else as UPDATED.

        Raises:
            NotFoundError: 할일/카테고리/태그/반복 규칙이 없을 때 (Missing records)
            ForbiddenError: 다른 사용자의 할일일 때 (Todo not owned)
        """
        todo: Todo = await self.get_owned_todo(db, todo_id, user_id)

        update_data: dict[str, Any] = {
            k: v
            for k, v in data.model_dump(exclude_unset=True).items()
            if not (k in _NON_NULLABLE_FIELDS and v is None)
        }
        new_tag_ids: list[UUID] | None = update_data.pop("tag_ids", None)

        if update_data.get("category_id") is not None:
            await category_service.resolve_category(db, update_data["category_id"], user_id)
        if update_data.get("recurrence_rule_id") is not None:
            await self._validate_recurrence_rule(db, update_data["recurrence_rule_id"], user_id)

        # 변경 전/후 기록 — Record before/after for changed fields
        changes: dict[str, Any] = {}
        for field, value in update_data.items():
            before = getattr(todo, field)
            if isinstance(before, datetime):
                before = ensure_utc(before)
            if before != value:
                changes[field] = {"from": _json_value(before), "to": _json_value(value)}

        old_status: str = todo.status
        new_status: str = update_data.get("status", old_status)
        if new_status != old_status:
            update_data["completed_at"] = utcnow() if new_status == STATUS_DONE else None

        if new_tag_ids is not None:
            tags: list[Tag] = await tag_service.resolve_tags(db, new_tag_ids, user_id)
            old_ids: list[str] = sorted(str(t.id) for t in todo.tags)
            new_ids: list[str] = sorted(str(t.id) for t in tags)
            if old_ids != new_ids:
                changes["tag_ids"] = {"from": old_ids, "to": new_ids}
            update_data["tags"] = tags

        todo = await todo_repository.update(db, todo, update_data)

        activity_type: str = "STATUS_CHANGED" if new_status != old_status else "UPDATED"
        await activity_log_service.create_activity_log(db, user_id, todo.id, activity_type, changes)
        return await self._load_detail(db, todo.id)

    async def delete_todo(
        self,
        db: AsyncSession,
        todo_id: UUID,
        user_id: UUID,
    ) -> None:
        """할일을 삭제합니다.

        Delete a todo with its subtasks, attachments and reminders.
        The DELETED log entry keeps the title and outlives the todo.
        """
        todo: Todo = await self.get_owned_todo(db, todo_id, user_id)
        await activity_log_service.create_activity_log(
            db, user_id, todo.id, "DELETED", {"title": todo.title}
        )
        await todo_repository.delete(db, todo)

    # --- 완료 처리 (Completion) ---

    async def mark_complete(
        self,
        db: AsyncSession,
        todo_id: UUID,
        user_id: UUID,
    ) -> TodoDetailResponse:
        """할일을 완료 처리합니다 — Set status DONE and stamp ``completed_at``."""
        todo: Todo = await self.get_owned_todo(db, todo_id, user_id)
        old_status: str = todo.status
        todo = await todo_repository.update(
            db, todo, {"status": STATUS_DONE, "completed_at": utcnow()}
        )
        await activity_log_service.create_activity_log(
            db, user_id, todo.id, "COMPLETED", {"status": {"from": old_status, "to": STATUS_DONE}}
        )
        return await self._load_detail(db, todo.id)

    async def mark_incomplete(
        self,
        db: AsyncSession,
        todo_id: UUID,
        user_id: UUID,
    ) -> TodoDetailResponse:
        """할일을 미완료로 되돌립니다 — Set status TODO and clear ``completed_at``."""
        todo: Todo = await self.get_owned_todo(db, todo_id, user_id)
        old_status: str = todo.status
        todo = await todo_repository.update(
            db, todo, {"status": STATUS_TODO, "completed_at": None}
        )
        await activity_log_service.create_activity_log(
            db, user_id, todo.id, "STATUS_CHANGED", {"status": {"from": old_status, "to": STATUS_TODO}}
        )
        return await self._load_detail(db, todo.id)

    # --- 복제 (Duplication) ---

    async def duplicate_todo(
        self,
        db: AsyncSession,
        todo_id: UUID,
        user_id: UUID,
        options: DuplicateTodoRequest,
    ) -> TodoDetailResponse:
        """할일을 복제합니다.

        Copy a todo as ``"<title> (copy)"``. Category, dates, status and the
        recurrence rule are copied; tags and subtasks are copied on request.
        Attachments and reminders are not copied.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            todo_id: 원본 할일 UUID (Source todo UUID)
            user_id: 요청 사용자 UUID (Caller UUID)
            options: 복제 옵션 (include_tags / include_subtasks)

        Returns:
            TodoDetailResponse: 복제된 할일 상세 (The new todo)
        """
        source: Todo = await self.get_owned_todo(db, todo_id, user_id)

        subtasks: list[Subtask] = []
        if options.include_subtasks:
            subtasks = [
                Subtask(
                    user_id=s.user_id,
                    title=s.title,
                    completed=s.completed,
                    ordering=s.ordering,
                )
                for s in source.subtasks
            ]

        duplicate: Todo = await todo_repository.create(
            db,
            {
                "user_id": user_id,
                "title": f"{source.title} (copy)"[:500],
                "description": source.description,
                "status": source.status,
                "priority": source.priority,
                "start_date": source.start_date,
                "due_date": source.due_date,
                "reminder_lead_time": source.reminder_lead_time,
                "completed_at": source.completed_at,
                "category_id": source.category_id,
                "recurrence_rule_id": source.recurrence_rule_id,
                "tags": list(source.tags) if options.include_tags else [],
                "subtasks": subtasks,
            },
        )

        await activity_log_service.create_activity_log(
            db, user_id, duplicate.id, "CREATED", {"title": duplicate.title, "duplicated_from": str(source.id)}
        )
        return await self._load_detail(db, duplicate.id)

    # --- 태그 연결 (Tag links) ---

    async def add_tag(
        self,
        db: AsyncSession,
        todo_id: UUID,
        tag_id: UUID,
        user_id: UUID,
    ) -> TodoDetailResponse:
        """할일에 태그를 추가합니다 (이미 있으면 변경 없음).

        Attach a tag to a todo; attaching it twice is a no-op.

        Raises:
            NotFoundError: 할일/태그가 없을 때 (Todo or tag not found)
            ForbiddenError: 다른 사용자의 할일/태그일 때 (Not owned)
        """
        todo: Todo = await self.get_owned_todo(db, todo_id, user_id)
        tag: Tag = await tag_service.get_owned_tag(db, tag_id, user_id)

        if all(t.id != tag.id for t in todo.tags):
            todo.tags.append(tag)
            await db.flush()
            await activity_log_service.create_activity_log(
                db, user_id, todo.id, "TAGGED", {"tag_id": str(tag.id), "tag_name": tag.name}
            )
        return await self._load_detail(db, todo.id)

    async def remove_tag(
        self,
        db: AsyncSession,
        todo_id: UUID,
        tag_id: UUID,
        user_id: UUID,
    ) -> TodoDetailResponse:
        """할일에서 태그를 제거합니다 — Detach a tag from a todo."""
        todo: Todo = await self.get_owned_todo(db, todo_id, user_id)
        tag: Tag = await tag_service.get_owned_tag(db, tag_id, user_id)

        remaining: list[Tag] = [t for t in todo.tags if t.id != tag.id]
        if len(remaining) != len(todo.tags):
            todo.tags = remaining
            await db.flush()
            await activity_log_service.create_activity_log(
                db, user_id, todo.id, "UPDATED", {"removed_tag_id": str(tag.id), "tag_name": tag.name}
            )
        return await self._load_detail(db, todo.id)


# 싱글턴 인스턴스 — Singleton instance
todo_service: TodoService = TodoService()
