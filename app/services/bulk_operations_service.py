"""일괄 작업 서비스 — 여러 할일의 상태/우선순위/마감일/카테고리/태그 일괄 변경 및 삭제.

Bulk Operations Service — Apply one change to many todos at once.
Ids the caller does not own (or that do not exist) are reported in
``failed`` and left untouched; every processed todo gets its own activity
log entry. The whole batch commits as one transaction.
"""

import logging
from typing import Any, Callable, Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.constants import STATUS_DONE
from app.models.label import Tag
from app.models.todo import Todo
from app.repositories.todo_repository import todo_repository
from app.schemas.bulk import (
    BulkCategoryMove,
    BulkDeleteResult,
    BulkDueDateUpdate,
    BulkFieldUpdate,
    BulkPriorityUpdate,
    BulkStatusUpdate,
    BulkTagUpdate,
    BulkTodoIds,
    BulkUpdateResult,
)
from app.services.activity_log_service import activity_log_service
from app.services.category_service import category_service
from app.services.tag_service import tag_service
from app.utils.dates import ensure_utc, utcnow

logger: logging.Logger = logging.getLogger(__name__)

# 변경 함수 — Mutation applied to one todo, returning (activity type, changes)
Mutation = Callable[[Todo], tuple[str, dict[str, Any]]]


def _iso(value: Any) -> Any:
    return ensure_utc(value).isoformat() if value is not None else None


def _set_status(todo: Todo, status: str) -> tuple[str, dict[str, Any]]:
    before: str = todo.status
    todo.status = status
    todo.completed_at = utcnow() if status == STATUS_DONE else None
    activity_type: str = "COMPLETED" if status == STATUS_DONE else "STATUS_CHANGED"
    return activity_type, {"status": {"from": before, "to": status}}


class BulkOperationsService:
    """일괄 작업 비즈니스 로직을 처리하는 서비스.

    Service handling bulk todo operations.
    """

    async def _split_owned(
        self,
        db: AsyncSession,
        user_id: UUID,
        todo_ids: Sequence[UUID],
    ) -> tuple[list[Todo], list[str]]:
        """소유한 할일과 실패 ID를 분리합니다.

        Split the requested ids into owned todos and failed ids.
        """
        unique_ids: list[UUID] = list(dict.fromkeys(todo_ids))
        owned: Sequence[Todo] = await todo_repository.get_many(db, unique_ids, user_id)
        by_id: dict[UUID, Todo] = {t.id: t for t in owned}
        todos: list[Todo] = [by_id[i] for i in unique_ids if i in by_id]
        failed: list[str] = [str(i) for i in unique_ids if i not in by_id]
        return todos, failed

    async def _apply(
        self,
        db: AsyncSession,
        user_id: UUID,
        todo_ids: Sequence[UUID],
        mutate: Mutation,
    ) -> BulkUpdateResult:
        """소유한 각 할일에 변경을 적용하고 활동 로그를 남깁니다.

        Apply ``mutate`` to every owned todo and log each change. A todo whose
        mutation reports no change is neither logged nor counted.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            user_id: 요청 사용자 UUID (Caller UUID)
            todo_ids: 대상 할일 ID 목록 (Requested todo ids)
            mutate: 할일 하나에 적용할 변경 함수 (Per-todo mutation)

        Returns:
            BulkUpdateResult: 변경 개수와 실패 ID (Updated count and failed ids)
        """
        todos, failed = await self._split_owned(db, user_id, todo_ids)
        updated: int = 0
        for todo in todos:
            activity_type, changes = mutate(todo)
            if not changes:
                continue
            await activity_log_service.create_activity_log(db, user_id, todo.id, activity_type, changes)
            updated += 1
        await db.flush()

        if failed:
            logger.info("Bulk update skipped %d todo(s) not owned by user %s", len(failed), user_id)
        return BulkUpdateResult(updated=updated, failed=failed)

    async def bulk_update_status(
        self,
        db: AsyncSession,
        user_id: UUID,
        data: BulkStatusUpdate,
    ) -> BulkUpdateResult:
        """상태 일괄 변경 — DONE stamps ``completed_at``, other statuses clear it."""
        return await self._apply(db, user_id, data.todo_ids, lambda t: _set_status(t, data.status))

    async def bulk_update_priority(
        self,
        db: AsyncSession,
        user_id: UUID,
        data: BulkPriorityUpdate,
    ) -> BulkUpdateResult:
        def mutate(todo: Todo) -> tuple[str, dict[str, Any]]:
            before: str = todo.priority
            todo.priority = data.priority
            return "UPDATED", {"priority": {"from": before, "to": data.priority}}

        return await self._apply(db, user_id, data.todo_ids, mutate)

    async def bulk_update_due_date(
        self,
        db: AsyncSession,
        user_id: UUID,
        data: BulkDueDateUpdate,
    ) -> BulkUpdateResult:
        """마감일 일괄 변경 — null clears the due date."""

        def mutate(todo: Todo) -> tuple[str, dict[str, Any]]:
            before = todo.due_date
            todo.due_date = data.due_date
            return "UPDATED", {"due_date": {"from": _iso(before), "to": _iso(data.due_date)}}

        return await self._apply(db, user_id, data.todo_ids, mutate)

    async def bulk_move_to_category(
        self,
        db: AsyncSession,
        user_id: UUID,
        data: BulkCategoryMove,
    ) -> BulkUpdateResult:
        """카테고리 일괄 이동.

        Move todos into a category (null removes the category).

        Raises:
            NotFoundError: 카테고리가 없거나 다른 사용자의 것일 때 (Category missing or not owned)
        """
        if data.category_id is not None:
            await category_service.resolve_category(db, data.category_id, user_id)

        def mutate(todo: Todo) -> tuple[str, dict[str, Any]]:
            before = todo.category_id
            todo.category_id = data.category_id
            return "UPDATED", {
                "category_id": {
                    "from": str(before) if before else None,
                    "to": str(data.category_id) if data.category_id else None,
                }
            }

        return await self._apply(db, user_id, data.todo_ids, mutate)

    async def bulk_update_tags(
        self,
        db: AsyncSession,
        user_id: UUID,
        data: BulkTagUpdate,
    ) -> BulkUpdateResult:
        """태그 일괄 변경 (add | remove | replace).

        Add, remove or replace tags on many todos.

        Raises:
            NotFoundError: 태그가 없거나 다른 사용자의 것일 때 (Tag missing or not owned)
        """
        tags: list[Tag] = await tag_service.resolve_tags(db, data.tag_ids, user_id)
        tag_ids: set[UUID] = {t.id for t in tags}

        def mutate(todo: Todo) -> tuple[str, dict[str, Any]]:
            before: list[str] = sorted(str(t.id) for t in todo.tags)
            if data.action == "add":
                existing: set[UUID] = {t.id for t in todo.tags}
                todo.tags.extend([t for t in tags if t.id not in existing])
            elif data.action == "remove":
                todo.tags = [t for t in todo.tags if t.id not in tag_ids]
            else:
                todo.tags = list(tags)
            after: list[str] = sorted(str(t.id) for t in todo.tags)
            activity_type: str = "TAGGED" if data.action == "add" else "UPDATED"
            return activity_type, {"tag_ids": {"from": before, "to": after}, "action": data.action}

        return await self._apply(db, user_id, data.todo_ids, mutate)

    async def bulk_update(
        self,
        db: AsyncSession,
        user_id: UUID,
        data: BulkFieldUpdate,
    ) -> BulkUpdateResult:
        """여러 필드 일괄 변경.

        Apply any combination of status, priority, due date and category.
        A status change takes precedence for the logged activity type.
        """
        fields: dict[str, Any] = data.model_dump(exclude_unset=True, exclude={"todo_ids"})
        if fields.get("status") is None:
            fields.pop("status", None)
        if fields.get("priority") is None:
            fields.pop("priority", None)
        if fields.get("category_id") is not None:
            await category_service.resolve_category(db, fields["category_id"], user_id)

        def mutate(todo: Todo) -> tuple[str, dict[str, Any]]:
            changes: dict[str, Any] = {}
            activity_type: str = "UPDATED"
            if "status" in fields:
                activity_type, status_change = _set_status(todo, fields["status"])
                changes.update(status_change)
            if "priority" in fields:
                changes["priority"] = {"from": todo.priority, "to": fields["priority"]}
                todo.priority = fields["priority"]
            if "due_date" in fields:
                changes["due_date"] = {"from": _iso(todo.due_date), "to": _iso(fields["due_date"])}
                todo.due_date = fields["due_date"]
            if "category_id" in fields:
                new_category = fields["category_id"]
                changes["category_id"] = {
                    "from": str(todo.category_id) if todo.category_id else None,
                    "to": str(new_category) if new_category else None,
                }
                todo.category_id = new_category
            return activity_type, changes

        return await self._apply(db, user_id, data.todo_ids, mutate)

    async def bulk_delete(
        self,
        db: AsyncSession,
        user_id: UUID,
        data: BulkTodoIds,
    ) -> BulkDeleteResult:
        """할일 일괄 삭제 — Delete every owned todo, logging DELETED for each."""
        todos, failed = await self._split_owned(db, user_id, data.todo_ids)
        for todo in todos:
            await activity_log_service.create_activity_log(
                db, user_id, todo.id, "DELETED", {"title": todo.title}
            )
            await todo_repository.delete(db, todo)
        return BulkDeleteResult(deleted=len(todos), failed=failed)


# 싱글턴 인스턴스 — Singleton instance
bulk_operations_service: BulkOperationsService = BulkOperationsService()
