"""하위 작업 서비스 — 할일 하위 작업 CRUD, 정렬, 완료 토글.

Subtask Service — CRUD, reordering and completion toggling for the
checklist items under a todo. New subtasks are appended last.
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.todo import Subtask, Todo
from app.repositories.todo_repository import subtask_repository
from app.schemas.subtask import (
    SubtaskCreate,
    SubtaskReorderRequest,
    SubtaskResponse,
    SubtaskToggle,
    SubtaskUpdate,
)
from app.services.todo_service import todo_service
from app.utils.exceptions import ForbiddenError, NotFoundError


class SubtaskService:
    """하위 작업 관련 비즈니스 로직을 처리하는 서비스.

    Service handling subtask business logic.
    """

    def to_response(self, subtask: Subtask) -> SubtaskResponse:
        return SubtaskResponse(
            id=str(subtask.id),
            todo_id=str(subtask.todo_id),
            title=subtask.title,
            completed=subtask.completed,
            ordering=subtask.ordering,
            created_at=subtask.created_at,
            updated_at=subtask.updated_at,
        )

    async def _get_owned_subtask(
        self,
        db: AsyncSession,
        todo_id: UUID,
        subtask_id: UUID,
        user_id: UUID,
    ) -> Subtask:
        """할일 소유권과 하위 작업 소속을 확인합니다.

        Verify the caller owns the todo and the subtask sits under it.

        Raises:
            NotFoundError: 할일/하위 작업이 없을 때 (Todo or subtask not found)
            ForbiddenError: 다른 사용자의 것일 때 (Not owned)
        """
        await todo_service.get_owned_todo(db, todo_id, user_id)
        subtask: Subtask | None = await subtask_repository.get_by_id(db, subtask_id)
        if subtask is None or subtask.todo_id != todo_id:
            raise NotFoundError("하위 작업을 찾을 수 없습니다 (Subtask not found)")
        if subtask.user_id != user_id:
            raise ForbiddenError("해당 하위 작업에 대한 권한이 없습니다 (No permission for this subtask)")
        return subtask

    async def list_subtasks(
        self,
        db: AsyncSession,
        todo_id: UUID,
        user_id: UUID,
    ) -> list[SubtaskResponse]:
        """할일의 하위 작업 목록을 순서대로 조회합니다 — List subtasks in order."""
        todo: Todo = await todo_service.get_owned_todo(db, todo_id, user_id)
        subtasks: list[Subtask] = await subtask_repository.get_by_todo(db, todo.id)
        return [self.to_response(s) for s in subtasks]

    async def get_subtask(
        self,
        db: AsyncSession,
        todo_id: UUID,
        subtask_id: UUID,
        user_id: UUID,
    ) -> SubtaskResponse:
        subtask: Subtask = await self._get_owned_subtask(db, todo_id, subtask_id, user_id)
        return self.to_response(subtask)

    async def create_subtask(
        self,
        db: AsyncSession,
        todo_id: UUID,
        user_id: UUID,
        data: SubtaskCreate,
    ) -> SubtaskResponse:
        """하위 작업을 생성합니다 (마지막 순서로 추가).

        Create a subtask appended after the todo's last one.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            todo_id: 상위 할일 UUID (Parent todo UUID)
            user_id: 요청 사용자 UUID (Caller UUID)
            data: 하위 작업 생성 데이터 (Subtask creation data)

        Returns:
            SubtaskResponse: 생성된 하위 작업 (Created subtask)
        """
        todo: Todo = await todo_service.get_owned_todo(db, todo_id, user_id)
        max_ordering: int = await subtask_repository.get_max_ordering(db, todo.id)
        subtask: Subtask = await subtask_repository.create(
            db,
            {
                "todo_id": todo.id,
                "user_id": user_id,
                "title": data.title,
                "completed": False,
                "ordering": max_ordering + 1,
            },
        )
        return self.to_response(subtask)

    async def update_subtask(
        self,
        db: AsyncSession,
        todo_id: UUID,
        subtask_id: UUID,
        user_id: UUID,
        data: SubtaskUpdate,
    ) -> SubtaskResponse:
        """하위 작업을 수정합니다 (부분 업데이트) — Partial update."""
        subtask: Subtask = await self._get_owned_subtask(db, todo_id, subtask_id, user_id)
        update_data: dict = {
            k: v for k, v in data.model_dump(exclude_unset=True).items() if v is not None
        }
        subtask = await subtask_repository.update(db, subtask, update_data)
        return self.to_response(subtask)

    async def toggle_subtask(
        self,
        db: AsyncSession,
        todo_id: UUID,
        subtask_id: UUID,
        user_id: UUID,
        data: SubtaskToggle,
    ) -> SubtaskResponse:
        """하위 작업 완료 상태를 설정합니다 — Set the completed flag."""
        subtask: Subtask = await self._get_owned_subtask(db, todo_id, subtask_id, user_id)
        subtask = await subtask_repository.update(db, subtask, {"completed": data.completed})
        return self.to_response(subtask)

    async def delete_subtask(
        self,
        db: AsyncSession,
        todo_id: UUID,
        subtask_id: UUID,
        user_id: UUID,
    ) -> None:
        subtask: Subtask = await self._get_owned_subtask(db, todo_id, subtask_id, user_id)
        await subtask_repository.delete(db, subtask)

    async def reorder_subtasks(
        self,
        db: AsyncSession,
        todo_id: UUID,
        user_id: UUID,
        data: SubtaskReorderRequest,
    ) -> list[SubtaskResponse]:
        """하위 작업 순서를 변경합니다.

        Reorder subtasks: the position of each id in ``subtask_ids`` becomes
        its ordering value.

        Raises:
            NotFoundError: 할일 또는 하위 작업이 없을 때 (Todo or subtask not found)
            ForbiddenError: 다른 할일의 하위 작업이 포함될 때 (Subtask of another todo)
        """
        todo: Todo = await todo_service.get_owned_todo(db, todo_id, user_id)
        found: Sequence[Subtask] = await subtask_repository.get_many(db, data.subtask_ids)
        by_id: dict[UUID, Subtask] = {s.id: s for s in found}

        for subtask_id in data.subtask_ids:
            subtask: Subtask | None = by_id.get(subtask_id)
            if subtask is None:
                raise NotFoundError("하위 작업을 찾을 수 없습니다 (Subtask not found)")
            if subtask.todo_id != todo.id:
                raise ForbiddenError(
                    "다른 할일의 하위 작업은 정렬할 수 없습니다 (Subtask belongs to another todo)"
                )

        for position, subtask_id in enumerate(data.subtask_ids):
            by_id[subtask_id].ordering = position
        await db.flush()

        subtasks: list[Subtask] = await subtask_repository.get_by_todo(db, todo.id)
        return [self.to_response(s) for s in subtasks]


# 싱글턴 인스턴스 — Singleton instance
subtask_service: SubtaskService = SubtaskService()
