"""카테고리 서비스 — 카테고리 CRUD 및 정렬 비즈니스 로직.

Category Service — Business logic for category CRUD and manual ordering.
New categories are appended after the user's last category.
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.label import Category
from app.repositories.label_repository import category_repository
from app.schemas.label import (
    CategoryCreate,
    CategoryReorderRequest,
    CategoryResponse,
    CategorySummary,
    CategoryUpdate,
)
from app.utils.exceptions import DuplicateError, ForbiddenError, NotFoundError


class CategoryService:
    """카테고리 관련 비즈니스 로직을 처리하는 서비스.

    Service handling category business logic.
    """

    def to_response(self, category: Category, todo_count: int = 0) -> CategoryResponse:
        return CategoryResponse(
            id=str(category.id),
            name=category.name,
            color=category.color,
            ordering=category.ordering,
            todo_count=todo_count,
            created_at=category.created_at,
            updated_at=category.updated_at,
        )

    def to_summary(self, category: Category) -> CategorySummary:
        return CategorySummary(id=str(category.id), name=category.name, color=category.color)

    async def get_owned_category(
        self,
        db: AsyncSession,
        category_id: UUID,
        user_id: UUID,
    ) -> Category:
        """카테고리를 조회하고 소유권을 확인합니다.

        Retrieve a category and verify the caller owns it.

        Raises:
            NotFoundError: 카테고리가 없을 때 (Category not found)
            ForbiddenError: 다른 사용자의 카테고리일 때 (Category belongs to another user)
        """
        category: Category | None = await category_repository.get_by_id(db, category_id)
        if category is None:
            raise NotFoundError("카테고리를 찾을 수 없습니다 (Category not found)")
        if category.user_id != user_id:
            raise ForbiddenError("해당 카테고리에 대한 권한이 없습니다 (No permission for this category)")
        return category

    async def resolve_category(
        self,
        db: AsyncSession,
        category_id: UUID,
        user_id: UUID,
    ) -> Category:
        """할일에 연결할 카테고리를 확인합니다 (소유자 범위 조회).

        Resolve a category referenced from a todo, scoped to the caller.

        Raises:
            NotFoundError: 없거나 다른 사용자의 카테고리일 때 (Missing or not owned)
        """
        category: Category | None = await category_repository.get_by_id(db, category_id, user_id)
        if category is None:
            raise NotFoundError("카테고리를 찾을 수 없습니다 (Category not found)")
        return category

    async def list_categories(
        self,
        db: AsyncSession,
        user_id: UUID,
    ) -> list[CategoryResponse]:
        """사용자의 카테고리를 정렬 순서대로 조회합니다.

        List the caller's categories ordered by ``ordering``, with todo counts.
        """
        categories: list[Category] = await category_repository.get_by_user(db, user_id)
        counts: dict[UUID, int] = await category_repository.count_todos(
            db, [c.id for c in categories]
        )
        return [self.to_response(c, counts.get(c.id, 0)) for c in categories]

    async def get_category(
        self,
        db: AsyncSession,
        category_id: UUID,
        user_id: UUID,
    ) -> CategoryResponse:
        """카테고리 상세를 조회합니다 — Get a category with its todo count."""
        category: Category = await self.get_owned_category(db, category_id, user_id)
        counts: dict[UUID, int] = await category_repository.count_todos(db, [category.id])
        return self.to_response(category, counts.get(category.id, 0))

    async def create_category(
        self,
        db: AsyncSession,
        user_id: UUID,
        data: CategoryCreate,
    ) -> CategoryResponse:
        """새 카테고리를 생성합니다.

        Create a new category positioned after the user's existing ones.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            user_id: 소유 사용자 ID (Owner UUID)
            data: 카테고리 생성 데이터 (Category creation data)

        Returns:
            CategoryResponse: 생성된 카테고리 (Created category)

        Raises:
            DuplicateError: 같은 이름의 카테고리가 있을 때 (Duplicate category name)
        """
        if await category_repository.exists(db, {"user_id": user_id, "name": data.name}):
            raise DuplicateError(
                "같은 이름의 카테고리가 이미 존재합니다 (Category with this name already exists)"
            )

        # 마지막 순서 다음에 배치 — Append after the current last category
        max_ordering: int = await category_repository.get_max_ordering(db, user_id)
        category: Category = await category_repository.create(
            db,
            {
                "user_id": user_id,
                "name": data.name,
                "color": data.color,
                "ordering": max_ordering + 1,
            },
        )
        return self.to_response(category)

    async def update_category(
        self,
        db: AsyncSession,
        category_id: UUID,
        user_id: UUID,
        data: CategoryUpdate,
    ) -> CategoryResponse:
        """카테고리를 수정합니다 (부분 업데이트).

        Update a category; only provided fields change.

        Raises:
            NotFoundError: 카테고리가 없을 때 (Category not found)
            ForbiddenError: 다른 사용자의 카테고리일 때 (Not owned)
            DuplicateError: 변경할 이름이 이미 사용 중일 때 (Rename collision)
        """
        category: Category = await self.get_owned_category(db, category_id, user_id)

        update_data: dict = {
            k: v for k, v in data.model_dump(exclude_unset=True).items() if v is not None
        }
        if "name" in update_data and await category_repository.exists(
            db, {"user_id": user_id, "name": update_data["name"]}, exclude_id=category.id
        ):
            raise DuplicateError(
                "같은 이름의 카테고리가 이미 존재합니다 (Category with this name already exists)"
            )

        category = await category_repository.update(db, category, update_data)
        counts: dict[UUID, int] = await category_repository.count_todos(db, [category.id])
        return self.to_response(category, counts.get(category.id, 0))

    async def delete_category(
        self,
        db: AsyncSession,
        category_id: UUID,
        user_id: UUID,
    ) -> None:
        """카테고리를 삭제합니다 — 소속 할일은 미분류로 남습니다.

        Delete a category; its todos stay and become uncategorized.
        """
        category: Category = await self.get_owned_category(db, category_id, user_id)
        await category_repository.delete(db, category)

    async def reorder_categories(
        self,
        db: AsyncSession,
        user_id: UUID,
        data: CategoryReorderRequest,
    ) -> list[CategoryResponse]:
        """카테고리 순서를 일괄 변경합니다.

        Apply new ordering values to several categories at once.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            user_id: 소유 사용자 ID (Owner UUID)
            data: (id, ordering) 목록 (List of id/ordering pairs)

        Returns:
            list[CategoryResponse]: 변경 후 전체 카테고리 목록 (All categories after reordering)

        Raises:
            NotFoundError: 존재하지 않는 카테고리가 있을 때 (Unknown category id)
            ForbiddenError: 다른 사용자의 카테고리가 포함될 때 (Foreign category id)
        """
        ids: list[UUID] = [item.id for item in data.ordering]
        found: Sequence[Category] = await category_repository.get_many(db, ids)
        by_id: dict[UUID, Category] = {c.id: c for c in found}

        for item in data.ordering:
            category: Category | None = by_id.get(item.id)
            if category is None:
                raise NotFoundError("카테고리를 찾을 수 없습니다 (Category not found)")
            if category.user_id != user_id:
                raise ForbiddenError(
                    "해당 카테고리에 대한 권한이 없습니다 (No permission for this category)"
                )

        for item in data.ordering:
            by_id[item.id].ordering = item.ordering
        await db.flush()

        return await self.list_categories(db, user_id)


# 싱글턴 인스턴스 — Singleton instance
category_service: CategoryService = CategoryService()
