"""카테고리/태그 레포지토리.

Category and Tag repositories — ordering, todo counts and name search.
"""

from uuid import UUID

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.label import Category, Tag
from app.models.todo import Todo
from app.repositories.base import LIKE_ESCAPE, BaseRepository, contains_pattern


class CategoryRepository(BaseRepository[Category]):
    """카테고리 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the categories table.
    """

    def __init__(self) -> None:
        super().__init__(Category)

    async def get_by_user(
        self,
        db: AsyncSession,
        user_id: UUID,
    ) -> list[Category]:
        """사용자의 카테고리를 정렬 순서대로 조회합니다.

        Retrieve all categories of a user ordered by ``ordering``.
        """
        query: Select = (
            select(Category)
            .where(Category.user_id == user_id)
            .order_by(Category.ordering, Category.created_at)
        )
        result = await db.execute(query)
        return list(result.scalars().all())

    async def get_max_ordering(self, db: AsyncSession, user_id: UUID) -> int:
        """사용자 카테고리의 최대 정렬 값 — Highest ordering value, -1 if none."""
        query = select(func.max(Category.ordering)).where(Category.user_id == user_id)
        value: int | None = (await db.execute(query)).scalar()
        return -1 if value is None else value

    async def count_todos(
        self,
        db: AsyncSession,
        category_ids: list[UUID],
    ) -> dict[UUID, int]:
        """카테고리별 할일 수를 집계합니다.

        Count todos per category for the given category ids.
        """
        if not category_ids:
            return {}
        query = (
            select(Todo.category_id, func.count(Todo.id))
            .where(Todo.category_id.in_(category_ids))
            .group_by(Todo.category_id)
        )
        result = await db.execute(query)
        return {row[0]: row[1] for row in result.all()}

    async def search_by_name(
        self,
        db: AsyncSession,
        user_id: UUID,
        term: str,
        limit: int = 10,
    ) -> list[Category]:
        """이름에 검색어가 포함된 카테고리를 조회합니다 — Name contains search."""
        query: Select = (
            select(Category)
            .where(
                Category.user_id == user_id,
                Category.name.ilike(contains_pattern(term), escape=LIKE_ESCAPE),
            )
            .order_by(Category.name)
            .limit(limit)
        )
        result = await db.execute(query)
        return list(result.scalars().all())


class TagRepository(BaseRepository[Tag]):
    """태그 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the tags table.
    """

    def __init__(self) -> None:
        super().__init__(Tag)

    async def get_by_user(
        self,
        db: AsyncSession,
        user_id: UUID,
    ) -> list[Tag]:
        """사용자의 태그를 이름순으로 조회합니다 — All tags of a user by name."""
        query: Select = select(Tag).where(Tag.user_id == user_id).order_by(Tag.name)
        result = await db.execute(query)
        return list(result.scalars().all())

    async def search_by_name(
        self,
        db: AsyncSession,
        user_id: UUID,
        term: str,
        limit: int = 10,
    ) -> list[Tag]:
        """이름에 검색어가 포함된 태그를 조회합니다 — Name contains search."""
        query: Select = (
            select(Tag)
            .where(
                Tag.user_id == user_id,
                Tag.name.ilike(contains_pattern(term), escape=LIKE_ESCAPE),
            )
            .order_by(Tag.name)
            .limit(limit)
        )
        result = await db.execute(query)
        return list(result.scalars().all())


# 싱글턴 인스턴스 — Singleton instance
category_repository: CategoryRepository = CategoryRepository()
tag_repository: TagRepository = TagRepository()
