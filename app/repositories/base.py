"""기본 CRUD 레포지토리 — 모든 레포지토리의 부모 클래스.

Base CRUD Repository — Parent class for all domain repositories.
Provides generic Create, Read, Update, Delete operations with optional
owner (user) scoping.

Usage:
    class TagRepository(BaseRepository[Tag]):
        def __init__(self) -> None:
            super().__init__(Tag)
"""

from typing import Any, Generic, Sequence, TypeVar
from uuid import UUID

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import Base
from app.utils.pagination import paginate

# 제네릭 타입 변수 — SQLAlchemy 모델을 나타냄
# Generic type variable representing a SQLAlchemy model
ModelType = TypeVar("ModelType", bound=Base)

# LIKE 이스케이프 문자 — Escape character for LIKE patterns
LIKE_ESCAPE: str = "\\"


def contains_pattern(term: str) -> str:
    """부분 일치 LIKE 패턴을 만듭니다 (와일드카드 문자는 문자 그대로).

    Build a ``%term%`` pattern where ``%``, ``_`` and the escape character
    in ``term`` match literally. Use with ``escape=LIKE_ESCAPE``.
    """
    escaped: str = (
        term.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )
    return f"%{escaped}%"


class BaseRepository(Generic[ModelType]):
    """제네릭 CRUD 레포지토리.

    Generic CRUD repository providing common database operations.
    Queries are scoped by user_id when the model has that column and a
    scope is provided.

    Attributes:
        model: SQLAlchemy 모델 클래스 (The SQLAlchemy model class)
    """

    def __init__(self, model: type[ModelType]) -> None:
        """레포지토리를 초기화합니다.

        Initialize the repository with a model class.

        Args:
            model: 이 레포지토리가 관리할 SQLAlchemy 모델 클래스
                   (SQLAlchemy model class this repository manages)
        """
        self.model: type[ModelType] = model

    def _scoped(self, query: Select, user_id: UUID | None) -> Select:
        # 모델에 user_id 컬럼이 있고 범위가 주어지면 소유자 필터 적용
        # Apply owner scope if the model has user_id and a scope is given
        if user_id is not None and hasattr(self.model, "user_id"):
            query = query.where(self.model.user_id == user_id)
        return query

    async def get_by_id(
        self,
        db: AsyncSession,
        record_id: UUID,
        user_id: UUID | None = None,
    ) -> ModelType | None:
        """ID로 단일 레코드를 조회합니다.

        Retrieve a single record by its UUID.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            record_id: 조회할 레코드의 UUID (UUID of the record to retrieve)
            user_id: 소유자 범위 필터, None이면 미적용
                     (Owner scope filter; None skips owner filtering)

        Returns:
            ModelType | None: 조회된 레코드 또는 None (Found record or None)
        """
        query: Select = self._scoped(select(self.model).where(self.model.id == record_id), user_id)
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def get_all(
        self,
        db: AsyncSession,
        user_id: UUID | None = None,
        filters: dict[str, Any] | None = None,
        order_by: Any | None = None,
    ) -> Sequence[ModelType]:
        """조건에 맞는 모든 레코드를 조회합니다.

        Retrieve all records matching the given filters.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            user_id: 소유자 범위 필터 (Owner scope filter)
            filters: 추가 필터 딕셔너리 {'컬럼명': 값}
                     (Additional filter dict {'column_name': value})
            order_by: 정렬 기준 컬럼 (Column to order by)

        Returns:
            Sequence[ModelType]: 조회된 레코드 목록 (List of matching records)
        """
        query: Select = self._scoped(select(self.model), user_id)

        # 동적 필터 적용 — Dynamic filter application
        if filters:
            for column_name, value in filters.items():
                if hasattr(self.model, column_name) and value is not None:
                    query = query.where(getattr(self.model, column_name) == value)

        if order_by is not None:
            query = query.order_by(order_by)

        result = await db.execute(query)
        return result.scalars().all()

    async def get_many(
        self,
        db: AsyncSession,
        record_ids: Sequence[UUID],
        user_id: UUID | None = None,
    ) -> Sequence[ModelType]:
        """ID 목록에 해당하는 레코드를 조회합니다.

        Retrieve every record whose id is in ``record_ids``.
        """
        if not record_ids:
            return []
        query: Select = self._scoped(select(self.model).where(self.model.id.in_(record_ids)), user_id)
        result = await db.execute(query)
        return result.scalars().all()

    async def get_paginated(
        self,
        db: AsyncSession,
        query: Select,
        page: int = 1,
        limit: int = 20,
    ) -> tuple[Sequence[ModelType], int]:
        """페이지네이션이 적용된 레코드 목록을 조회합니다.

        Retrieve a paginated list of records.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            query: 기본 SELECT 쿼리 (Base SELECT query)
            page: 현재 페이지 번호, 1부터 시작 (Current page number, 1-based)
            limit: 페이지당 레코드 수 (Number of records per page)

        Returns:
            tuple[Sequence[ModelType], int]: (레코드 목록, 전체 개수)
                                             (List of records, total count)
        """
        return await paginate(db, query, page, limit)

    async def create(
        self,
        db: AsyncSession,
        obj_data: dict[str, Any],
    ) -> ModelType:
        """새 레코드를 생성합니다.

        Create a new record in the database.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            obj_data: 생성할 레코드의 데이터 딕셔너리
                      (Dictionary of data for the new record)

        Returns:
            ModelType: 생성된 레코드 (The created record)
        """
        db_obj: ModelType = self.model(**obj_data)
        db.add(db_obj)
        await db.flush()
        await db.refresh(db_obj)
        return db_obj

    async def update(
        self,
        db: AsyncSession,
        db_obj: ModelType,
        update_data: dict[str, Any],
    ) -> ModelType:
        """기존 레코드를 업데이트합니다.

        Apply ``update_data`` to an already loaded record.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            db_obj: 업데이트할 레코드 (Loaded record to update)
            update_data: 업데이트할 필드와 값의 딕셔너리
                         (Dictionary of fields and values to update)

        Returns:
            ModelType: 업데이트된 레코드 (Updated record)
        """
        # Pydantic exclude_unset으로 전달된 필드만 업데이트 (None 값도 허용)
        # Update all fields passed via exclude_unset (allows setting to None)
        for field, value in update_data.items():
            if hasattr(db_obj, field):
                setattr(db_obj, field, value)

        await db.flush()
        await db.refresh(db_obj)
        return db_obj

    async def delete(
        self,
        db: AsyncSession,
        db_obj: ModelType,
    ) -> None:
        """레코드를 삭제합니다.

        Delete an already loaded record.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            db_obj: 삭제할 레코드 (Record to delete)
        """
        await db.delete(db_obj)
        await db.flush()

    async def exists(
        self,
        db: AsyncSession,
        filters: dict[str, Any],
        exclude_id: UUID | None = None,
    ) -> bool:
        """주어진 조건에 일치하는 레코드가 존재하는지 확인합니다.

        Check if a record matching the given filters exists.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            filters: 검색 조건 딕셔너리 (Filter criteria dictionary)
            exclude_id: 제외할 레코드 ID (Record id to ignore, e.g. the one being renamed)

        Returns:
            bool: 레코드 존재 여부 (Whether a matching record exists)
        """
        query: Select = select(func.count()).select_from(self.model)
        for column_name, value in filters.items():
            if hasattr(self.model, column_name):
                query = query.where(getattr(self.model, column_name) == value)
        if exclude_id is not None:
            query = query.where(self.model.id != exclude_id)

        count: int = (await db.execute(query)).scalar() or 0
        return count > 0

    async def count(
        self,
        db: AsyncSession,
        filters: dict[str, Any],
    ) -> int:
        """조건에 일치하는 레코드 수를 반환합니다 — Count matching records."""
        query: Select = select(func.count()).select_from(self.model)
        for column_name, value in filters.items():
            if hasattr(self.model, column_name):
                query = query.where(getattr(self.model, column_name) == value)
        return (await db.execute(query)).scalar() or 0
