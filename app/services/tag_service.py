"""태그 서비스 — 태그 CRUD 비즈니스 로직.

Tag Service — Business logic for tag CRUD.
Tag names are unique per user; tags are shared labels attachable to many todos.
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.label import Tag
from app.repositories.label_repository import tag_repository
from app.schemas.label import TagCreate, TagResponse, TagSummary, TagUpdate
from app.utils.exceptions import DuplicateError, ForbiddenError, NotFoundError


class TagService:
    """태그 관련 비즈니스 로직을 처리하는 서비스.

    Service handling tag business logic.
    """

    def to_response(self, tag: Tag) -> TagResponse:
        return TagResponse(
            id=str(tag.id),
            name=tag.name,
            color=tag.color,
            created_at=tag.created_at,
            updated_at=tag.updated_at,
        )

    def to_summary(self, tag: Tag) -> TagSummary:
        return TagSummary(id=str(tag.id), name=tag.name, color=tag.color)

    async def get_owned_tag(
        self,
        db: AsyncSession,
        tag_id: UUID,
        user_id: UUID,
    ) -> Tag:
        """태그를 조회하고 소유권을 확인합니다.

        Retrieve a tag and verify the caller owns it.

        Raises:
            NotFoundError: 태그가 없을 때 (Tag not found)
            ForbiddenError: 다른 사용자의 태그일 때 (Tag belongs to another user)
        """
        tag: Tag | None = await tag_repository.get_by_id(db, tag_id)
        if tag is None:
            raise NotFoundError("태그를 찾을 수 없습니다 (Tag not found)")
        if tag.user_id != user_id:
            raise ForbiddenError("해당 태그에 대한 권한이 없습니다 (No permission for this tag)")
        return tag

    async def resolve_tags(
        self,
        db: AsyncSession,
        tag_ids: Sequence[UUID],
        user_id: UUID,
    ) -> list[Tag]:
        """태그 ID 목록을 사용자 소유 태그로 변환합니다.

        Resolve tag ids to the caller's tags.

        Raises:
            NotFoundError: 하나라도 없거나 다른 사용자의 태그일 때
                           (Any id missing or owned by someone else)
        """
        unique_ids: list[UUID] = list(dict.fromkeys(tag_ids))
        tags: Sequence[Tag] = await tag_repository.get_many(db, unique_ids, user_id)
        if len(tags) != len(unique_ids):
            raise NotFoundError("하나 이상의 태그를 찾을 수 없습니다 (One or more tags not found)")
        return list(tags)

    async def list_tags(
        self,
        db: AsyncSession,
        user_id: UUID,
    ) -> list[TagResponse]:
        """사용자의 태그 목록을 이름순으로 조회합니다 — List tags by name."""
        tags: list[Tag] = await tag_repository.get_by_user(db, user_id)
        return [self.to_response(t) for t in tags]

    async def get_tag(
        self,
        db: AsyncSession,
        tag_id: UUID,
        user_id: UUID,
    ) -> TagResponse:
        """태그 상세를 조회합니다 — Get a tag by id."""
        tag: Tag = await self.get_owned_tag(db, tag_id, user_id)
        return self.to_response(tag)

    async def create_tag(
        self,
        db: AsyncSession,
        user_id: UUID,
        data: TagCreate,
    ) -> TagResponse:
        """새 태그를 생성합니다.

        Create a new tag.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            user_id: 소유 사용자 ID (Owner UUID)
            data: 태그 생성 데이터 (Tag creation data)

        Returns:
            TagResponse: 생성된 태그 (Created tag)

        Raises:
            DuplicateError: 같은 이름의 태그가 있을 때 (Duplicate tag name)
        """
        if await tag_repository.exists(db, {"user_id": user_id, "name": data.name}):
            raise DuplicateError("같은 이름의 태그가 이미 존재합니다 (Tag with this name already exists)")

        tag: Tag = await tag_repository.create(
            db, {"user_id": user_id, "name": data.name, "color": data.color}
        )
        return self.to_response(tag)

    async def update_tag(
        self,
        db: AsyncSession,
        tag_id: UUID,
        user_id: UUID,
        data: TagUpdate,
    ) -> TagResponse:
        """태그를 수정합니다 (부분 업데이트).

        Update a tag; only provided fields change.

        Raises:
            NotFoundError: 태그가 없을 때 (Tag not found)
            ForbiddenError: 다른 사용자의 태그일 때 (Not owned)
            DuplicateError: 변경할 이름이 이미 사용 중일 때 (Rename collision)
        """
        tag: Tag = await self.get_owned_tag(db, tag_id, user_id)

        update_data: dict = {
            k: v for k, v in data.model_dump(exclude_unset=True).items() if v is not None
        }
        if "name" in update_data and await tag_repository.exists(
            db, {"user_id": user_id, "name": update_data["name"]}, exclude_id=tag.id
        ):
            raise DuplicateError("같은 이름의 태그가 이미 존재합니다 (Tag with this name already exists)")

        tag = await tag_repository.update(db, tag, update_data)
        return self.to_response(tag)

    async def delete_tag(
        self,
        db: AsyncSession,
        tag_id: UUID,
        user_id: UUID,
    ) -> None:
        """태그를 삭제합니다 — 할일 연결도 함께 제거됩니다.

        Delete a tag; its todo associations are removed with it.
        """
        tag: Tag = await self.get_owned_tag(db, tag_id, user_id)
        await tag_repository.delete(db, tag)


# 싱글턴 인스턴스 — Singleton instance
tag_service: TagService = TagService()
