"""첨부파일 서비스 — 할일 첨부파일 메타데이터 CRUD.

Attachment Service — CRUD for attachment metadata under a todo.
"""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.todo import Attachment, Todo
from app.repositories.todo_repository import attachment_repository
from app.schemas.attachment import AttachmentCreate, AttachmentResponse, AttachmentUpdate
from app.services.todo_service import todo_service
from app.utils.exceptions import ForbiddenError, NotFoundError


class AttachmentService:
    """첨부파일 관련 비즈니스 로직을 처리하는 서비스.

    Service handling attachment business logic.
    """

    def to_response(self, attachment: Attachment) -> AttachmentResponse:
        return AttachmentResponse(
            id=str(attachment.id),
            todo_id=str(attachment.todo_id),
            file_name=attachment.file_name,
            file_size=attachment.file_size,
            mime_type=attachment.mime_type,
            url=attachment.url,
            created_at=attachment.created_at,
            updated_at=attachment.updated_at,
        )

    async def _get_owned_attachment(
        self,
        db: AsyncSession,
        todo_id: UUID,
        attachment_id: UUID,
        user_id: UUID,
    ) -> Attachment:
        await todo_service.get_owned_todo(db, todo_id, user_id)
        attachment: Attachment | None = await attachment_repository.get_by_id(db, attachment_id)
        if attachment is None or attachment.todo_id != todo_id:
            raise NotFoundError("첨부파일을 찾을 수 없습니다 (Attachment not found)")
        if attachment.user_id != user_id:
            raise ForbiddenError("해당 첨부파일에 대한 권한이 없습니다 (No permission for this attachment)")
        return attachment

    async def list_attachments(
        self,
        db: AsyncSession,
        todo_id: UUID,
        user_id: UUID,
    ) -> list[AttachmentResponse]:
        """할일의 첨부파일 목록 — List a todo's attachments, oldest first."""
        todo: Todo = await todo_service.get_owned_todo(db, todo_id, user_id)
        attachments: list[Attachment] = await attachment_repository.get_by_todo(db, todo.id)
        return [self.to_response(a) for a in attachments]

    async def get_attachment(
        self,
        db: AsyncSession,
        todo_id: UUID,
        attachment_id: UUID,
        user_id: UUID,
    ) -> AttachmentResponse:
        attachment: Attachment = await self._get_owned_attachment(db, todo_id, attachment_id, user_id)
        return self.to_response(attachment)

    async def create_attachment(
        self,
        db: AsyncSession,
        todo_id: UUID,
        user_id: UUID,
        data: AttachmentCreate,
    ) -> AttachmentResponse:
        """첨부파일 메타데이터를 등록합니다.

        Register attachment metadata for a todo.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            todo_id: 대상 할일 UUID (Target todo UUID)
            user_id: 요청 사용자 UUID (Caller UUID)
            data: 첨부파일 데이터 (File name, size, MIME type, URL)

        Returns:
            AttachmentResponse: 생성된 첨부파일 (Created attachment)
        """
        todo: Todo = await todo_service.get_owned_todo(db, todo_id, user_id)
        attachment: Attachment = await attachment_repository.create(
            db,
            {
                "todo_id": todo.id,
                "user_id": user_id,
                "file_name": data.file_name,
                "file_size": data.file_size,
                "mime_type": data.mime_type,
                "url": str(data.url) if data.url is not None else None,
            },
        )
        return self.to_response(attachment)

    async def update_attachment(
        self,
        db: AsyncSession,
        todo_id: UUID,
        attachment_id: UUID,
        user_id: UUID,
        data: AttachmentUpdate,
    ) -> AttachmentResponse:
        """첨부파일을 수정합니다 — Rename or change the URL; null clears the URL."""
        attachment: Attachment = await self._get_owned_attachment(db, todo_id, attachment_id, user_id)

        update_data: dict = data.model_dump(exclude_unset=True)
        if update_data.get("file_name") is None:
            update_data.pop("file_name", None)
        if "url" in update_data and update_data["url"] is not None:
            update_data["url"] = str(update_data["url"])

        attachment = await attachment_repository.update(db, attachment, update_data)
        return self.to_response(attachment)

    async def delete_attachment(
        self,
        db: AsyncSession,
        todo_id: UUID,
        attachment_id: UUID,
        user_id: UUID,
    ) -> None:
        attachment: Attachment = await self._get_owned_attachment(db, todo_id, attachment_id, user_id)
        await attachment_repository.delete(db, attachment)


# 싱글턴 인스턴스 — Singleton instance
attachment_service: AttachmentService = AttachmentService()
