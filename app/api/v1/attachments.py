"""첨부파일 라우터 — /todos/{todo_id}/attachments 하위 엔드포인트.

Attachment Router — Endpoints nested under /todos/{todo_id}/attachments.
Only metadata is stored; uploads go to external storage.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_user
from app.database import get_db
from app.models.user import User
from app.schemas.attachment import AttachmentCreate, AttachmentResponse, AttachmentUpdate
from app.schemas.common import Envelope, envelope
from app.services.attachment_service import attachment_service

router: APIRouter = APIRouter()


@router.get("", response_model=Envelope[list[AttachmentResponse]])
async def list_attachments(
    todo_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> dict:
    attachments: list[AttachmentResponse] = await attachment_service.list_attachments(
        db, todo_id, current_user.id
    )
    return envelope(attachments, total=len(attachments))


@router.post("", response_model=Envelope[AttachmentResponse], status_code=201)
async def create_attachment(
    todo_id: UUID,
    data: AttachmentCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> dict:
    """첨부파일 메타데이터를 등록합니다 — Register attachment metadata."""
    result: AttachmentResponse = await attachment_service.create_attachment(
        db, todo_id, current_user.id, data
    )
    await db.commit()
    return envelope(result)


@router.get("/{attachment_id}", response_model=Envelope[AttachmentResponse])
async def get_attachment(
    todo_id: UUID,
    attachment_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> dict:
    return envelope(
        await attachment_service.get_attachment(db, todo_id, attachment_id, current_user.id)
    )


@router.patch("/{attachment_id}", response_model=Envelope[AttachmentResponse])
async def update_attachment(
    todo_id: UUID,
    attachment_id: UUID,
    data: AttachmentUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> dict:
    result: AttachmentResponse = await attachment_service.update_attachment(
        db, todo_id, attachment_id, current_user.id, data
    )
    await db.commit()
    return envelope(result)


@router.delete("/{attachment_id}", status_code=204)
async def delete_attachment(
    todo_id: UUID,
    attachment_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> None:
    await attachment_service.delete_attachment(db, todo_id, attachment_id, current_user.id)
    await db.commit()
