# finance_analyzer/crud/upload.py
import logging
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from finance_analyzer.core.exceptions import NotFoundOrForbiddenError
from finance_analyzer.models.upload import FileUpload, UploadStatus
from typing import List, Optional
import uuid

logger = logging.getLogger(__name__)

async def create_upload(user_id: uuid.UUID, filename: str, file_size: int, db: AsyncSession) -> FileUpload:
    upload = FileUpload(user_id=user_id, filename=filename, file_size=file_size, status=UploadStatus.UPLOADED)
    db.add(upload)
    await db.commit()
    await db.refresh(upload)
    return upload

async def set_upload_status(
    upload: FileUpload,
    status: UploadStatus,
    db: AsyncSession,
    records_count: Optional[int] = None,
    error_details: Optional[str] = None,
) -> FileUpload:
    upload.status = status
    if status == UploadStatus.SUCCESS:
        upload.processed = True
    if records_count is not None:
        upload.records_count = records_count
    if error_details is not None:
        upload.error_details = error_details
    db.add(upload)
    await db.commit()
    await db.refresh(upload)
    logger.info(f"Upload {upload.id} ({upload.filename}) is now {status.value}")
    return upload

async def get_uploads_for_user(user_id: uuid.UUID, db: AsyncSession) -> List[FileUpload]:
    result = await db.execute(
        select(FileUpload)
        .where(FileUpload.user_id == user_id)
        .order_by(FileUpload.upload_date.desc())
    )
    return result.scalars().all()

async def get_owned_upload(upload_id: uuid.UUID, user_id: uuid.UUID, db: AsyncSession) -> FileUpload:
    result = await db.execute(
        select(FileUpload).where(FileUpload.id == upload_id, FileUpload.user_id == user_id)
    )
    upload = result.scalar_one_or_none()
    if upload is None:
        raise NotFoundOrForbiddenError("File not found or access denied")
    return upload
