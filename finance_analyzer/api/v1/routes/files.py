# finance_analyzer/api/v1/routes/files.py
from fastapi import APIRouter, Depends, UploadFile, File
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List
import uuid

from finance_analyzer.core.database import get_async_session
from finance_analyzer.core.exceptions import ValidationError
from finance_analyzer.crud.upload import get_owned_upload, get_uploads_for_user
from finance_analyzer.models.upload import MAX_FILENAME_LENGTH
from finance_analyzer.models.user import User
from finance_analyzer.schemas.common import ApiResponse
from finance_analyzer.schemas.upload import FileUploadResponse
from finance_analyzer.api.deps import get_current_user
from finance_analyzer.utils.transactions_import import process_transaction_csv

router = APIRouter(prefix="/files", tags=["files"])

@router.post("/upload", response_model=ApiResponse[FileUploadResponse])
async def upload_file(
    file: UploadFile = File(...),
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    """
    Import transactions from a CSV file with the columns
    date (YYYY-MM-DD), amount, type (INCOME/EXPENSE), description.
    The header row is ignored and malformed rows are skipped.
    """
    content = await file.read()
    if not content:
        raise ValidationError("Please select a file to upload")

    filename = file.filename or ""
    if not filename.lower().endswith(".csv"):
        raise ValidationError("Please upload a CSV file")
    if len(filename) > MAX_FILENAME_LENGTH:
        raise ValidationError(f"File name must be at most {MAX_FILENAME_LENGTH} characters")

    upload = await process_transaction_csv(filename, content, user.username, db)
    return ApiResponse[FileUploadResponse].ok(
        "File uploaded and processed successfully",
        FileUploadResponse.model_validate(upload),
    )

@router.get("", response_model=List[FileUploadResponse])
async def read_uploads(
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    """Upload history, most recent first"""
    return await get_uploads_for_user(user.id, db)

@router.get("/{file_id}", response_model=FileUploadResponse)
async def read_upload(
    file_id: uuid.UUID,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    return await get_owned_upload(file_id, user.id, db)
