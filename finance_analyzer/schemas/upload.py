# finance_analyzer/schemas/upload.py
from typing import Optional
from datetime import datetime
import uuid

from finance_analyzer.models.upload import UploadStatus
from finance_analyzer.schemas.common import CamelModel

class FileUploadResponse(CamelModel):
    id: uuid.UUID
    filename: str
    file_size: Optional[int] = None
    upload_date: datetime
    processed: bool
    records_count: int
    status: UploadStatus
    error_details: Optional[str] = None
