# finance_analyzer/models/upload.py
import enum
import uuid
from sqlalchemy import Column, String, ForeignKey, Boolean, BigInteger, Integer, DateTime, Enum, Text, Uuid
from finance_analyzer.core.database import Base
from finance_analyzer.models.user import utcnow

MAX_FILENAME_LENGTH = 255

class UploadStatus(str, enum.Enum):
    UPLOADED = "UPLOADED"
    PROCESSING = "PROCESSING"
    SUCCESS = "SUCCESS"
    FAILED = "FAILED"

class FileUpload(Base):
    __tablename__ = "file_uploads"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    filename = Column(String(length=MAX_FILENAME_LENGTH), nullable=False)
    file_size = Column(BigInteger, nullable=True)
    upload_date = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    processed = Column(Boolean, default=False, nullable=False)
    records_count = Column(Integer, default=0, nullable=False)
    status = Column(Enum(UploadStatus, native_enum=False, length=20), default=UploadStatus.UPLOADED, nullable=False)
    error_details = Column(Text, nullable=True)

    def __repr__(self):
        return f"<FileUpload filename={self.filename} status={self.status} user_id={self.user_id}>"
