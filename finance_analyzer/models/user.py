# finance_analyzer/models/user.py
import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, String, Boolean, DateTime, Numeric, Uuid
from finance_analyzer.core.database import Base

def utcnow() -> datetime:
    return datetime.now(timezone.utc)

class User(Base):
    __tablename__ = "users"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    username = Column(String(length=50), unique=True, index=True, nullable=False)
    email = Column(String(length=100), unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    first_name = Column(String(length=50), nullable=True)
    last_name = Column(String(length=50), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)

    # Profile preferences
    monthly_budget_limit = Column(Numeric(12, 2), nullable=True)
    auto_categorization_enabled = Column(Boolean, default=False, nullable=False)
    preferred_currency = Column(String(length=10), default="USD", nullable=False)
    notification_email_enabled = Column(Boolean, default=True, nullable=False)
    notification_sms_enabled = Column(Boolean, default=False, nullable=False)

    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    def __repr__(self):
        return f"<User username={self.username}>"
