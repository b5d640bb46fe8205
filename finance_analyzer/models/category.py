# finance_analyzer/models/category.py
import uuid
from sqlalchemy import Column, String, ForeignKey, Boolean, DateTime, Text, UniqueConstraint, Uuid
from finance_analyzer.core.database import Base
from finance_analyzer.models.user import utcnow

class Category(Base):
    __tablename__ = "categories"
    __table_args__ = (
        UniqueConstraint("user_id", "name", name="uq_categories_user_id_name"),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(length=100), nullable=False)
    description = Column(Text, nullable=True)
    color = Column(String(length=7), nullable=True)  # Hex color code like #FF5733
    is_default = Column(Boolean(), default=False, nullable=False)  # True for the categories seeded at signup

    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    def __repr__(self):
        return f"<Category name={self.name} user_id={self.user_id}>"
