# finance_analyzer/models/transaction.py
import enum
import uuid
from sqlalchemy import Column, String, ForeignKey, Numeric, Date, DateTime, Enum, Text, CheckConstraint, Uuid
from sqlalchemy.orm import relationship
from finance_analyzer.core.database import Base
from finance_analyzer.models.user import utcnow

class TransactionType(str, enum.Enum):
    INCOME = "INCOME"
    EXPENSE = "EXPENSE"

class TransactionSource(str, enum.Enum):
    MANUAL = "MANUAL"
    CSV_UPLOAD = "CSV_UPLOAD"

class Transaction(Base):
    __tablename__ = "transactions"
    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_transactions_amount_positive"),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    category_id = Column(Uuid, ForeignKey("categories.id", ondelete="SET NULL"), nullable=True)
    amount = Column(Numeric(12, 2), nullable=False)
    description = Column(Text, nullable=True)
    transaction_date = Column(Date, nullable=False)
    transaction_type = Column(Enum(TransactionType, native_enum=False, length=10), nullable=False)
    source = Column(Enum(TransactionSource, native_enum=False, length=20), default=TransactionSource.MANUAL, nullable=False)

    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    category = relationship("Category", lazy="joined")

    @property
    def category_name(self):
        return self.category.name if self.category is not None else None

    def __repr__(self):
        return f"<Transaction amount={self.amount} date={self.transaction_date} user_id={self.user_id}>"
