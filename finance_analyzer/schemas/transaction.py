# finance_analyzer/schemas/transaction.py
from typing import Optional
from pydantic import Field
from datetime import date
from decimal import Decimal
import uuid

from finance_analyzer.models.transaction import TransactionSource, TransactionType
from finance_analyzer.schemas.common import CamelModel

class TransactionCreate(CamelModel):
    amount: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2)
    transaction_date: date
    transaction_type: TransactionType
    description: Optional[str] = Field(None, description="E.g. Grocery at Costco")
    category_id: Optional[uuid.UUID] = None

class TransactionUpdate(TransactionCreate):
    pass

class TransactionResponse(CamelModel):
    id: uuid.UUID
    amount: Decimal
    transaction_date: date
    transaction_type: TransactionType
    description: Optional[str] = None
    category_id: Optional[uuid.UUID] = None
    category_name: Optional[str] = None
    source: TransactionSource
