# finance_analyzer/crud/transaction.py
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from finance_analyzer.core.exceptions import NotFoundOrForbiddenError
from finance_analyzer.crud.category import get_owned_category
from finance_analyzer.models.transaction import Transaction, TransactionSource
from typing import Iterable, List, Optional
import uuid
from finance_analyzer.schemas.transaction import TransactionCreate, TransactionUpdate

async def get_transactions_for_user(user_id: uuid.UUID, db: AsyncSession) -> List[Transaction]:
    result = await db.execute(
        select(Transaction)
        .where(Transaction.user_id == user_id)
        .order_by(Transaction.transaction_date.desc(), Transaction.created_at.desc())
    )
    return result.scalars().all()

async def get_transaction_by_id(transaction_id: uuid.UUID, user_id: uuid.UUID, db: AsyncSession) -> Optional[Transaction]:
    result = await db.execute(
        select(Transaction).where(Transaction.id == transaction_id, Transaction.user_id == user_id)
    )
    return result.scalar_one_or_none()

async def get_owned_transaction(transaction_id: uuid.UUID, user_id: uuid.UUID, db: AsyncSession) -> Transaction:
    tx = await get_transaction_by_id(transaction_id, user_id, db)
    if tx is None:
        raise NotFoundOrForbiddenError("Transaction not found or access denied")
    return tx

async def create_transaction_for_user(user_id: uuid.UUID, tx_in: TransactionCreate, db: AsyncSession) -> Transaction:
    if tx_in.category_id is not None:
        await get_owned_category(tx_in.category_id, user_id, db)
    new_tx = Transaction(**tx_in.model_dump(), user_id=user_id, source=TransactionSource.MANUAL)
    db.add(new_tx)
    await db.commit()
    await db.refresh(new_tx)
    return new_tx

async def update_transaction(tx: Transaction, tx_in: TransactionUpdate, db: AsyncSession) -> Transaction:
    if tx_in.category_id is not None:
        await get_owned_category(tx_in.category_id, tx.user_id, db)
    for field, value in tx_in.model_dump().items():
        setattr(tx, field, value)
    db.add(tx)
    await db.commit()
    await db.refresh(tx)
    return tx

async def delete_transaction(tx: Transaction, db: AsyncSession) -> None:
    await db.delete(tx)
    await db.commit()


async def add_transactions_for_user(
    user_id: uuid.UUID,
    tx_inputs: Iterable[TransactionCreate],
    db: AsyncSession,
    source: TransactionSource = TransactionSource.CSV_UPLOAD,
) -> List[Transaction]:
    """Add many transactions for a user and flush them without committing."""
    new_instances: List[Transaction] = [
        Transaction(**tx_in.model_dump(), user_id=user_id, source=source)
        for tx_in in tx_inputs
    ]
    if not new_instances:
        return []
    db.add_all(new_instances)
    await db.flush()
    return new_instances
