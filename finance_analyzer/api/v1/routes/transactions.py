# finance_analyzer/api/v1/routes/transactions.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List
import uuid

from finance_analyzer.schemas.common import ApiResponse
from finance_analyzer.schemas.transaction import (
    TransactionCreate,
    TransactionResponse,
    TransactionUpdate,
)
from finance_analyzer.crud.transaction import (
    create_transaction_for_user,
    get_transactions_for_user,
    get_owned_transaction,
    update_transaction,
    delete_transaction,
)
from finance_analyzer.core.database import get_async_session
from finance_analyzer.models.user import User
from finance_analyzer.api.deps import get_current_user

router = APIRouter(prefix="/transactions", tags=["transactions"])

@router.get("", response_model=List[TransactionResponse])
async def read_transactions(
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    """List the caller's transactions, newest transaction date first"""
    return await get_transactions_for_user(user.id, db)

@router.post("", response_model=ApiResponse[TransactionResponse], status_code=status.HTTP_201_CREATED)
async def create_transaction(
    tx_in: TransactionCreate,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    tx = await create_transaction_for_user(user.id, tx_in, db)
    return ApiResponse[TransactionResponse].ok("Transaction created", TransactionResponse.model_validate(tx))

@router.get("/{transaction_id}", response_model=TransactionResponse)
async def read_transaction(
    transaction_id: uuid.UUID,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    return await get_owned_transaction(transaction_id, user.id, db)

@router.put("/{transaction_id}", response_model=ApiResponse[TransactionResponse])
async def update_transaction_endpoint(
    transaction_id: uuid.UUID,
    tx_in: TransactionUpdate,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    tx = await get_owned_transaction(transaction_id, user.id, db)
    tx = await update_transaction(tx, tx_in, db)
    return ApiResponse[TransactionResponse].ok("Transaction updated", TransactionResponse.model_validate(tx))

@router.delete("/{transaction_id}", response_model=ApiResponse)
async def delete_transaction_endpoint(
    transaction_id: uuid.UUID,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    tx = await get_owned_transaction(transaction_id, user.id, db)
    await delete_transaction(tx, db)
    return ApiResponse.ok("Transaction deleted")
