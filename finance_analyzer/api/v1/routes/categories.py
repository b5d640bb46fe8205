# finance_analyzer/api/v1/routes/categories.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List
import uuid

from finance_analyzer.schemas.category import CategoryRequest, CategoryResponse
from finance_analyzer.schemas.common import ApiResponse
from finance_analyzer.crud.category import (
    create_category_for_user,
    get_categories_for_user,
    get_owned_category,
    update_category,
    delete_category,
)
from finance_analyzer.core.database import get_async_session
from finance_analyzer.models.user import User
from finance_analyzer.api.deps import get_current_user

router = APIRouter(prefix="/categories", tags=["categories"])

@router.get("", response_model=List[CategoryResponse])
async def read_categories(
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    return await get_categories_for_user(user.id, db)

@router.post("", response_model=ApiResponse[CategoryResponse], status_code=status.HTTP_201_CREATED)
async def create_category(
    cat_in: CategoryRequest,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    category = await create_category_for_user(user.id, cat_in, db)
    return ApiResponse[CategoryResponse].ok("Category created", CategoryResponse.model_validate(category))

@router.get("/{category_id}", response_model=CategoryResponse)
async def read_category(
    category_id: uuid.UUID,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    return await get_owned_category(category_id, user.id, db)

@router.put("/{category_id}", response_model=ApiResponse[CategoryResponse])
async def update_category_endpoint(
    category_id: uuid.UUID,
    cat_in: CategoryRequest,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    category = await get_owned_category(category_id, user.id, db)
    category = await update_category(category, cat_in, db)
    return ApiResponse[CategoryResponse].ok("Category updated", CategoryResponse.model_validate(category))

@router.delete("/{category_id}", response_model=ApiResponse)
async def delete_category_endpoint(
    category_id: uuid.UUID,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    category = await get_owned_category(category_id, user.id, db)
    await delete_category(category, db)
    return ApiResponse.ok("Category deleted")
