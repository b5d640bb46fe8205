# finance_analyzer/crud/category.py
import logging
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError
from sqlalchemy import select, update
from finance_analyzer.core.exceptions import ConflictError, NotFoundOrForbiddenError
from finance_analyzer.models.category import Category
from finance_analyzer.models.transaction import Transaction
from typing import List, Optional
import uuid
from finance_analyzer.schemas.category import CategoryRequest

logger = logging.getLogger(__name__)

DUPLICATE_NAME_MESSAGE = "You already have a category with this name"

async def get_categories_for_user(user_id: uuid.UUID, db: AsyncSession) -> List[Category]:
    result = await db.execute(
        select(Category).where(Category.user_id == user_id).order_by(Category.name.asc())
    )
    return result.scalars().all()

async def get_category_by_id(category_id: uuid.UUID, user_id: uuid.UUID, db: AsyncSession) -> Optional[Category]:
    result = await db.execute(
        select(Category).where(Category.id == category_id, Category.user_id == user_id)
    )
    return result.scalar_one_or_none()

async def get_owned_category(category_id: uuid.UUID, user_id: uuid.UUID, db: AsyncSession) -> Category:
    category = await get_category_by_id(category_id, user_id, db)
    if category is None:
        raise NotFoundOrForbiddenError("Category not found or access denied")
    return category

async def category_name_exists(name: str, user_id: uuid.UUID, db: AsyncSession) -> bool:
    result = await db.execute(
        select(Category.id).where(Category.user_id == user_id, Category.name == name)
    )
    return result.first() is not None

async def create_category_for_user(user_id: uuid.UUID, cat_in: CategoryRequest, db: AsyncSession) -> Category:
    if await category_name_exists(cat_in.name, user_id, db):
        raise ConflictError(DUPLICATE_NAME_MESSAGE)
    new_cat = Category(**cat_in.model_dump(), user_id=user_id)
    db.add(new_cat)
    await _commit_or_conflict(db)
    await db.refresh(new_cat)
    return new_cat

async def update_category(category: Category, cat_in: CategoryRequest, db: AsyncSession) -> Category:
    if category.name != cat_in.name and await category_name_exists(cat_in.name, category.user_id, db):
        raise ConflictError(DUPLICATE_NAME_MESSAGE)
    for field, value in cat_in.model_dump().items():
        setattr(category, field, value)
    db.add(category)
    await _commit_or_conflict(db)
    await db.refresh(category)
    return category

async def delete_category(category: Category, db: AsyncSession) -> None:
    # Transactions keep existing, they just lose their category
    await db.execute(
        update(Transaction)
        .where(Transaction.category_id == category.id, Transaction.user_id == category.user_id)
        .values(category_id=None)
    )
    await db.delete(category)
    await db.commit()

async def _commit_or_conflict(db: AsyncSession) -> None:
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise ConflictError(DUPLICATE_NAME_MESSAGE)


# Default categories created for every new user: (name, description, color)
DEFAULT_CATEGORIES: List[tuple] = [
    ("Food & Groceries", "Essential food and grocery expenses", "#4CAF50"),
    ("Rent & Bills", "Housing rent and utility bills", "#2196F3"),
    ("Transport", "Transportation and travel expenses", "#FF9800"),
    ("Shopping", "General shopping and purchases", "#E91E63"),
    ("Health", "Healthcare and medical expenses", "#F44336"),
    ("Entertainment", "Entertainment and leisure activities", "#9C27B0"),
    ("Education", "Educational expenses and materials", "#3F51B5"),
    ("Others", "Miscellaneous expenses", "#607D8B"),
]

async def seed_default_categories_for_user(user_id: uuid.UUID, db: AsyncSession) -> List[Category]:
    """Add the default categories the user does not have yet.

    Nothing is committed here so that signup stays a single unit of work.
    Returns the categories that were added.
    """
    result = await db.execute(select(Category.name).where(Category.user_id == user_id))
    existing_names = {row[0] for row in result.all()}

    categories_to_create: List[Category] = [
        Category(user_id=user_id, name=name, description=description, color=color, is_default=True)
        for name, description, color in DEFAULT_CATEGORIES
        if name not in existing_names
    ]
    if categories_to_create:
        db.add_all(categories_to_create)
        await db.flush()
        logger.info(f"Created {len(categories_to_create)} default categories for user {user_id}")
    return categories_to_create
