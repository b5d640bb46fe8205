# finance_analyzer/crud/user.py
import logging
from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional
import uuid

from finance_analyzer.core.exceptions import AuthenticationFailure, ConflictError, ValidationError
from finance_analyzer.core.security import get_password_hash, verify_password
from finance_analyzer.models.category import Category
from finance_analyzer.models.transaction import Transaction
from finance_analyzer.models.upload import FileUpload
from finance_analyzer.models.user import User
from finance_analyzer.schemas.user import SignupRequest, UserProfileRequest

logger = logging.getLogger(__name__)

# Profile fields that may be cleared by sending null
NULLABLE_PROFILE_FIELDS = {"first_name", "last_name", "monthly_budget_limit"}

async def get_user_by_id(user_id: uuid.UUID, db: AsyncSession) -> Optional[User]:
    result = await db.execute(select(User).where(User.id == user_id))
    return result.scalar_one_or_none()

async def get_user_by_username(username: str, db: AsyncSession) -> Optional[User]:
    result = await db.execute(select(User).where(User.username == username))
    return result.scalar_one_or_none()

async def get_user_by_email(email: str, db: AsyncSession) -> Optional[User]:
    result = await db.execute(select(User).where(User.email == email))
    return result.scalar_one_or_none()

async def create_user(user_in: SignupRequest, db: AsyncSession) -> User:
    """Add a new user to the session and flush it; the caller commits.

    The existence checks give friendly messages, the unique constraints on
    ``users`` catch whatever races past them.
    """
    if await get_user_by_username(user_in.username, db) is not None:
        raise ConflictError("Username is already taken!")
    if await get_user_by_email(user_in.email, db) is not None:
        raise ConflictError("Email is already in use!")

    user = User(
        username=user_in.username,
        email=user_in.email,
        hashed_password=get_password_hash(user_in.password),
        first_name=user_in.first_name,
        last_name=user_in.last_name,
    )
    db.add(user)
    try:
        await db.flush()
    except IntegrityError:
        await db.rollback()
        raise ConflictError("Username or email is already in use!")
    logger.info(f"New user created: {user.username}")
    return user

async def authenticate_user(username: str, password: str, db: AsyncSession) -> User:
    user = await get_user_by_username(username, db)
    if user is None or not user.is_active or not verify_password(password, user.hashed_password):
        raise AuthenticationFailure("Invalid username or password")
    return user

async def update_user_profile(user: User, profile_in: UserProfileRequest, db: AsyncSession) -> User:
    updates = profile_in.model_dump(exclude_unset=True)
    if not updates:
        raise ValidationError("No fields provided for update")

    new_email = updates.get("email")
    if new_email is not None and new_email != user.email:
        if await get_user_by_email(new_email, db) is not None:
            raise ConflictError("Email is already in use by another user")

    for field, value in updates.items():
        if value is None and field not in NULLABLE_PROFILE_FIELDS:
            continue
        setattr(user, field, value)
    db.add(user)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise ConflictError("Email is already in use by another user")
    await db.refresh(user)
    return user

async def update_password(user: User, current_password: str, new_password: str, db: AsyncSession) -> User:
    if not verify_password(current_password, user.hashed_password):
        raise ValidationError("Current password is incorrect")
    user.hashed_password = get_password_hash(new_password)
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user

async def delete_user(user: User, db: AsyncSession) -> None:
    """Delete a user together with everything they own."""
    user_id = user.id
    await db.execute(delete(Transaction).where(Transaction.user_id == user_id))
    await db.execute(delete(Category).where(Category.user_id == user_id))
    await db.execute(delete(FileUpload).where(FileUpload.user_id == user_id))
    await db.delete(user)
    await db.commit()
    logger.info(f"User deleted with id: {user_id}")
