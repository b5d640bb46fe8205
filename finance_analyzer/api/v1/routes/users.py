# finance_analyzer/api/v1/routes/users.py
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from finance_analyzer.core.database import get_async_session
from finance_analyzer.crud.user import delete_user, update_password, update_user_profile
from finance_analyzer.models.user import User
from finance_analyzer.schemas.common import ApiResponse
from finance_analyzer.schemas.user import PasswordChangeRequest, UserProfileRequest, UserProfileResponse
from finance_analyzer.api.deps import get_current_user

router = APIRouter(prefix="/user", tags=["User Management"])

@router.get("/profile", response_model=UserProfileResponse)
async def read_own_profile(user: User = Depends(get_current_user)):
    """Get current user's profile"""
    return user

@router.put("/profile", response_model=ApiResponse[UserProfileResponse])
async def update_own_profile(
    profile_in: UserProfileRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
):
    """Update current user's profile; omitted fields are left as they are"""
    user = await update_user_profile(user, profile_in, db)
    return ApiResponse[UserProfileResponse].ok("Profile updated successfully", UserProfileResponse.model_validate(user))

@router.put("/password", response_model=ApiResponse)
async def change_own_password(
    password_in: PasswordChangeRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
):
    await update_password(user, password_in.current_password, password_in.new_password, db)
    return ApiResponse.ok("Password updated successfully")

@router.delete("/profile", response_model=ApiResponse)
async def delete_own_profile(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
):
    """Delete current user's account permanently, with all owned data"""
    await delete_user(user, db)
    return ApiResponse.ok("Account deleted")
