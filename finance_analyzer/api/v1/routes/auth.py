# finance_analyzer/api/v1/routes/auth.py
import logging
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from finance_analyzer.core.database import get_async_session
from finance_analyzer.core.security import create_access_token
from finance_analyzer.crud.category import seed_default_categories_for_user
from finance_analyzer.crud.user import authenticate_user, create_user
from finance_analyzer.models.user import User
from finance_analyzer.schemas.user import AuthResponse, LoginRequest, SignupRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])

def _auth_response(user: User, message: str) -> AuthResponse:
    return AuthResponse(
        token=create_access_token(user.username),
        username=user.username,
        email=user.email,
        first_name=user.first_name,
        last_name=user.last_name,
        message=message,
    )

@router.post("/login", response_model=AuthResponse)
async def login(
    login_in: LoginRequest,
    db: AsyncSession = Depends(get_async_session),
):
    """Authenticate with username and password and receive a bearer token"""
    user = await authenticate_user(login_in.username, login_in.password, db)
    return _auth_response(user, "Login successful")

@router.post("/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def signup(
    signup_in: SignupRequest,
    db: AsyncSession = Depends(get_async_session),
):
    """
    Register a new account, seed its default categories and log it in.
    Fails with 409 when the username or email is already taken.
    """
    user = await create_user(signup_in, db)
    await seed_default_categories_for_user(user.id, db)
    await db.commit()
    await db.refresh(user)
    return _auth_response(user, "User registered successfully")
