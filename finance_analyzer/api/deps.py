# finance_analyzer/api/deps.py
from typing import Optional
from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from finance_analyzer.core.auth import AuthenticatedUser
from finance_analyzer.core.database import get_async_session
from finance_analyzer.core.exceptions import AuthenticationFailure
from finance_analyzer.crud.user import get_user_by_id
from finance_analyzer.models.user import User

# Only documents the scheme in OpenAPI; the auth gateway middleware reads the header
optional_security = HTTPBearer(auto_error=False)

def get_caller_identity(request: Request) -> AuthenticatedUser:
    """The identity the auth gateway attached to this request."""
    identity = request.user
    if not identity.is_authenticated:
        raise AuthenticationFailure("Full authentication is required to access this resource")
    return identity

async def get_current_user(
    identity: AuthenticatedUser = Depends(get_caller_identity),
    db: AsyncSession = Depends(get_async_session),
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(optional_security),
) -> User:
    """Load the authenticated caller's User row within the request's session."""
    user = await get_user_by_id(identity.id, db)
    if user is None or not user.is_active:
        raise AuthenticationFailure("User not found")
    return user
