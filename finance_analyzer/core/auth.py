# finance_analyzer/core/auth.py

import logging
import uuid
from typing import Callable, Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession
from starlette.authentication import AuthCredentials, AuthenticationBackend, SimpleUser
from starlette.middleware.authentication import AuthenticationMiddleware
from starlette.requests import HTTPConnection

from finance_analyzer.crud.user import get_user_by_username

from .config import settings
from .database import AsyncSessionLocal
from .exceptions import AuthenticationFailure
from .security import decode_access_token

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "

def public_path_prefixes(api_prefix: str) -> Tuple[str, ...]:
    return (
        f"{api_prefix}/auth/",
        f"{api_prefix}/public/",
        "/health",
        "/docs",
        "/redoc",
        "/openapi.json",
    )

def is_public_path(path: str, api_prefix: str = settings.API_PREFIX) -> bool:
    """Paths the gateway never authenticates (auth endpoints, docs, health, root)."""
    return path == "/" or path.startswith(public_path_prefixes(api_prefix))

def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    if authorization and authorization.startswith(BEARER_PREFIX):
        token = authorization[len(BEARER_PREFIX):].strip()
        return token or None
    return None

class AuthenticatedUser(SimpleUser):
    """Caller identity attached to a single request's scope."""

    def __init__(self, user_id: uuid.UUID, username: str):
        super().__init__(username)
        self.id = user_id

class JWTAuthBackend(AuthenticationBackend):
    """
    Resolves ``Authorization: Bearer <jwt>`` to an AuthenticatedUser.

    Returning None leaves the request anonymous; endpoints that need a caller
    reject it later through ``get_current_user``.
    """

    def __init__(self, session_factory: Callable[[], AsyncSession] = AsyncSessionLocal):
        self.session_factory = session_factory

    async def authenticate(self, conn: HTTPConnection) -> Optional[Tuple[AuthCredentials, AuthenticatedUser]]:
        if is_public_path(conn.url.path):
            return None

        token = extract_bearer_token(conn.headers.get("Authorization"))
        if token is None:
            return None

        try:
            username = decode_access_token(token)
        except AuthenticationFailure as e:
            logger.warning(f"Cannot set user authentication: {e.message}")
            return None

        async with self.session_factory() as session:
            user = await get_user_by_username(username, session)

        if user is None or not user.is_active:
            logger.warning(f"Token subject '{username}' is not an active user")
            return None

        logger.debug(f"User '{username}' authenticated successfully")
        return AuthCredentials(["authenticated"]), AuthenticatedUser(user.id, user.username)

def add_auth_gateway(app, session_factory: Callable[[], AsyncSession] = AsyncSessionLocal) -> None:
    app.add_middleware(AuthenticationMiddleware, backend=JWTAuthBackend(session_factory))
