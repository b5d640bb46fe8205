# finance_analyzer/core/security.py
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from passlib.context import CryptContext

from .config import settings
from .exceptions import InvalidTokenSignatureError, MalformedTokenError, TokenExpiredError

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=settings.PASSWORD_HASH_SCHEMES, deprecated="auto")

def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)

def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)

def create_access_token(
    subject: str,
    expires_delta: Optional[timedelta] = None,
    secret_key: Optional[str] = None,
) -> str:
    """
    Create a signed JWT access token for the given subject (username)
    """
    now = datetime.now(timezone.utc)
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    payload = {
        "sub": subject,
        "iat": now,
        "exp": now + expires_delta,
    }
    return jwt.encode(payload, secret_key or settings.SECRET_KEY, algorithm=settings.ALGORITHM)

def decode_access_token(token: str, secret_key: Optional[str] = None) -> str:
    """
    Verify a token and return its subject.

    Raises TokenExpiredError, InvalidTokenSignatureError or MalformedTokenError.
    """
    try:
        payload = jwt.decode(
            token,
            secret_key or settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM],
            options={"require": ["sub", "exp"]},
        )
    except jwt.ExpiredSignatureError:
        raise TokenExpiredError("Token has expired")
    except jwt.InvalidSignatureError:
        raise InvalidTokenSignatureError("Invalid token signature")
    except jwt.InvalidTokenError as e:
        raise MalformedTokenError(f"Invalid token: {str(e)}")

    subject = payload.get("sub")
    if not isinstance(subject, str) or not subject:
        raise MalformedTokenError("Invalid token: missing subject")
    return subject
