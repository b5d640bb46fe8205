from datetime import datetime, timedelta, timezone

import jwt
import pytest

from finance_analyzer.core.exceptions import (
    AuthenticationFailure,
    InvalidTokenSignatureError,
    MalformedTokenError,
    TokenExpiredError,
)
from finance_analyzer.core.security import (
    create_access_token,
    decode_access_token,
    get_password_hash,
    verify_password,
)
from finance_analyzer.core.config import settings


def test_token_roundtrip_returns_subject():
    token = create_access_token("alice")
    assert decode_access_token(token) == "alice"


def test_token_carries_issued_at_and_expiry():
    token = create_access_token("alice", expires_delta=timedelta(minutes=5))
    claims = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    assert claims["sub"] == "alice"
    assert claims["exp"] - claims["iat"] == 300


def test_expired_token_is_rejected():
    token = create_access_token("alice", expires_delta=timedelta(seconds=-1))
    with pytest.raises(TokenExpiredError):
        decode_access_token(token)


def test_token_signed_with_other_key_is_rejected():
    token = create_access_token("alice", secret_key="another-secret-key-that-is-long-enough")
    with pytest.raises(InvalidTokenSignatureError):
        decode_access_token(token)


@pytest.mark.parametrize("token", ["", "not-a-token", "a.b.c"])
def test_garbage_token_is_malformed(token):
    with pytest.raises(MalformedTokenError):
        decode_access_token(token)


def test_token_without_subject_is_malformed():
    exp = datetime.now(timezone.utc) + timedelta(minutes=5)
    token = jwt.encode({"exp": exp}, settings.SECRET_KEY, algorithm=settings.ALGORITHM)
    with pytest.raises(MalformedTokenError):
        decode_access_token(token)


def test_token_errors_are_authentication_failures():
    for error in (TokenExpiredError, InvalidTokenSignatureError, MalformedTokenError):
        assert issubclass(error, AuthenticationFailure)


def test_password_hash_is_one_way_and_verifiable():
    hashed = get_password_hash("s3cr3t-pass")
    assert hashed != "s3cr3t-pass"
    assert verify_password("s3cr3t-pass", hashed)
    assert not verify_password("wrong-pass", hashed)
