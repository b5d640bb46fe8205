import asyncio
import os
import tempfile

import pytest

# Settings are read at import time, so the environment must be ready first
_TEST_DB_DIR = tempfile.mkdtemp(prefix="finance-analyzer-tests-")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TEST_DB_DIR}/test.db"
os.environ["SECRET_KEY"] = "test-secret-key-that-is-long-enough-for-hs256"
# bcrypt is deliberately slow; any passlib scheme exercises the same code path
os.environ["PASSWORD_HASH_SCHEMES"] = '["pbkdf2_sha256"]'

from fastapi.testclient import TestClient  # noqa: E402

from finance_analyzer.core.database import Base, engine  # noqa: E402
from finance_analyzer.main import app  # noqa: E402

API = "/api/v1"


async def _reset_schema():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)


@pytest.fixture()
def client():
    asyncio.run(_reset_schema())
    with TestClient(app) as test_client:
        yield test_client


def signup(client, username="alice", email=None, password="password123", **extra):
    payload = {
        "username": username,
        "email": email or f"{username}@example.com",
        "password": password,
        "firstName": extra.get("first_name", username.title()),
        "lastName": extra.get("last_name", "Tester"),
    }
    return client.post(f"{API}/auth/signup", json=payload)


def auth_headers(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def alice(client):
    response = signup(client, "alice")
    assert response.status_code == 201, response.text
    return auth_headers(response.json()["token"])


@pytest.fixture()
def bob(client):
    response = signup(client, "bob")
    assert response.status_code == 201, response.text
    return auth_headers(response.json()["token"])
