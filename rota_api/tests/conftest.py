"""
Pytest Configuration and Shared Fixtures for API Tests

This conftest.py provides:
- a temporary DB_PATH / LOGS_DIR, set BEFORE any rota_api module is imported
- reset_db: clean schema for every test (autouse)
- client: FastAPI TestClient for HTTP requests
- user_store: RecordStore over the users table
- seed_user / user_token / auth_headers: an existing user and its JWT
"""
import os
import tempfile
from pathlib import Path

import pytest

# Settings and the SQLAlchemy engine are built on first import, so the
# environment has to be in place at collection time.
_TMP_DIR = Path(tempfile.mkdtemp(prefix="rota_api_tests_"))
os.environ["DB_PATH"] = str(_TMP_DIR / "test_rota.db")
os.environ["LOGS_DIR"] = str(_TMP_DIR / "logs")
os.environ["JWT_SECRET_KEY"] = "test-secret-key-0123456789abcdef0123456789"
os.environ["BCRYPT_ROUNDS"] = "4"  # fast hashing in tests
os.environ["TZ"] = "UTC"

SEED_EMAIL = "user@example.com"
SEED_PASSWORD = "password1"


@pytest.fixture(autouse=True)
def reset_db():
    """Drop and recreate all tables around each test."""
    from rota_api.db import engine
    from rota_api.models import Base

    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def logs_dir():
    return Path(os.environ["LOGS_DIR"])


@pytest.fixture
def client():
    """TestClient with lifespan (init_db) enabled."""
    from fastapi.testclient import TestClient
    from rota_api.main import app

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def user_store():
    from rota_api.db import SessionLocal
    from rota_api.models import User
    from rota_api.record_store import RecordStore

    return RecordStore(User, SessionLocal)


@pytest.fixture
def seed_user(user_store):
    """
    Seed an active user without shift history.

    Returns: dict with id, email and plaintext password
    """
    from rota_api.auth import hash_password

    record = user_store.create_record({
        "first_name": "Olayiwola",
        "last_name": "Sobowale",
        "email": SEED_EMAIL,
        "password": hash_password(SEED_PASSWORD),
    })
    return {"id": record["id"], "email": SEED_EMAIL, "password": SEED_PASSWORD}


@pytest.fixture
def user_token(seed_user):
    from rota_api.auth import create_access_token

    return create_access_token(seed_user["id"])


@pytest.fixture
def auth_headers(user_token):
    """Returns: dict {"Authorization": "Bearer <token>"}"""
    return {"Authorization": f"Bearer {user_token}"}
