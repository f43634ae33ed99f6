"""Shared test fixtures."""
import base64
import hashlib
import hmac
import json
import os
import time
from datetime import datetime

# Must be set before the app package reads its configuration
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SUPABASE_JWT_SECRET"] = "test-jwt-secret"
os.environ["SUPABASE_URL"] = "http://supabase.test"
os.environ["SUPABASE_ANON_KEY"] = "test-anon-key"
os.environ["CLINIC_TIMEZONE"] = "UTC"
os.environ["DB_LOG_SLOW_QUERIES"] = "false"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.database import Base, get_db
from app.domain.scheduling import get_now
from app.main import app
from app.models import Doctor, Profile
from app.routes.auth import login_rate_limiter, signup_rate_limiter

TEST_JWT_SECRET = "test-jwt-secret"
USER_ID = "7d6b1c2e-4a55-4c1f-9b1e-0c9f5a1d2e01"
OTHER_USER_ID = "1f0e2d3c-5b6a-4789-8c7d-6e5f4a3b2c10"

# Fixed clinic clock for every request: Sunday 2025-06-01 09:00
NOW = datetime(2025, 6, 1, 9, 0)


def _b64(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode()


def make_token(
    sub: str = USER_ID,
    secret: str = TEST_JWT_SECRET,
    exp_offset: int = 3600,
    aud: str = "authenticated",
    alg: str = "HS256",
    email: str = "patient@example.com",
) -> str:
    """Build a Supabase-style HS256 access token."""
    header = _b64(json.dumps({"alg": alg, "typ": "JWT"}).encode())
    claims = {"sub": sub, "aud": aud, "exp": int(time.time()) + exp_offset, "email": email}
    payload = _b64(json.dumps(claims).encode())
    signature = hmac.new(secret.encode(), f"{header}.{payload}".encode(), hashlib.sha256).digest()
    return f"{header}.{payload}.{_b64(signature)}"


@pytest.fixture
def db_session():
    """Fresh in-memory database per test."""
    engine = create_engine(
        "sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool
    )
    Base.metadata.create_all(bind=engine)
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSession()
    yield session
    session.close()
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def client(db_session):
    """FastAPI test client wired to the test database and a fixed clock."""

    def override_get_db():
        yield db_session

    async def no_rate_limit():
        return None

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_now] = lambda: NOW
    app.dependency_overrides[login_rate_limiter] = no_rate_limit
    app.dependency_overrides[signup_rate_limiter] = no_rate_limit
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    return {"Authorization": f"Bearer {make_token()}"}


@pytest.fixture
def other_auth_headers():
    return {"Authorization": f"Bearer {make_token(sub=OTHER_USER_ID, email='other@example.com')}"}


@pytest.fixture
def doctor(db_session) -> Doctor:
    doctor = Doctor(name="Dr. John Doe", specialization="Cardiology")
    db_session.add(doctor)
    db_session.commit()
    db_session.refresh(doctor)
    return doctor


@pytest.fixture
def profile(db_session) -> Profile:
    profile = Profile(user_id=USER_ID, full_name="Pat Patient", username="pat")
    db_session.add(profile)
    db_session.commit()
    db_session.refresh(profile)
    return profile


@pytest.fixture
def other_profile(db_session) -> Profile:
    profile = Profile(user_id=OTHER_USER_ID, full_name="Olive Other", username="olive")
    db_session.add(profile)
    db_session.commit()
    db_session.refresh(profile)
    return profile


@pytest.fixture
def token_factory():
    """Expose make_token to test modules."""
    return make_token


@pytest.fixture
def user_id() -> str:
    return USER_ID


@pytest.fixture
def now() -> datetime:
    return NOW
