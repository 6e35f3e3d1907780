"""Pytest bootstrap for project imports and shared fixtures."""

import os
import sys
import tempfile
from pathlib import Path

# Settings are read at import time; keep tests off the real database and
# upload directory before anything from cityfix is imported.
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="cityfix-uploads-"))
os.environ.setdefault("STORAGE_TYPE", "local")
os.environ.setdefault("SECRET_KEY", "test-secret")

# Ensure project root is on sys.path so `import cityfix` works
PROJECT_ROOT = Path(__file__).resolve().parents[1]
project_root_str = str(PROJECT_ROOT)
if project_root_str not in sys.path:
    sys.path.insert(0, project_root_str)

from datetime import datetime, timedelta, UTC

import pytest
from jose import jwt
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from cityfix import models  # noqa: E402,F401
from cityfix.config import settings
from cityfix.database import Base
from cityfix.models.user import User, UserRole


@pytest.fixture
def db_session():
    # StaticPool keeps one in-memory database across TestClient worker threads.
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
        engine.dispose()


def _create_user(db, *, name: str, email: str, role: str) -> User:
    user = User(name=name, email=email, role=role)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def users(db_session):
    """A report owner, another citizen and an admin."""
    return {
        "owner": _create_user(db_session, name="Ana Owner", email="owner@cityfix.org", role=UserRole.CITIZEN.value),
        "other": _create_user(db_session, name="Bruno Other", email="other@cityfix.org", role=UserRole.CITIZEN.value),
        "admin": _create_user(db_session, name="Carla Admin", email="admin@cityfix.org", role=UserRole.ADMIN.value),
    }


def sign_token(user, expires_in: timedelta = timedelta(hours=1)) -> str:
    """Token with the claims the auth service issues (sub, email, role)."""
    claims = {
        "sub": user.id,
        "email": user.email,
        "role": user.role,
        "exp": datetime.now(UTC) + expires_in,
    }
    return jwt.encode(claims, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


@pytest.fixture
def auth_headers():
    def _headers(user, expires_in: timedelta = timedelta(hours=1)) -> dict:
        return {"Authorization": f"Bearer {sign_token(user, expires_in)}"}
    return _headers
