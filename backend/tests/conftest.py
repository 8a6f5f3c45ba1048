import os

# Point settings at throwaway values before any devconnect import reads them
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from devconnect.core.config import settings
from devconnect.core.database import Base, get_db
from devconnect.core.security import TokenService, get_password_hash
from devconnect.main import app
from devconnect.models import post, profile  # noqa: F401  (register tables)
from devconnect.models.user import User
from devconnect.services.auth_service import gravatar_url

TEST_PASSWORD = "secret123"


@pytest.fixture
def engine():
    # One shared in-memory connection, usable from the TestClient's threads
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture(scope="session")
def password_hash():
    # bcrypt is slow on purpose; hash once for the whole run
    return get_password_hash(TEST_PASSWORD)


@pytest.fixture
def token_service():
    return TokenService.from_settings(settings)


@pytest.fixture
def make_user(db, password_hash):
    def _make_user(name="Alice", email=None):
        email = email or f"{name.lower()}@example.com"
        user = User(
            name=name,
            email=email,
            hashed_password=password_hash,
            avatar=gravatar_url(email),
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make_user


@pytest.fixture
def auth_headers(token_service):
    def _auth_headers(user):
        return {settings.AUTH_TOKEN_HEADER: token_service.issue(user.id)}

    return _auth_headers
