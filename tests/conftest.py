"""Pytest configuration and fixtures."""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from app.core.security import create_access_token
from app.database import get_session
from app.main import app
from app.models.user import Role, User


@pytest.fixture
def session():
    """In-memory database shared by the test and the app under test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    with Session(engine) as session:
        yield session


@pytest.fixture
def client(session: Session):
    app.dependency_overrides[get_session] = lambda: session
    yield TestClient(app)
    app.dependency_overrides.clear()


def _make_user(session: Session, **fields) -> User:
    user = User(**fields)
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


@pytest.fixture
def make_user(session: Session):
    return lambda **fields: _make_user(session, **fields)


@pytest.fixture
def admin(make_user) -> User:
    return make_user(email="admin@example.com", username="admin", role=Role.ADMIN, password="not-a-real-hash")


@pytest.fixture
def member(make_user) -> User:
    return make_user(
        email="alice@example.com",
        username="alice",
        name="Alice",
        avatar="data:image/png;base64,iVBORw0KGgo=",
        password="not-a-real-hash",
    )


def _bearer(user: User) -> dict:
    return {"Authorization": f"Bearer {create_access_token({'sub': user.email})}"}


@pytest.fixture
def headers_for():
    return _bearer


@pytest.fixture
def admin_headers(admin: User) -> dict:
    return _bearer(admin)


@pytest.fixture
def member_headers(member: User) -> dict:
    return _bearer(member)
