# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Generator, Iterator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ["GEMINI_API_KEY"] = ""

from comment_stage.api.v1.dependencies import get_moderation_oracle
from comment_stage.core.security import create_access_token
from comment_stage.db.session import Base
from comment_stage.db.session import get_db as app_get_session
from comment_stage.main import app as fastapi_app
from comment_stage.models import User
from tests.helpers import FakeModerationOracle, make_user

TEST_DB_URL = "sqlite://"


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    SessionLocal = sessionmaker(
        bind=engine,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()

        # Ensure each test sees a clean database even if commits occurred.
        with engine.begin() as cleanup_conn:
            for table in reversed(Base.metadata.sorted_tables):
                cleanup_conn.execute(table.delete())


@pytest.fixture()
def oracle() -> FakeModerationOracle:
    """Moderation oracle that approves with rating 4 unless reconfigured."""
    return FakeModerationOracle()


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_dependencies(
    app: FastAPI,
    db_session: Session,
    oracle: FakeModerationOracle,
) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    app.dependency_overrides[get_moderation_oracle] = lambda: oracle
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)
        app.dependency_overrides.pop(get_moderation_oracle, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def alice(db_session: Session) -> User:
    """Primary test user."""
    return make_user(db_session, "Alice")


@pytest.fixture()
def bob(db_session: Session) -> User:
    """Secondary test user."""
    return make_user(db_session, "Bob")


@pytest.fixture()
def carol(db_session: Session) -> User:
    """Third test user."""
    return make_user(db_session, "Carol")


@pytest.fixture()
def alice_auth(alice: User) -> dict[str, str]:
    """Authorization headers for Alice."""
    return {"Authorization": f"Bearer {create_access_token(alice.id)}"}


@pytest.fixture()
def bob_auth(bob: User) -> dict[str, str]:
    """Authorization headers for Bob."""
    return {"Authorization": f"Bearer {create_access_token(bob.id)}"}
