from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterator
from pathlib import Path

import httpx
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("AUTO_CREATE_TABLES", "false")

from threadline.db.session import Base, enable_sqlite_foreign_keys
from threadline.db.session import get_db as app_get_session
from threadline.main import app as fastapi_app
from threadline.models import Post, User
from threadline.services.summarizer import (
    SummarizerClient,
    SummarizerConfig,
    SummaryService,
    get_summary_service,
)
from tests.helpers import create_post, create_user

ProviderHandler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture()
def engine(tmp_path: Path) -> Generator[Engine, None, None]:
    engine = create_engine(
        f"sqlite:///{tmp_path / 'threadline-test.db'}",
        connect_args={"check_same_thread": False},
    )
    enable_sqlite_foreign_keys(engine)
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture()
def db_session(session_factory: sessionmaker[Session]) -> Iterator[Session]:
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(
    app: FastAPI,
    session_factory: sessionmaker[Session],
) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def summarizer_config() -> SummarizerConfig:
    """Provider configuration pointing at a fake host."""
    return SummarizerConfig(
        api_key="test-api-key",
        base_url="https://provider.test",
        model="test-model",
        timeout_seconds=1.0,
        prompt="Summarize the following set of replies:",
    )


@pytest.fixture()
def provider_requests() -> list[httpx.Request]:
    """Requests received by the fake summarization provider."""
    return []


@pytest.fixture()
def make_summary_service(
    summarizer_config: SummarizerConfig,
    provider_requests: list[httpx.Request],
) -> Callable[[ProviderHandler], SummaryService]:
    """Return a factory wiring a SummaryService to a fake provider handler."""

    def _factory(handler: ProviderHandler) -> SummaryService:
        def _record(request: httpx.Request) -> httpx.Response:
            provider_requests.append(request)
            return handler(request)

        client = SummarizerClient(summarizer_config, transport=httpx.MockTransport(_record))
        return SummaryService(client)

    return _factory


@pytest.fixture()
def use_summary_service(app: FastAPI) -> Iterator[Callable[[SummaryService], None]]:
    """Install a SummaryService for the summary endpoint."""

    def _install(service: SummaryService) -> None:
        app.dependency_overrides[get_summary_service] = lambda: service

    try:
        yield _install
    finally:
        app.dependency_overrides.pop(get_summary_service, None)


@pytest.fixture()
def test_user(db_session: Session) -> User:
    """Create and return a persisted test user."""
    return create_user(db_session, "u-1", username="Test User")


@pytest.fixture()
def other_user(db_session: Session) -> User:
    """Create and return a second persisted user."""
    return create_user(db_session, "u-2", username="Other User")


@pytest.fixture()
def test_post(db_session: Session, test_user: User) -> Post:
    """Create a baseline post for tests."""
    return create_post(db_session, test_user, "hello")
