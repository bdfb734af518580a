"""Shared pytest fixtures: in-memory database, test settings and API client."""

import pytest
from fastapi import BackgroundTasks
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from users_api.config import Settings, get_settings
from users_api.core.security import PasswordHasher, TokenCodec
from users_api.application.services.auth_service import CredentialService
from users_api.domain.models.user import User  # noqa: F401
from users_api.infrastructure.database import Base, get_db
from users_api.infrastructure.repositories.user_repository import SQLAlchemyUserRepository
from users_api.interfaces.deps import get_notifier
from users_api.main import app

ADMIN_KEY = "test-admin-key"


class RecordingNotifier:
    """Stands in for the SMTP relay; remembers what would have been sent."""

    def __init__(self, succeed=True):
        self.sent = []
        self.succeed = succeed

    async def notify(self, email, verification_token):
        self.sent.append((email, verification_token))
        return self.succeed


@pytest.fixture()
def settings():
    return Settings(
        SECRET_KEY="test-secret",
        BCRYPT_ROUNDS=4,
        ADMIN_API_KEY=ADMIN_KEY,
        BASE_URL="http://testserver",
        SMTP_USER="mailer@example.com",
        SMTP_PASSWORD="smtp-secret",
    )


@pytest.fixture()
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture()
def db_session(engine):
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def repo(db_session):
    return SQLAlchemyUserRepository(db_session)


@pytest.fixture()
def notifier():
    return RecordingNotifier()


@pytest.fixture()
def token_codec(settings):
    return TokenCodec.from_settings(settings)


@pytest.fixture()
def service(repo, notifier, token_codec, settings):
    return CredentialService(
        repo,
        notifier,
        token_codec,
        PasswordHasher(rounds=settings.BCRYPT_ROUNDS),
        BackgroundTasks(),
    )


@pytest.fixture()
def client(engine, settings, notifier):
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    def override_get_db():
        db = TestingSession()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_notifier] = lambda: notifier

    yield TestClient(app)

    app.dependency_overrides.clear()
