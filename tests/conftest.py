from datetime import timedelta

import pytest
from fastapi.testclient import TestClient

from backend.app.core.config import Settings
from backend.app.db.session import Database
from backend.app.main import create_app
from backend.app.security.authenticator import SessionAuthenticator
from backend.app.security.hashing import PasswordHasher
from backend.app.security.sessions import InMemorySessionStore, SessionCookieCodec
from backend.app.services.auth import AuthService
from backend.app.services.messages import MessageService
from backend.app.stores.credentials import CredentialStore
from backend.app.stores.messages import MessageStore


@pytest.fixture
def settings(tmp_path):
    return Settings(
        DATABASE_URL=f"sqlite:///{tmp_path / 'test.db'}",
        SECRET_KEY="test-secret",
        CORS_ORIGINS="",
        PASSWORD_HASH_ROUNDS=1000,
        _env_file=None,
    )


@pytest.fixture
async def db(settings):
    database = Database(settings)
    await database.create_all()
    yield database
    await database.dispose()


@pytest.fixture
def credential_store(db):
    return CredentialStore(db)


@pytest.fixture
def message_store(db, credential_store):
    return MessageStore(db, credential_store)


@pytest.fixture
def session_store():
    return InMemorySessionStore(ttl=timedelta(days=7))


@pytest.fixture
def authenticator(session_store, settings):
    return SessionAuthenticator(session_store, SessionCookieCodec(settings.SECRET_KEY), settings)


@pytest.fixture
def hasher(settings):
    return PasswordHasher(settings)


@pytest.fixture
def auth_service(credential_store, session_store, authenticator, settings, hasher):
    return AuthService(credential_store, session_store, authenticator, settings, hasher)


@pytest.fixture
def message_service(message_store, settings):
    return MessageService(message_store, settings)


@pytest.fixture
def client(settings):
    app = create_app(settings)
    with TestClient(app) as test_client:
        yield test_client
