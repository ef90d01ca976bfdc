import pytest
from pydantic import ValidationError

from backend.app.core.config import Settings


def make(**kwargs):
    return Settings(_env_file=None, **kwargs)


@pytest.mark.parametrize(
    "url, expected",
    [
        ("postgres://u:p@db/app", "postgresql+asyncpg://u:p@db/app"),
        ("postgresql://u:p@db/app", "postgresql+asyncpg://u:p@db/app"),
        ("postgresql+asyncpg://u:p@db/app", "postgresql+asyncpg://u:p@db/app"),
        ("sqlite:///./local.db", "sqlite+aiosqlite:///./local.db"),
    ],
)
def test_database_url_is_normalized_for_async_drivers(url, expected):
    assert make(DATABASE_URL=url).DATABASE_URL == expected


def test_cors_origins_are_split_and_trimmed():
    settings = make(CORS_ORIGINS=" http://a.test , ,http://b.test")
    assert settings.BACKEND_CORS_ORIGINS == ["http://a.test", "http://b.test"]


def test_empty_cors_origins_means_no_origins():
    assert make(CORS_ORIGINS="  ").BACKEND_CORS_ORIGINS == []


def test_production_forces_secure_cookie():
    assert make().session_cookie_secure is False
    assert make(ENVIRONMENT="production").session_cookie_secure is True


def test_session_ttl_defaults_to_seven_days():
    assert make().session_ttl_seconds == 7 * 24 * 60 * 60


def test_invalid_samesite_is_rejected():
    with pytest.raises(ValidationError):
        make(SESSION_COOKIE_SAMESITE="sometimes")
