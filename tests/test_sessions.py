from datetime import datetime, timedelta, timezone

from jose import jwt
from starlette.requests import Request
from starlette.responses import Response

import pytest

from backend.app.core.errors import Unauthenticated
from backend.app.security.sessions import InMemorySessionStore, SessionCookieCodec


class FakeClock:
    def __init__(self):
        self.now = datetime(2024, 1, 1, tzinfo=timezone.utc)

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)


def request_with_cookie(name=None, value=None):
    headers = []
    if name is not None:
        headers.append((b"cookie", f"{name}={value}".encode()))
    return Request({"type": "http", "method": "GET", "path": "/", "headers": headers})


def test_session_lives_until_ttl_and_is_not_renewed():
    clock = FakeClock()
    store = InMemorySessionStore(ttl=timedelta(days=7), clock=clock)
    session = store.create("alice")

    clock.advance(days=6)
    assert store.get(session.token).username == "alice"

    clock.advance(days=1)
    assert store.get(session.token) is None
    assert len(store) == 0


def test_tokens_are_unique():
    store = InMemorySessionStore(ttl=timedelta(days=7))
    tokens = {store.create("alice").token for _ in range(50)}
    assert len(tokens) == 50


def test_destroy_is_idempotent():
    store = InMemorySessionStore(ttl=timedelta(days=7))
    session = store.create("alice")
    store.destroy(session.token)
    store.destroy(session.token)
    store.destroy("never-issued")
    assert store.get(session.token) is None


def test_purge_expired_only_drops_expired_sessions():
    clock = FakeClock()
    store = InMemorySessionStore(ttl=timedelta(hours=1), clock=clock)
    old = store.create("alice")
    clock.advance(minutes=30)
    fresh = store.create("bob")
    clock.advance(minutes=45)

    assert store.purge_expired() == 1
    assert store.get(old.token) is None
    assert store.get(fresh.token).username == "bob"


def test_cookie_codec_rejects_tampered_and_foreign_values():
    store = InMemorySessionStore(ttl=timedelta(days=7))
    session = store.create("alice")
    codec = SessionCookieCodec("secret-one")

    value = codec.encode(session)
    assert codec.decode(value) == session.token
    assert SessionCookieCodec("secret-two").decode(value) is None
    assert codec.decode(value[:-2] + "xx") is None
    assert codec.decode(session.token) is None


def test_cookie_codec_rejects_value_without_sid():
    codec = SessionCookieCodec("secret")
    value = jwt.encode({"user": "alice"}, "secret", algorithm="HS256")
    assert codec.decode(value) is None


def test_require_session_returns_bound_identity(session_store, authenticator):
    session = session_store.create("alice")
    request = request_with_cookie("sid", authenticator.codec.encode(session))

    assert authenticator.require_session(request).username == "alice"
    assert authenticator.current_identity(request).username == "alice"


def test_require_session_fails_closed_without_cookie(authenticator):
    request = request_with_cookie()
    with pytest.raises(Unauthenticated):
        authenticator.require_session(request)
    assert authenticator.current_identity(request) is None


def test_require_session_fails_for_destroyed_session(session_store, authenticator):
    session = session_store.create("alice")
    request = request_with_cookie("sid", authenticator.codec.encode(session))
    session_store.destroy(session.token)

    with pytest.raises(Unauthenticated):
        authenticator.require_session(request)


def test_issued_cookie_is_http_only_with_seven_day_lifetime(session_store, authenticator):
    response = Response()
    authenticator.issue_cookie(response, session_store.create("alice"))

    header = response.headers["set-cookie"]
    assert header.startswith("sid=")
    assert "HttpOnly" in header
    assert "Max-Age=604800" in header
    assert "SameSite=lax" in header
    assert "Secure" not in header


def test_creating_a_session_evicts_expired_ones():
    clock = FakeClock()
    store = InMemorySessionStore(ttl=timedelta(hours=1), clock=clock)
    abandoned = [store.create("alice") for _ in range(3)]
    clock.advance(hours=2)

    store.create("bob")

    assert len(store) == 1
    assert all(store.get(s.token) is None for s in abandoned)
