# backend/app/security/authenticator.py
"""
Request gate for protected operations.

``require_session`` fails closed with Unauthenticated, ``current_identity``
is the non-failing probe behind "who am I". Neither mutates the session
store.
"""
from dataclasses import dataclass
from typing import Optional

from starlette.requests import Request
from starlette.responses import Response

from backend.app.core.config import Settings
from backend.app.core.errors import Unauthenticated
from backend.app.security.sessions import Session, SessionCookieCodec, SessionStore


@dataclass(frozen=True)
class Identity:
    """An authenticated username."""

    username: str


class SessionAuthenticator:
    def __init__(self, store: SessionStore, codec: SessionCookieCodec, settings: Settings):
        self.store = store
        self.codec = codec
        self.cookie_name = settings.SESSION_COOKIE_NAME
        self.cookie_max_age = settings.session_ttl_seconds
        self.cookie_secure = settings.session_cookie_secure
        self.cookie_samesite = settings.SESSION_COOKIE_SAMESITE

    def token_from_request(self, request: Request) -> Optional[str]:
        value = request.cookies.get(self.cookie_name)
        if not value:
            return None
        return self.codec.decode(value)

    def current_identity(self, request: Request) -> Optional[Identity]:
        token = self.token_from_request(request)
        if token is None:
            return None
        session = self.store.get(token)
        if session is None or not session.username:
            return None
        return Identity(username=session.username)

    def require_session(self, request: Request) -> Identity:
        identity = self.current_identity(request)
        if identity is None:
            raise Unauthenticated()
        return identity

    def issue_cookie(self, response: Response, session: Session) -> None:
        response.set_cookie(
            key=self.cookie_name,
            value=self.codec.encode(session),
            max_age=self.cookie_max_age,
            httponly=True,
            secure=self.cookie_secure,
            samesite=self.cookie_samesite,
        )

    def clear_cookie(self, response: Response) -> None:
        response.delete_cookie(
            key=self.cookie_name,
            httponly=True,
            secure=self.cookie_secure,
            samesite=self.cookie_samesite,
        )
