# backend/app/security/sessions.py
"""
Server-side session state.

A session binds an opaque, unguessable token to a username for a fixed
TTL. The token travels to the browser inside a cookie signed with the
server secret (see SessionCookieCodec); the binding itself only lives
in the SessionStore.

Sessions are never renewed on activity.
"""
import secrets
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, Optional

from jose import JWTError, jwt


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def generate_session_token() -> str:
    """32 random bytes, URL-safe base64."""
    return secrets.token_urlsafe(32)


@dataclass(frozen=True)
class Session:
    token: str
    username: str
    created_at: datetime
    expires_at: datetime

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expires_at


class SessionStore(ABC):
    """
    Storage for live sessions.

    Only the auth service creates and destroys sessions; everything else
    reads them through the SessionAuthenticator.
    """

    @abstractmethod
    def create(self, username: str) -> Session:
        ...

    @abstractmethod
    def get(self, token: str) -> Optional[Session]:
        """Return the live session for ``token``, or None if absent or expired."""

    @abstractmethod
    def destroy(self, token: str) -> None:
        """Remove the session. Destroying an unknown token is not an error."""

    @abstractmethod
    def purge_expired(self) -> int:
        """Drop expired sessions and return how many were removed."""


class InMemorySessionStore(SessionStore):
    """Process-local session table."""

    def __init__(self, ttl: timedelta, clock: Callable[[], datetime] = utcnow):
        self.ttl = ttl
        self.clock = clock
        self._sessions: Dict[str, Session] = {}
        self._lock = threading.Lock()

    def create(self, username: str) -> Session:
        # Abandoned sessions are only ever looked up again by chance
        self.purge_expired()
        now = self.clock()
        session = Session(
            token=generate_session_token(),
            username=username,
            created_at=now,
            expires_at=now + self.ttl,
        )
        with self._lock:
            self._sessions[session.token] = session
        return session

    def get(self, token: str) -> Optional[Session]:
        with self._lock:
            session = self._sessions.get(token)
            if session is None:
                return None
            if session.is_expired(self.clock()):
                del self._sessions[token]
                return None
            return session

    def destroy(self, token: str) -> None:
        with self._lock:
            self._sessions.pop(token, None)

    def purge_expired(self) -> int:
        now = self.clock()
        with self._lock:
            expired = [t for t, s in self._sessions.items() if s.is_expired(now)]
            for token in expired:
                del self._sessions[token]
        return len(expired)

    def __len__(self) -> int:
        return len(self._sessions)


class SessionCookieCodec:
    """
    Signs the session token for transport in a cookie.

    The cookie value is a JWT whose ``sid`` claim is the token and whose
    ``exp`` matches the session expiry. Tampered, foreign or expired
    cookies decode to None.
    """

    def __init__(self, secret_key: str, algorithm: str = "HS256"):
        self.secret_key = secret_key
        self.algorithm = algorithm

    def encode(self, session: Session) -> str:
        payload = {"sid": session.token, "exp": session.expires_at}
        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def decode(self, value: str) -> Optional[str]:
        try:
            payload = jwt.decode(value, self.secret_key, algorithms=[self.algorithm])
        except JWTError:
            return None
        token = payload.get("sid")
        if not isinstance(token, str) or not token:
            return None
        return token
