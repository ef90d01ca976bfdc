# backend/app/services/auth.py
"""
Signup, login and logout.

Flow for signup: validate -> check exists -> hash -> create -> start session.
Flow for login: look up -> verify hash -> start session.

Starting a session retires the one the browser already held, so a
browser never holds more than one live session.
"""
import logging
from dataclasses import dataclass
from typing import Optional

from starlette.concurrency import run_in_threadpool
from starlette.requests import Request

from backend.app.core.config import Settings
from backend.app.core.errors import AuthError, ConflictError, ValidationError
from backend.app.security.hashing import PasswordHasher
from backend.app.security.authenticator import Identity, SessionAuthenticator
from backend.app.security.sessions import Session, SessionStore
from backend.app.stores.credentials import CredentialStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthenticatedSession:
    identity: Identity
    session: Session


class AuthService:
    def __init__(
        self,
        credentials: CredentialStore,
        sessions: SessionStore,
        authenticator: SessionAuthenticator,
        settings: Settings,
        hasher: Optional[PasswordHasher] = None,
    ):
        self.credentials = credentials
        self.sessions = sessions
        self.authenticator = authenticator
        self.settings = settings
        self.hasher = hasher or PasswordHasher(settings)

    async def signup(
        self,
        username: Optional[str],
        password: Optional[str],
        previous_token: Optional[str] = None,
    ) -> AuthenticatedSession:
        username = (username or "").strip()
        password = password or ""
        self._validate_signup(username, password)

        # Fast path only, the unique constraint in create_user decides
        if await self.credentials.get_user_by_username(username) is not None:
            raise ConflictError("Username already taken")

        password_hash = await run_in_threadpool(self.hasher.hash, password)
        await self.credentials.create_user(username, password_hash)

        logger.info("User signed up: %s", username)
        return self._establish(username, previous_token)

    async def login(
        self,
        username: Optional[str],
        password: Optional[str],
        previous_token: Optional[str] = None,
    ) -> AuthenticatedSession:
        username = (username or "").strip()
        password = password or ""

        user = await self.credentials.get_user_by_username(username) if username else None
        if user is None:
            await run_in_threadpool(self.hasher.dummy_verify)
            raise AuthError("Invalid credentials")

        ok = await run_in_threadpool(self.hasher.verify, password, user.password_hash)
        if not ok:
            raise AuthError("Invalid credentials")

        logger.info("User logged in: %s", user.username)
        return self._establish(user.username, previous_token)

    def logout(self, token: Optional[str]) -> None:
        """Destroy the session behind ``token``. Never raises."""
        if token is None:
            return
        try:
            self.sessions.destroy(token)
        except Exception:
            logger.exception("Failed to destroy session during logout")

    def current_identity(self, request: Request) -> Optional[Identity]:
        return self.authenticator.current_identity(request)

    def _establish(self, username: str, previous_token: Optional[str]) -> AuthenticatedSession:
        self.logout(previous_token)
        session = self.sessions.create(username)
        return AuthenticatedSession(identity=Identity(username=username), session=session)

    def _validate_signup(self, username: str, password: str) -> None:
        if len(username) < self.settings.USERNAME_MIN_LENGTH:
            raise ValidationError(
                f"Username must be at least {self.settings.USERNAME_MIN_LENGTH} characters"
            )
        if len(username) > self.settings.USERNAME_MAX_LENGTH:
            raise ValidationError(
                f"Username must be at most {self.settings.USERNAME_MAX_LENGTH} characters"
            )
        if len(password) < self.settings.PASSWORD_MIN_LENGTH:
            raise ValidationError(
                f"Password must be at least {self.settings.PASSWORD_MIN_LENGTH} characters"
            )
