# backend/app/security/hashing.py
from passlib.context import CryptContext

from backend.app.core.config import Settings


class PasswordHasher:
    """
    passlib context built from the application settings.

    PASSWORD_HASH_ROUNDS is the fixed cost for PASSWORD_HASH_SCHEME, in that
    scheme's own unit (iterations for pbkdf2/sha-crypt, log2 cost for bcrypt).
    """

    def __init__(self, settings: Settings):
        self.scheme = settings.PASSWORD_HASH_SCHEME
        self.context = CryptContext(
            schemes=[self.scheme],
            deprecated="auto",
            **{f"{self.scheme}__default_rounds": settings.PASSWORD_HASH_ROUNDS},
        )

    def hash(self, password: str) -> str:
        """Hash a plain-text password with the configured scheme."""
        return self.context.hash(password)

    def verify(self, plain_password: str, hashed_password: str) -> bool:
        """Verify a candidate password against a stored hash."""
        return self.context.verify(plain_password, hashed_password)

    def dummy_verify(self) -> bool:
        """
        Spend the same time as a real verification.

        Used when the username does not exist so that login timing does not
        reveal which usernames are registered.
        """
        return self.context.dummy_verify()
