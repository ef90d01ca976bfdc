# backend/app/stores/credentials.py
"""
Credential store: persists username + password hash.

Username uniqueness is enforced by the ``users.username`` unique
constraint. An insert that violates it raises ConflictError, it never
overwrites the existing row.
"""
import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from backend.app.core.errors import ConflictError, StoreError
from backend.app.db.session import Database
from backend.app.models.user import User

logger = logging.getLogger(__name__)


class CredentialStore:
    def __init__(self, db: Database):
        self.db = db

    async def create_user(self, username: str, password_hash: str) -> int:
        """Insert one user row and return its id."""
        user = User(username=username, password_hash=password_hash)
        async with self.db.session() as session:
            session.add(user)
            try:
                await session.commit()
            except IntegrityError:
                await session.rollback()
                raise ConflictError("Username already taken")
            except SQLAlchemyError as e:
                logger.exception("Failed to create user %s", username)
                raise StoreError() from e
            return user.id

    async def get_user_by_username(self, username: str) -> Optional[User]:
        """Return the stored user including its hash, or None."""
        try:
            async with self.db.session() as session:
                result = await session.execute(select(User).where(User.username == username))
                return result.scalars().first()
        except SQLAlchemyError as e:
            logger.exception("Failed to look up user %s", username)
            raise StoreError() from e

    async def list_other_usernames(self, username: str) -> List[str]:
        """Every username except ``username``, ascending."""
        query = (
            select(User.username)
            .where(User.username != username)
            .order_by(User.username.asc())
        )
        try:
            async with self.db.session() as session:
                result = await session.execute(query)
                return list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.exception("Failed to list usernames")
            raise StoreError() from e
