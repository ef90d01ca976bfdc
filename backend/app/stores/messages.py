# backend/app/stores/messages.py
"""
Message store: persists messages by sender/recipient username.

Both queries return newest first. ``created_at`` is assigned by the
database, ties are broken by the monotonic id.
"""
import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from backend.app.core.errors import StoreError
from backend.app.db.session import Database
from backend.app.models.message import Message
from backend.app.stores.credentials import CredentialStore

logger = logging.getLogger(__name__)


class MessageStore:
    def __init__(self, db: Database, credentials: Optional[CredentialStore] = None):
        self.db = db
        self.credentials = credentials or CredentialStore(db)

    async def add_message(self, from_user: str, to_user: str, subject: str, body: str) -> int:
        message = Message(from_user=from_user, to_user=to_user, subject=subject, body=body)
        try:
            async with self.db.session() as session:
                session.add(message)
                await session.commit()
                return message.id
        except SQLAlchemyError as e:
            logger.exception("Failed to store message from %s to %s", from_user, to_user)
            raise StoreError() from e

    async def get_messages_for_user(self, username: str) -> List[Message]:
        """Messages addressed to ``username``."""
        return await self._newest_first(Message.to_user == username)

    async def get_messages_from_user(self, username: str) -> List[Message]:
        """Messages written by ``username``."""
        return await self._newest_first(Message.from_user == username)

    async def list_other_usernames(self, username: str) -> List[str]:
        return await self.credentials.list_other_usernames(username)

    async def _newest_first(self, criterion) -> List[Message]:
        query = (
            select(Message)
            .where(criterion)
            .order_by(Message.created_at.desc(), Message.id.desc())
        )
        try:
            async with self.db.session() as session:
                result = await session.execute(query)
                return list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.exception("Failed to load messages")
            raise StoreError() from e
