# backend/app/services/messages.py
import logging
from typing import List, Optional

from backend.app.core.config import Settings
from backend.app.core.errors import ValidationError
from backend.app.models.message import Message
from backend.app.security.authenticator import Identity
from backend.app.stores.messages import MessageStore

logger = logging.getLogger(__name__)


class MessageService:
    """Send and read messages on behalf of an authenticated identity."""

    def __init__(self, store: MessageStore, settings: Settings):
        self.store = store
        self.settings = settings

    async def send(
        self,
        identity: Identity,
        to_user: Optional[str],
        subject: Optional[str],
        body: Optional[str],
    ) -> int:
        """
        Store a message from ``identity`` to ``to_user`` and return its id.

        The recipient does not need to have an account.
        """
        to_user = (to_user or "").strip()
        subject = (subject or "").strip()
        body = (body or "").strip()

        if not to_user or not subject or not body:
            raise ValidationError("toUser, subject, and body are required")
        if to_user == identity.username:
            raise ValidationError("Cannot send message to yourself")
        if len(to_user) > self.settings.USERNAME_MAX_LENGTH:
            raise ValidationError(
                f"toUser must be at most {self.settings.USERNAME_MAX_LENGTH} characters"
            )
        if len(subject) > self.settings.SUBJECT_MAX_LENGTH:
            raise ValidationError(
                f"Subject must be at most {self.settings.SUBJECT_MAX_LENGTH} characters"
            )
        if len(body) > self.settings.BODY_MAX_LENGTH:
            raise ValidationError(
                f"Body must be at most {self.settings.BODY_MAX_LENGTH} characters"
            )

        message_id = await self.store.add_message(identity.username, to_user, subject, body)
        logger.info("Message %s sent: %s -> %s", message_id, identity.username, to_user)
        return message_id

    async def inbox(self, identity: Identity) -> List[Message]:
        return await self.store.get_messages_for_user(identity.username)

    async def sent(self, identity: Identity) -> List[Message]:
        return await self.store.get_messages_from_user(identity.username)

    async def list_recipients(self, identity: Identity) -> List[str]:
        return await self.store.list_other_usernames(identity.username)
