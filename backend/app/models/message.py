# backend/app/models/message.py
from sqlalchemy import Column, Integer, String, Text
from sqlalchemy.sql import func
from backend.app.db.base import Base, UTCDateTime, utc_now


class Message(Base):
    __tablename__ = "messages"

    id = Column(Integer, primary_key=True, index=True)

    # Usernames are stored by value, recipients need not have an account
    from_user = Column(String(50), nullable=False, index=True)
    to_user = Column(String(50), nullable=False, index=True)

    subject = Column(String(100), nullable=False)
    body = Column(Text, nullable=False)

    created_at = Column(UTCDateTime, default=utc_now, server_default=func.now(), nullable=False)

    def __repr__(self) -> str:
        return f"<Message id={self.id} {self.from_user!r} -> {self.to_user!r}>"
