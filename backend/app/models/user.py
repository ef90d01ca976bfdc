# backend/app/models/user.py
from sqlalchemy import Column, Integer, String
from sqlalchemy.sql import func
from backend.app.db.base import Base, UTCDateTime, utc_now


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    # The unique constraint is the only source of truth for "username taken"
    username = Column(String(50), unique=True, index=True, nullable=False)

    # Opaque passlib hash, never leaves the credential store
    password_hash = Column(String(255), nullable=False)

    created_at = Column(UTCDateTime, default=utc_now, server_default=func.now(), nullable=False)

    def __repr__(self) -> str:
        return f"<User id={self.id} username={self.username!r}>"
