from backend.app.models.user import User
from backend.app.models.message import Message

__all__ = ["User", "Message"]
