# backend/app/schemas/message.py
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class SendMessageRequest(BaseModel):
    # Accepts both the camelCase keys sent by the browser client and snake_case
    model_config = ConfigDict(populate_by_name=True)

    to_user: Optional[str] = Field(default=None, alias="toUser")
    subject: Optional[str] = None
    body: Optional[str] = None


class SendMessageResponse(BaseModel):
    message: str = "Message sent"
    id: int


class MessageResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    from_user: str
    to_user: str
    subject: str
    body: str
    created_at: datetime


class MessageListResponse(BaseModel):
    success: bool = True
    messages: List[MessageResponse]
