# backend/app/api/v1/endpoints/messages.py
from fastapi import APIRouter, Depends, status

from backend.app.api import deps
from backend.app.schemas.message import (
    MessageListResponse,
    MessageResponse,
    SendMessageRequest,
    SendMessageResponse,
)
from backend.app.security.authenticator import Identity
from backend.app.services.messages import MessageService

router = APIRouter()


@router.post("", response_model=SendMessageResponse, status_code=status.HTTP_201_CREATED)
async def send_message(
        payload: SendMessageRequest,
        identity: Identity = Depends(deps.get_current_identity),
        service: MessageService = Depends(deps.get_message_service),
):
    # The sender always comes from the session, never from the body
    message_id = await service.send(identity, payload.to_user, payload.subject, payload.body)
    return SendMessageResponse(id=message_id)


@router.get("/inbox", response_model=MessageListResponse)
async def inbox(
        identity: Identity = Depends(deps.get_current_identity),
        service: MessageService = Depends(deps.get_message_service),
):
    messages = await service.inbox(identity)
    return MessageListResponse(messages=[MessageResponse.model_validate(m) for m in messages])


@router.get("/sent", response_model=MessageListResponse)
async def sent(
        identity: Identity = Depends(deps.get_current_identity),
        service: MessageService = Depends(deps.get_message_service),
):
    messages = await service.sent(identity)
    return MessageListResponse(messages=[MessageResponse.model_validate(m) for m in messages])
