# backend/app/api/v1/endpoints/users.py
from fastapi import APIRouter, Depends

from backend.app.api import deps
from backend.app.schemas.user import UserListResponse
from backend.app.security.authenticator import Identity
from backend.app.services.messages import MessageService

router = APIRouter()


@router.get("", response_model=UserListResponse)
async def list_recipients(
        identity: Identity = Depends(deps.get_current_identity),
        service: MessageService = Depends(deps.get_message_service),
):
    """Usernames the caller can write to, excluding the caller."""
    return UserListResponse(users=await service.list_recipients(identity))
