# backend/app/api/deps.py
from fastapi import Depends, Request

from backend.app.security.authenticator import Identity, SessionAuthenticator
from backend.app.services.auth import AuthService
from backend.app.services.messages import MessageService


def get_authenticator(request: Request) -> SessionAuthenticator:
    return request.app.state.authenticator


def get_auth_service(request: Request) -> AuthService:
    return request.app.state.auth_service


def get_message_service(request: Request) -> MessageService:
    return request.app.state.message_service


def get_current_identity(
        request: Request,
        authenticator: SessionAuthenticator = Depends(get_authenticator),
) -> Identity:
    # Raises Unauthenticated before the endpoint body runs
    return authenticator.require_session(request)
