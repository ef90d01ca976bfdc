# backend/app/api/v1/endpoints/auth.py
from fastapi import APIRouter, Depends, Request, Response, status

from backend.app.api import deps
from backend.app.schemas.user import (
    AuthResponse,
    Credentials,
    LogoutResponse,
    UserPublic,
    WhoAmIResponse,
)
from backend.app.security.authenticator import SessionAuthenticator
from backend.app.services.auth import AuthService

router = APIRouter()


@router.post("/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def signup(
        creds: Credentials,
        request: Request,
        response: Response,
        auth: AuthService = Depends(deps.get_auth_service),
        authenticator: SessionAuthenticator = Depends(deps.get_authenticator),
):
    result = await auth.signup(
        creds.username, creds.password, authenticator.token_from_request(request)
    )
    authenticator.issue_cookie(response, result.session)
    return AuthResponse(
        message="Signup successful",
        user=UserPublic(username=result.identity.username),
    )


@router.post("/login", response_model=AuthResponse)
async def login(
        creds: Credentials,
        request: Request,
        response: Response,
        auth: AuthService = Depends(deps.get_auth_service),
        authenticator: SessionAuthenticator = Depends(deps.get_authenticator),
):
    result = await auth.login(
        creds.username, creds.password, authenticator.token_from_request(request)
    )
    authenticator.issue_cookie(response, result.session)
    return AuthResponse(
        message="Login successful",
        user=UserPublic(username=result.identity.username),
    )


@router.post("/logout", response_model=LogoutResponse)
async def logout(
        request: Request,
        response: Response,
        auth: AuthService = Depends(deps.get_auth_service),
        authenticator: SessionAuthenticator = Depends(deps.get_authenticator),
):
    auth.logout(authenticator.token_from_request(request))
    authenticator.clear_cookie(response)
    return LogoutResponse()


@router.get("/me", response_model=WhoAmIResponse)
async def me(request: Request, auth: AuthService = Depends(deps.get_auth_service)):
    identity = auth.current_identity(request)
    if identity is None:
        return WhoAmIResponse(authenticated=False)
    return WhoAmIResponse(authenticated=True, user=UserPublic(username=identity.username))
