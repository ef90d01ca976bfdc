# backend/app/schemas/user.py
from pydantic import BaseModel
from typing import List, Optional


# Body for signup and login. Fields are optional so that missing values
# reach the auth service and come back as a 400, not a 422.
class Credentials(BaseModel):
    username: Optional[str] = None
    password: Optional[str] = None


class UserPublic(BaseModel):
    username: str


class AuthResponse(BaseModel):
    message: str
    user: UserPublic


class WhoAmIResponse(BaseModel):
    authenticated: bool
    user: Optional[UserPublic] = None


class LogoutResponse(BaseModel):
    message: str = "Logged out"


class UserListResponse(BaseModel):
    users: List[str]
