# backend/app/core/errors.py
"""
Domain error taxonomy.

Stores and services raise these; the app factory maps them to HTTP
responses through exception handlers, so endpoints never catch them.
"""
from typing import Optional


class MessagingError(Exception):
    """Base class for every error the core surfaces to callers."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(MessagingError):
    """Malformed or missing input. User-correctable."""

    status_code = 400
    default_message = "Invalid input"


class ConflictError(MessagingError):
    """Username already taken."""

    status_code = 409
    default_message = "Username already taken"


class AuthError(MessagingError):
    """
    Invalid credentials.

    The message is identical for an unknown username and a wrong password.
    """

    status_code = 401
    default_message = "Invalid credentials"


class Unauthenticated(AuthError):
    """No live session bound to the request."""

    default_message = "Not authenticated"


class StoreError(MessagingError):
    """Underlying persistence failure. Detail stays in the logs."""

    status_code = 500
    default_message = "Internal server error"
