import pytest

from backend.app.core.errors import (
    AuthError,
    ConflictError,
    StoreError,
    Unauthenticated,
    ValidationError,
)


@pytest.mark.parametrize(
    "error, status_code, message",
    [
        (ValidationError, 400, "Invalid input"),
        (ConflictError, 409, "Username already taken"),
        (AuthError, 401, "Invalid credentials"),
        (Unauthenticated, 401, "Not authenticated"),
        (StoreError, 500, "Internal server error"),
    ],
)
def test_errors_fall_back_to_their_default_message(error, status_code, message):
    exc = error()
    assert exc.status_code == status_code
    assert exc.message == str(exc) == message


def test_explicit_message_wins():
    assert ValidationError("Cannot send message to yourself").message == "Cannot send message to yourself"
