"""
Error taxonomy shared by the services and the HTTP layer.

Every failure carries a stable ``code`` and the HTTP status the API answers
with, so callers can tell "come back tomorrow" apart from a broken request.
"""
from fastapi import status


class MindCareError(Exception):
    """Base class for all domain failures."""
    code = "error"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Unexpected error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(MindCareError):
    """A required field is missing or empty. Raised before any store call."""
    code = "validation_error"
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid or incomplete data"


class InvalidCredentialsError(MindCareError):
    code = "invalid_credentials"
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Incorrect email or password"


class NotFoundError(MindCareError):
    code = "not_found"
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class DuplicateCheckInError(MindCareError):
    """The user already checked in on this calendar day."""
    code = "duplicate_check_in"
    status_code = status.HTTP_409_CONFLICT
    default_message = "Mood already recorded today"


class DuplicateEmailError(MindCareError):
    code = "duplicate_email"
    status_code = status.HTTP_409_CONFLICT
    default_message = "Email already registered"


class StorageError(MindCareError):
    """Connectivity or constraint failure not otherwise classified."""
    code = "storage_error"
    default_message = "Storage failure"
