"""
Error taxonomy for the authentication service.

Every failure a request can hit is an ``AuthError`` carrying the
human-readable message and the HTTP status it maps to. The API layer
renders them as ``{"status": "failed", "message": ...}``.
"""

from fastapi import status


class AuthError(Exception):
    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class MalformedRequestError(AuthError):
    """Request body could not be read or decoded"""


class ValidationError(AuthError):
    """A required field is missing or blank"""


class ConflictError(AuthError):
    """Email already belongs to another user"""


class NotFoundError(AuthError):
    """No user matches the lookup"""


class StoreError(AuthError):
    """Unexpected persistence failure"""


class HashingError(AuthError):
    pass


class TokenEncodingError(AuthError):
    pass


class CredentialMismatchError(AuthError):
    status_code = status.HTTP_403_FORBIDDEN


class TokenError(AuthError):
    """Missing, invalid or expired bearer token"""
    status_code = status.HTTP_403_FORBIDDEN


class InvalidTokenError(TokenError):
    pass
