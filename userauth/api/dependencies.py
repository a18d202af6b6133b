from typing import Optional
from fastapi import Header
from userauth.core.errors import InvalidTokenError, TokenError
from userauth.core.security import decode_access_token
from userauth.schemas import AuthContext

BEARER_PREFIX = "bearer "


async def get_auth_context(
    authorization: Optional[str] = Header(default=None)
) -> AuthContext:
    """
    Access gate for protected routes.

    Reads the raw token from the Authorization header (a "Bearer " prefix is
    accepted but not required), verifies it and returns the caller's identity.
    Raises TokenError (403) when the header is missing or the token invalid.
    """
    token = (authorization or "").strip()
    if token.lower().startswith(BEARER_PREFIX):
        token = token[len(BEARER_PREFIX):].strip()
    if not token:
        raise TokenError("Missing authorization token")

    try:
        user_id = decode_access_token(token)
    except InvalidTokenError:
        raise TokenError("Invalid token, please login")

    return AuthContext(user_id=user_id)
