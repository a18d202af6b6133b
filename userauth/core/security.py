from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import JWTError, jwt
from jose.exceptions import JOSEError
from passlib.context import CryptContext
from userauth.core.config import settings
from userauth.core.errors import (
    CredentialMismatchError,
    HashingError,
    InvalidTokenError,
    TokenEncodingError,
)

# CryptContext handles password hashing using bcrypt
# bcrypt_sha256 digests the password first, so bcrypt's 72 byte limit and
# NUL byte restriction do not apply. Plain bcrypt hashes still verify.
# The work factor comes from settings so tests can run with the minimum cost
pwd_context = CryptContext(
    schemes=["bcrypt_sha256", "bcrypt"],
    deprecated="auto",
    bcrypt_sha256__rounds=settings.BCRYPT_ROUNDS,
)


def get_password_hash(password: str) -> str:
    """Hash a password using bcrypt_sha256 (salt is generated and embedded in the hash)"""
    try:
        return pwd_context.hash(password)
    except (ValueError, TypeError) as exc:
        raise HashingError(f"could not hash password: {exc}") from exc


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against a hash using constant-time comparison"""
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError):
        # Malformed or unknown stored hash reads as a plain mismatch
        return False


def check_password(plain_password: str, hashed_password: str) -> None:
    """Raise CredentialMismatchError unless the password matches the hash"""
    if not verify_password(plain_password, hashed_password):
        raise CredentialMismatchError("password incorrect")


def create_access_token(user_id: int, expires_delta: Optional[timedelta] = None) -> str:
    """Create a JWT access token for a user with expiration"""
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    expire = datetime.now(timezone.utc) + expires_delta

    # 'sub' must be a string in JWT (RFC 7519), userID keeps the numeric form
    to_encode = {"sub": str(user_id), "userID": user_id, "exp": expire}
    try:
        return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)
    except JOSEError as exc:
        raise TokenEncodingError(f"could not sign token: {exc}") from exc


def decode_access_token(token: str) -> int:
    """Verify a JWT token and return the user id it was issued for"""
    try:
        # Verifies signature and expiration
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError as exc:
        raise InvalidTokenError("Invalid token, please login") from exc

    user_id_str = payload.get("sub")
    if user_id_str is None:
        raise InvalidTokenError("Invalid token, please login")
    try:
        return int(user_id_str)
    except (ValueError, TypeError) as exc:
        raise InvalidTokenError("Invalid token, please login") from exc
