"""
Password hashing and access-token utilities.

Passwords are hashed with bcrypt. Access tokens are HS256 JWTs carrying the
user id and onboarding flag, valid for `JWT_EXPIRE_SECONDS`.
"""

import time
from dataclasses import dataclass

import bcrypt
import jwt  # PyJWT

from showlist.core.config.settings import AuthSettings
from showlist.core.exceptions import TokenError
from showlist.core.logging import get_logger

logger = get_logger(__name__)


def hash_password(password: str) -> str:
    """
    Hash a plain password using bcrypt.

    Args:
        password: Plain text password

    Returns:
        Bcrypt hashed password as string
    """
    # bcrypt only looks at the first 72 bytes
    password_bytes = password.encode("utf-8")[:72]
    hashed = bcrypt.hashpw(password_bytes, bcrypt.gensalt())
    return hashed.decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a plain password against a bcrypt hash.

    Returns:
        True if password matches, False otherwise (including a corrupt hash)
    """
    password_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(password_bytes, hashed_password.encode("utf-8"))
    except ValueError:
        logger.warning("Stored password hash is not a valid bcrypt hash")
        return False


@dataclass(frozen=True)
class TokenPayload:
    """Decoded access-token claims."""

    user_id: str
    onboarded: bool
    expires_at: int


def create_access_token(
    user_id: str, onboarded: bool, auth: AuthSettings, now: float | None = None
) -> str:
    """Sign a token for `user_id` that expires `JWT_EXPIRE_SECONDS` from now."""
    issued_at = int(now if now is not None else time.time())
    claims = {
        "id": user_id,
        "onboarded": onboarded,
        "iat": issued_at,
        "exp": issued_at + auth.JWT_EXPIRE_SECONDS,
    }
    return jwt.encode(claims, auth.JWT_SECRET, algorithm=auth.JWT_ALGORITHM)


def decode_access_token(token: str, auth: AuthSettings) -> TokenPayload:
    """
    Verify a token and return its claims.

    Raises:
        TokenError: If the token is expired, tampered with, or has no user id
    """
    try:
        claims = jwt.decode(token, auth.JWT_SECRET, algorithms=[auth.JWT_ALGORITHM])
    except jwt.ExpiredSignatureError:
        logger.warning("Token expired", stage="A.1")
        raise TokenError("Token expired")
    except jwt.InvalidTokenError as e:
        logger.warning("Invalid token", stage="A.1", error=str(e))
        raise TokenError("Invalid token")

    user_id = claims.get("id")
    if not user_id:
        raise TokenError("Invalid token payload")

    return TokenPayload(
        user_id=str(user_id),
        onboarded=bool(claims.get("onboarded", False)),
        expires_at=int(claims["exp"]),
    )
