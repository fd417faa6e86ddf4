"""
Password hashing and JWT access tokens
"""
from datetime import timedelta
from typing import Optional
from uuid import UUID
import logging

import bcrypt
import jwt

from dating_app.core.config import settings
from dating_app.core.exceptions import Unauthenticated
from dating_app.utils.time_utils import utc_now

logger = logging.getLogger(__name__)

BCRYPT_ROUNDS = 10


def hash_password(password: str) -> str:
    """Hash a plain-text password with a fresh bcrypt salt"""
    salt = bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Compare a candidate password with a stored bcrypt hash"""
    if not password or not password_hash:
        return False
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash
        return False


def create_access_token(user_id: UUID, expires_delta: Optional[timedelta] = None) -> str:
    """
    Create a signed JWT carrying only the user id.

    Args:
        user_id: Identifier placed in the ``sub`` claim
        expires_delta: Override for the configured lifetime

    Returns:
        Encoded JWT string
    """
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES)
    now = utc_now()
    payload = {
        "sub": str(user_id),
        "iat": now,
        "exp": now + expires_delta,
    }
    return jwt.encode(payload, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> UUID:
    """
    Verify a JWT and return the user id it was issued for.

    Raises:
        Unauthenticated: If the token is expired, tampered with or malformed
    """
    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET_KEY,
            algorithms=[settings.JWT_ALGORITHM],
        )
    except jwt.ExpiredSignatureError:
        raise Unauthenticated("Token has expired.")
    except jwt.InvalidTokenError as e:
        logger.warning(f"Rejected invalid token: {e}")
        raise Unauthenticated("Token is not valid.")

    try:
        return UUID(payload["sub"])
    except (KeyError, ValueError, TypeError):
        raise Unauthenticated("Token is not valid.")
