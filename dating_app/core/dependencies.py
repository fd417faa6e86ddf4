"""
FastAPI dependencies for resolving the caller identity
"""
from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from fastapi import Header

from dating_app.core.exceptions import Unauthenticated
from dating_app.core.security import decode_access_token


@dataclass(frozen=True)
class Identity:
    """Verified caller, passed by value into every service call"""
    user_id: UUID


def _extract_token(x_auth_token: Optional[str], authorization: Optional[str]) -> Optional[str]:
    if x_auth_token:
        return x_auth_token.strip()
    if authorization and authorization.lower().startswith("bearer "):
        return authorization[7:].strip()
    return None


def get_identity(
    x_auth_token: Optional[str] = Header(None),
    authorization: Optional[str] = Header(None),
) -> Identity:
    """
    Resolve the caller from the ``x-auth-token`` header.

    An ``Authorization: Bearer <token>`` header is accepted as a fallback.
    """
    token = _extract_token(x_auth_token, authorization)
    if not token:
        raise Unauthenticated()
    return Identity(user_id=decode_access_token(token))
