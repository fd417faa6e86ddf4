"""Authentication schemas"""
from pydantic import BaseModel, Field
from typing import Optional, List

from dating_app.schemas.user import UserPrivate


class RegisterRequest(BaseModel):
    """
    Registration payload.

    Fields are loosely typed here; rules are enforced by the explicit
    validators in ``services.validation`` so all problems are reported at once.
    """
    profile_pic: Optional[str] = None
    profile_name: Optional[str] = None
    username: Optional[str] = None
    bio: Optional[str] = None
    instagram_username: Optional[str] = None
    instagram_profile_link: Optional[str] = None
    country: Optional[str] = None
    swipe_images: Optional[List[str]] = None
    password: Optional[str] = None


class LoginRequest(BaseModel):
    """Username/password login"""
    username: Optional[str] = None
    password: Optional[str] = None


class AuthResponse(BaseModel):
    """JWT token response with the caller's profile"""
    message: str
    access_token: str
    token_type: str = "bearer"
    expires_in: int = Field(..., description="Token lifetime in seconds")
    user: UserPrivate
