"""User schemas for request/response validation"""
from pydantic import BaseModel, field_serializer
from typing import Optional, List
from datetime import datetime
from uuid import UUID

from dating_app.utils.time_utils import to_utc_isoformat


class UserPublic(BaseModel):
    """Profile fields visible to any authenticated user"""
    id: UUID
    username: str
    profile_name: str
    profile_pic: str
    bio: str = ""
    country: str
    swipe_images: List[str] = []
    is_verified: bool = False
    created_at: Optional[datetime] = None

    @field_serializer('created_at')
    def serialize_datetime(self, value: Optional[datetime]) -> Optional[str]:
        return to_utc_isoformat(value)

    class Config:
        from_attributes = True


class UserMatchView(UserPublic):
    """Profile as seen by a matched user (adds Instagram details)"""
    instagram_username: str = ""
    instagram_profile_link: str = ""


class UserPrivate(UserMatchView):
    """Profile as seen by its owner"""
    updated_at: Optional[datetime] = None

    @field_serializer('updated_at')
    def serialize_updated_at(self, value: Optional[datetime]) -> Optional[str]:
        return to_utc_isoformat(value)


class UserUpdate(BaseModel):
    """
    Partial profile update.

    Username, password, id and creation time are not part of this schema,
    so they are ignored if a client sends them.
    """
    profile_pic: Optional[str] = None
    profile_name: Optional[str] = None
    bio: Optional[str] = None
    country: Optional[str] = None
    swipe_images: Optional[List[str]] = None
    instagram_username: Optional[str] = None
    instagram_profile_link: Optional[str] = None


class ProfileUpdateResponse(BaseModel):
    """Response after a profile update"""
    success: bool = True
    message: str
    user: UserPrivate


class AccountDeleteResponse(BaseModel):
    """Response after deleting an account"""
    success: bool = True
    message: str
    deleted_requests: int = 0
    deleted_messages: int = 0
