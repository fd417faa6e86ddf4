"""
Match request and match schemas
"""
from datetime import datetime
from typing import Optional
from uuid import UUID
from pydantic import BaseModel, field_serializer

from dating_app.models.match_request import RequestStatus
from dating_app.schemas.user import UserPublic, UserMatchView
from dating_app.utils.time_utils import to_utc_isoformat


class MatchRequestResponse(BaseModel):
    """Match request record"""
    id: UUID
    sender_id: UUID
    receiver_id: UUID
    status: RequestStatus
    created_at: Optional[datetime] = None
    accepted_at: Optional[datetime] = None
    rejected_at: Optional[datetime] = None
    unmatched_at: Optional[datetime] = None

    @field_serializer('created_at', 'accepted_at', 'rejected_at', 'unmatched_at')
    def serialize_datetime(self, value: Optional[datetime]) -> Optional[str]:
        return to_utc_isoformat(value)

    class Config:
        from_attributes = True


class MatchRequestWithUser(MatchRequestResponse):
    """Request with the other participant's public profile attached"""
    counterpart: UserPublic


class MatchedUser(UserMatchView):
    """A matched profile tagged with who started the match"""
    is_initiator: bool
    match_id: UUID
    matched_at: Optional[datetime] = None

    @field_serializer('matched_at')
    def serialize_matched_at(self, value: Optional[datetime]) -> Optional[str]:
        return to_utc_isoformat(value)


class RequestActionResponse(BaseModel):
    """Response after a request action (send/accept/reject/cancel/unmatch)"""
    success: bool = True
    message: str
    request: Optional[MatchRequestResponse] = None
    matched_with: Optional[UUID] = None
