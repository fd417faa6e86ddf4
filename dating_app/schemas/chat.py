"""Chat schemas"""
from datetime import datetime
from typing import Optional
from uuid import UUID
from pydantic import BaseModel, field_serializer

from dating_app.utils.time_utils import to_utc_isoformat


class MessageCreate(BaseModel):
    """Outgoing message body"""
    text: Optional[str] = None


class MessageResponse(BaseModel):
    """Stored chat message"""
    id: UUID
    sender_id: UUID
    receiver_id: UUID
    text: str
    timestamp: Optional[datetime] = None
    is_read: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_serializer('timestamp', 'created_at', 'updated_at')
    def serialize_datetime(self, value: Optional[datetime]) -> Optional[str]:
        return to_utc_isoformat(value)

    class Config:
        from_attributes = True


class MessageActionResponse(BaseModel):
    """Response after sending a message or marking one read"""
    success: bool = True
    message: str
    chat_message: MessageResponse


class MarkAllReadResponse(BaseModel):
    success: bool = True
    message: str
    updated_count: int
