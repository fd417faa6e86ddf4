"""
Chat message model
"""
from uuid import uuid4
from sqlalchemy import Column, Boolean, DateTime, Text, ForeignKey, Index, Uuid
from dating_app.database import Base
from dating_app.utils.time_utils import utc_now


class Message(Base):
    """Text message between two matched users"""
    __tablename__ = "messages"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid4)
    sender_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    receiver_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    text = Column(Text, nullable=False)
    timestamp = Column(DateTime(timezone=True), default=utc_now)
    is_read = Column(Boolean, default=False, nullable=False)

    # Timestamps
    created_at = Column(DateTime(timezone=True), default=utc_now)
    updated_at = Column(DateTime(timezone=True), default=utc_now, onupdate=utc_now)

    __table_args__ = (
        Index("ix_messages_conversation", "sender_id", "receiver_id", "timestamp"),
    )
