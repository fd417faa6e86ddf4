"""
User profile model
"""
from uuid import uuid4
from sqlalchemy import Column, String, Boolean, DateTime, Text, JSON, Uuid
from dating_app.database import Base
from dating_app.utils.time_utils import utc_now


class User(Base):
    """User account and dating profile"""
    __tablename__ = "users"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid4)
    username = Column(String(30), unique=True, nullable=False, index=True)  # stored lowercase
    password_hash = Column(String(255), nullable=False)

    # Profile
    profile_name = Column(String(50), nullable=False)
    profile_pic = Column(Text, nullable=False)
    bio = Column(String(500), default="")
    country = Column(String(50), nullable=False)
    swipe_images = Column(JSON, default=list)  # up to 3 image URLs

    # Only shown to matched users
    instagram_username = Column(String(255), default="")
    instagram_profile_link = Column(Text, default="")

    # Status
    is_verified = Column(Boolean, default=False)

    # Timestamps
    created_at = Column(DateTime(timezone=True), default=utc_now)
    updated_at = Column(DateTime(timezone=True), default=utc_now, onupdate=utc_now)
