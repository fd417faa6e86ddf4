"""
Database models for the Dating App Backend

All models should be imported here so create_all registers them.
"""
from dating_app.models.user import User
from dating_app.models.match_request import MatchRequest, RequestStatus
from dating_app.models.message import Message

__all__ = [
    # User
    "User",
    # Matching
    "MatchRequest",
    "RequestStatus",
    # Chat
    "Message",
]
