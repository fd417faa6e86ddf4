"""
Match request model - directed request between two users with a status
"""
import enum
from uuid import UUID as PyUUID, uuid4
from sqlalchemy import Column, String, DateTime, ForeignKey, Index, Uuid, text
from dating_app.database import Base
from dating_app.utils.time_utils import utc_now


class RequestStatus(str, enum.Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    UNMATCHED = "unmatched"


ACTIVE_STATUSES = (RequestStatus.PENDING.value, RequestStatus.ACCEPTED.value)

_ACTIVE_PAIR_PREDICATE = "status IN ('pending', 'accepted')"


def ordered_pair(user_a: PyUUID, user_b: PyUUID) -> tuple[PyUUID, PyUUID]:
    """Order two ids so that {a, b} and {b, a} produce the same key"""
    return (user_a, user_b) if str(user_a) <= str(user_b) else (user_b, user_a)


class MatchRequest(Base):
    """Dating request from sender to receiver"""
    __tablename__ = "match_requests"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid4)
    sender_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    receiver_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    # Unordered pair, user_low_id <= user_high_id
    user_low_id = Column(Uuid(as_uuid=True), nullable=False)
    user_high_id = Column(Uuid(as_uuid=True), nullable=False)

    # Status: 'pending', 'accepted', 'rejected', 'unmatched'
    status = Column(String(20), nullable=False, default=RequestStatus.PENDING.value)

    # Timestamps
    created_at = Column(DateTime(timezone=True), default=utc_now, index=True)
    accepted_at = Column(DateTime(timezone=True), nullable=True)
    rejected_at = Column(DateTime(timezone=True), nullable=True)
    unmatched_at = Column(DateTime(timezone=True), nullable=True)

    # At most one pending or accepted request per pair, in either direction
    __table_args__ = (
        Index(
            "uq_match_requests_active_pair",
            "user_low_id",
            "user_high_id",
            unique=True,
            postgresql_where=text(_ACTIVE_PAIR_PREDICATE),
            sqlite_where=text(_ACTIVE_PAIR_PREDICATE),
        ),
    )

    def __init__(self, **kwargs):
        sender_id = kwargs.get("sender_id")
        receiver_id = kwargs.get("receiver_id")
        if sender_id is not None and receiver_id is not None:
            kwargs.setdefault("user_low_id", ordered_pair(sender_id, receiver_id)[0])
            kwargs.setdefault("user_high_id", ordered_pair(sender_id, receiver_id)[1])
        super().__init__(**kwargs)

    def counterpart_of(self, user_id: PyUUID) -> PyUUID:
        """The other participant from the point of view of user_id"""
        return self.receiver_id if self.sender_id == user_id else self.sender_id
