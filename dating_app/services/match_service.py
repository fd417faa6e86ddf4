"""
Match service - the request/accept lifecycle and the matched predicate
"""
import logging
from typing import List, Optional
from uuid import UUID
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from sqlalchemy import or_, and_

from dating_app.core.dependencies import Identity
from dating_app.core.exceptions import (
    AlreadyMatched,
    DuplicatePending,
    Forbidden,
    InvalidState,
    NotFound,
    SelfTarget,
)
from dating_app.models.match_request import (
    ACTIVE_STATUSES,
    MatchRequest,
    RequestStatus,
    ordered_pair,
)
from dating_app.models.user import User
from dating_app.schemas.match_request import (
    MatchedUser,
    MatchRequestWithUser,
)
from dating_app.schemas.user import UserPublic, UserMatchView
from dating_app.utils.time_utils import utc_now

logger = logging.getLogger(__name__)


def _pair_filter(user_a: UUID, user_b: UUID):
    low, high = ordered_pair(user_a, user_b)
    return and_(MatchRequest.user_low_id == low, MatchRequest.user_high_id == high)


def _match_view(user: User) -> dict:
    return {field: getattr(user, field) for field in UserMatchView.model_fields}


class MatchService:
    """Service for match request operations"""

    def find_active_request(self, db: Session, user_a: UUID, user_b: UUID) -> Optional[MatchRequest]:
        """The pending or accepted request between two users, in either direction"""
        return db.query(MatchRequest).filter(
            _pair_filter(user_a, user_b),
            MatchRequest.status.in_(ACTIVE_STATUSES)
        ).first()

    def find_match(self, db: Session, user_a: UUID, user_b: UUID) -> Optional[MatchRequest]:
        """The accepted request between two users, in either direction"""
        return db.query(MatchRequest).filter(
            _pair_filter(user_a, user_b),
            MatchRequest.status == RequestStatus.ACCEPTED.value
        ).first()

    def is_matched(self, db: Session, user_a: UUID, user_b: UUID) -> bool:
        """Check if two users are matched. Symmetric, read from the store every call."""
        return self.find_match(db, user_a, user_b) is not None

    def _raise_for_active(self, existing: MatchRequest) -> None:
        if existing.status == RequestStatus.ACCEPTED.value:
            raise AlreadyMatched()
        raise DuplicatePending()

    def send_request(self, db: Session, caller: Identity, receiver_id: UUID) -> MatchRequest:
        """
        Send a dating request.

        Rejected or unmatched history between the pair does not block a new request.
        """
        sender_id = caller.user_id
        if sender_id == receiver_id:
            raise SelfTarget()

        found = db.query(User.id).filter(User.id.in_([sender_id, receiver_id])).count()
        if found != 2:
            raise NotFound("Sender or receiver user not found.")

        existing = self.find_active_request(db, sender_id, receiver_id)
        if existing:
            self._raise_for_active(existing)

        request = MatchRequest(
            sender_id=sender_id,
            receiver_id=receiver_id,
            status=RequestStatus.PENDING.value
        )
        db.add(request)
        try:
            db.commit()
        except IntegrityError:
            # A concurrent request for the same pair won the unique index
            db.rollback()
            existing = self.find_active_request(db, sender_id, receiver_id)
            if existing:
                self._raise_for_active(existing)
            raise
        db.refresh(request)

        logger.info(f"Match request {request.id} sent from {sender_id} to {receiver_id}")
        return request

    def _get_request(self, db: Session, request_id: UUID) -> MatchRequest:
        request = db.query(MatchRequest).filter(MatchRequest.id == request_id).first()
        if not request:
            raise NotFound("Dating request not found.")
        return request

    def respond_to_request(
        self,
        db: Session,
        caller: Identity,
        request_id: UUID,
        accept: bool
    ) -> MatchRequest:
        """Accept or reject a received pending request"""
        request = self._get_request(db, request_id)
        action = "accept" if accept else "reject"

        if request.receiver_id != caller.user_id:
            raise Forbidden(f"You can only {action} requests sent to you.")
        if request.status != RequestStatus.PENDING.value:
            raise InvalidState()

        if accept:
            request.status = RequestStatus.ACCEPTED.value
            request.accepted_at = utc_now()
        else:
            request.status = RequestStatus.REJECTED.value
            request.rejected_at = utc_now()
        db.commit()
        db.refresh(request)

        logger.info(f"Match request {request.id} {request.status} by {caller.user_id}")
        return request

    def accept_request(self, db: Session, caller: Identity, request_id: UUID) -> MatchRequest:
        return self.respond_to_request(db, caller, request_id, accept=True)

    def reject_request(self, db: Session, caller: Identity, request_id: UUID) -> MatchRequest:
        return self.respond_to_request(db, caller, request_id, accept=False)

    def cancel_request(self, db: Session, caller: Identity, request_id: UUID) -> None:
        """Cancel (delete) a sent request that is still pending"""
        request = self._get_request(db, request_id)

        if request.sender_id != caller.user_id:
            raise Forbidden("You can only cancel your own sent requests.")
        if request.status != RequestStatus.PENDING.value:
            raise InvalidState("This request cannot be cancelled (it's already accepted or rejected).")

        db.delete(request)
        db.commit()
        logger.info(f"Match request {request_id} cancelled by {caller.user_id}")

    def unmatch(self, db: Session, caller: Identity, other_user_id: UUID) -> MatchRequest:
        """End a match. Message history is kept."""
        match = self.find_match(db, caller.user_id, other_user_id)
        if not match:
            raise NotFound("No active match found with this user.")

        match.status = RequestStatus.UNMATCHED.value
        match.unmatched_at = utc_now()
        db.commit()
        db.refresh(match)

        logger.info(f"User {caller.user_id} unmatched {other_user_id}")
        return match

    def _with_counterparts(
        self,
        db: Session,
        requests: List[MatchRequest],
        user_id: UUID
    ) -> List[MatchRequestWithUser]:
        counterpart_ids = {r.counterpart_of(user_id) for r in requests}
        users = {}
        if counterpart_ids:
            users = {
                u.id: u for u in db.query(User).filter(User.id.in_(counterpart_ids)).all()
            }

        results = []
        for r in requests:
            counterpart = users.get(r.counterpart_of(user_id))
            if counterpart is None:
                continue
            results.append(MatchRequestWithUser(
                id=r.id,
                sender_id=r.sender_id,
                receiver_id=r.receiver_id,
                status=r.status,
                created_at=r.created_at,
                accepted_at=r.accepted_at,
                rejected_at=r.rejected_at,
                unmatched_at=r.unmatched_at,
                counterpart=UserPublic.model_validate(counterpart),
            ))
        return results

    def get_sent_requests(self, db: Session, caller: Identity) -> List[MatchRequestWithUser]:
        """All requests the caller sent, newest first"""
        requests = db.query(MatchRequest).filter(
            MatchRequest.sender_id == caller.user_id
        ).order_by(MatchRequest.created_at.desc()).all()
        return self._with_counterparts(db, requests, caller.user_id)

    def get_received_requests(self, db: Session, caller: Identity) -> List[MatchRequestWithUser]:
        """All requests the caller received, newest first"""
        requests = db.query(MatchRequest).filter(
            MatchRequest.receiver_id == caller.user_id
        ).order_by(MatchRequest.created_at.desc()).all()
        return self._with_counterparts(db, requests, caller.user_id)

    def get_matches(self, db: Session, caller: Identity) -> List[MatchedUser]:
        """Profiles of everyone the caller is matched with"""
        user_id = caller.user_id
        matches = db.query(MatchRequest).filter(
            or_(
                MatchRequest.sender_id == user_id,
                MatchRequest.receiver_id == user_id
            ),
            MatchRequest.status == RequestStatus.ACCEPTED.value
        ).order_by(MatchRequest.accepted_at.desc()).all()

        results = []
        for match in matches:
            matched_user = db.query(User).filter(User.id == match.counterpart_of(user_id)).first()
            if matched_user:
                results.append(MatchedUser(
                    **_match_view(matched_user),
                    is_initiator=match.sender_id == user_id,
                    match_id=match.id,
                    matched_at=match.accepted_at
                ))
        return results

    def delete_requests_for_user(self, db: Session, user_id: UUID) -> int:
        """Delete every request the user sent or received. Caller commits."""
        return db.query(MatchRequest).filter(
            or_(
                MatchRequest.sender_id == user_id,
                MatchRequest.receiver_id == user_id
            )
        ).delete(synchronize_session=False)


match_service = MatchService()
