"""
Match request endpoints - send, respond, cancel, list and unmatch
"""
from typing import List
from uuid import UUID
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from dating_app.database import get_db
from dating_app.core.dependencies import Identity, get_identity
from dating_app.schemas.match_request import (
    MatchRequestResponse,
    MatchRequestWithUser,
    MatchedUser,
    RequestActionResponse,
)
from dating_app.services.match_service import match_service

router = APIRouter()


@router.post(
    "/send/{receiver_id}",
    response_model=RequestActionResponse,
    status_code=status.HTTP_201_CREATED
)
def send_request(
    receiver_id: UUID,
    identity: Identity = Depends(get_identity),
    db: Session = Depends(get_db)
):
    """Send a dating request to another user"""
    request = match_service.send_request(db, identity, receiver_id)
    return RequestActionResponse(
        message="Dating request sent successfully!",
        request=MatchRequestResponse.model_validate(request)
    )


@router.post("/accept/{request_id}", response_model=RequestActionResponse)
def accept_request(
    request_id: UUID,
    identity: Identity = Depends(get_identity),
    db: Session = Depends(get_db)
):
    """Accept a received dating request"""
    request = match_service.accept_request(db, identity, request_id)
    return RequestActionResponse(
        message="Dating request accepted! It's a match!",
        request=MatchRequestResponse.model_validate(request),
        matched_with=request.sender_id
    )


@router.post("/reject/{request_id}", response_model=RequestActionResponse)
def reject_request(
    request_id: UUID,
    identity: Identity = Depends(get_identity),
    db: Session = Depends(get_db)
):
    """Reject a received dating request"""
    request = match_service.reject_request(db, identity, request_id)
    return RequestActionResponse(
        message="Dating request rejected.",
        request=MatchRequestResponse.model_validate(request)
    )


@router.delete("/cancel/{request_id}", response_model=RequestActionResponse)
def cancel_request(
    request_id: UUID,
    identity: Identity = Depends(get_identity),
    db: Session = Depends(get_db)
):
    """Cancel a sent dating request that is still pending"""
    match_service.cancel_request(db, identity, request_id)
    return RequestActionResponse(message="Dating request cancelled successfully.")


@router.get("/sent", response_model=List[MatchRequestWithUser])
def get_sent_requests(
    identity: Identity = Depends(get_identity),
    db: Session = Depends(get_db)
):
    """Requests sent by the current user, newest first"""
    return match_service.get_sent_requests(db, identity)


@router.get("/received", response_model=List[MatchRequestWithUser])
def get_received_requests(
    identity: Identity = Depends(get_identity),
    db: Session = Depends(get_db)
):
    """Requests received by the current user, newest first"""
    return match_service.get_received_requests(db, identity)


@router.get("/matches", response_model=List[MatchedUser])
def get_matches(
    identity: Identity = Depends(get_identity),
    db: Session = Depends(get_db)
):
    """Everyone the current user is matched with"""
    return match_service.get_matches(db, identity)


@router.post("/unmatch/{matched_user_id}", response_model=RequestActionResponse)
def unmatch(
    matched_user_id: UUID,
    identity: Identity = Depends(get_identity),
    db: Session = Depends(get_db)
):
    """Unmatch a user. Chat history is kept but hidden until a new match."""
    match = match_service.unmatch(db, identity, matched_user_id)
    return RequestActionResponse(
        message="User unmatched successfully.",
        request=MatchRequestResponse.model_validate(match)
    )
