"""
Chat endpoints - messaging between matched users
"""
from typing import List
from uuid import UUID
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from dating_app.database import get_db
from dating_app.core.dependencies import Identity, get_identity
from dating_app.schemas.chat import (
    MessageCreate,
    MessageResponse,
    MessageActionResponse,
    MarkAllReadResponse,
)
from dating_app.services.chat_service import chat_service

router = APIRouter()


@router.get("/messages/{matched_user_id}", response_model=List[MessageResponse])
def get_messages(
    matched_user_id: UUID,
    identity: Identity = Depends(get_identity),
    db: Session = Depends(get_db)
):
    """Chat history with a matched user, oldest first"""
    return chat_service.get_messages(db, identity, matched_user_id)


@router.post(
    "/send/{receiver_id}",
    response_model=MessageActionResponse,
    status_code=status.HTTP_201_CREATED
)
def send_message(
    receiver_id: UUID,
    body: MessageCreate,
    identity: Identity = Depends(get_identity),
    db: Session = Depends(get_db)
):
    """Send a message to a matched user"""
    message = chat_service.send_message(db, identity, receiver_id, body.text)
    return MessageActionResponse(
        message="Message sent successfully!",
        chat_message=MessageResponse.model_validate(message)
    )


@router.post("/messages/markAllAsRead/{matched_user_id}", response_model=MarkAllReadResponse)
def mark_all_as_read(
    matched_user_id: UUID,
    identity: Identity = Depends(get_identity),
    db: Session = Depends(get_db)
):
    """Mark every unread message from a user as read"""
    updated = chat_service.mark_all_as_read(db, identity, matched_user_id)
    return MarkAllReadResponse(message="All messages marked as read.", updated_count=updated)


@router.post("/messages/{message_id}/markAsRead", response_model=MessageActionResponse)
def mark_as_read(
    message_id: UUID,
    identity: Identity = Depends(get_identity),
    db: Session = Depends(get_db)
):
    """
    Mark a single received message as read

    Errors: 404 if the message does not exist, 403 if the caller is not its
    receiver, 400 if it is already marked as read.
    """
    message = chat_service.mark_as_read(db, identity, message_id)
    return MessageActionResponse(
        message="Message marked as read.",
        chat_message=MessageResponse.model_validate(message)
    )
