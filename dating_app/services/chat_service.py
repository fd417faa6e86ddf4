"""
Chat service - messaging between matched users
"""
import logging
from typing import List, Optional
from uuid import UUID
from sqlalchemy.orm import Session
from sqlalchemy import or_, and_

from dating_app.core.dependencies import Identity
from dating_app.core.exceptions import EmptyText, Forbidden, InvalidState, NotFound
from dating_app.models.message import Message
from dating_app.services.match_service import match_service
from dating_app.utils.time_utils import utc_now

logger = logging.getLogger(__name__)


class ChatService:
    """Service for chat operations. Every read or write requires a current match."""

    def _require_match(self, db: Session, user_id: UUID, other_user_id: UUID, detail: str) -> None:
        if not match_service.is_matched(db, user_id, other_user_id):
            raise Forbidden(detail)

    def send_message(
        self,
        db: Session,
        caller: Identity,
        receiver_id: UUID,
        text: Optional[str]
    ) -> Message:
        """Send a message to a matched user"""
        text = (text or "").strip()
        if not text:
            raise EmptyText()

        self._require_match(
            db, caller.user_id, receiver_id,
            "Forbidden: You can only send messages to matched users."
        )

        message = Message(
            sender_id=caller.user_id,
            receiver_id=receiver_id,
            text=text,
            is_read=False
        )
        db.add(message)
        db.commit()
        db.refresh(message)

        logger.info(f"Message {message.id} sent from {caller.user_id} to {receiver_id}")
        return message

    def get_messages(self, db: Session, caller: Identity, other_user_id: UUID) -> List[Message]:
        """Conversation with a matched user, oldest first"""
        self._require_match(
            db, caller.user_id, other_user_id,
            "Forbidden: You are not matched with this user."
        )

        return db.query(Message).filter(
            or_(
                and_(Message.sender_id == caller.user_id, Message.receiver_id == other_user_id),
                and_(Message.sender_id == other_user_id, Message.receiver_id == caller.user_id)
            )
        ).order_by(Message.timestamp.asc()).all()

    def mark_as_read(self, db: Session, caller: Identity, message_id: UUID) -> Message:
        """
        Mark a single received message as read.

        Raises:
            NotFound: If the message does not exist
            Forbidden: If the caller is not the receiver
            InvalidState: If the message is already read (400)
        """
        message = db.query(Message).filter(Message.id == message_id).first()
        if not message:
            raise NotFound("Message not found.")
        if message.receiver_id != caller.user_id:
            raise Forbidden("You can only mark messages sent to you as read.")
        if message.is_read:
            raise InvalidState("Message is already marked as read.")

        message.is_read = True
        message.updated_at = utc_now()
        db.commit()
        db.refresh(message)
        return message

    def mark_all_as_read(self, db: Session, caller: Identity, other_user_id: UUID) -> int:
        """
        Mark every unread message from other_user_id to the caller as read.
        Idempotent; returns the number of messages updated.
        """
        updated = db.query(Message).filter(
            Message.receiver_id == caller.user_id,
            Message.sender_id == other_user_id,
            Message.is_read == False  # noqa: E712
        ).update(
            {Message.is_read: True, Message.updated_at: utc_now()},
            synchronize_session=False
        )
        db.commit()

        if updated:
            logger.info(f"Marked {updated} messages from {other_user_id} as read for {caller.user_id}")
        return updated

    def delete_messages_for_user(self, db: Session, user_id: UUID) -> int:
        """Delete every message the user sent or received. Caller commits."""
        return db.query(Message).filter(
            or_(
                Message.sender_id == user_id,
                Message.receiver_id == user_id
            )
        ).delete(synchronize_session=False)


chat_service = ChatService()
