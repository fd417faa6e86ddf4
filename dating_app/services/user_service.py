"""
User service - profile browsing, search, update and account deletion
"""
import logging
from typing import Any, Dict, List, Union
from uuid import UUID
from sqlalchemy.orm import Session
from sqlalchemy import or_

from dating_app.core.dependencies import Identity
from dating_app.core.exceptions import NotFound
from dating_app.models.user import User
from dating_app.schemas.user import UserPublic, UserMatchView
from dating_app.services.chat_service import chat_service
from dating_app.services.match_service import match_service
from dating_app.services.validation import validate_profile_update
from dating_app.utils.time_utils import utc_now

logger = logging.getLogger(__name__)

# Fields that may be blanked out by sending null
_CLEARABLE_FIELDS = ("bio", "instagram_username", "instagram_profile_link")


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class UserService:
    """Service for profile operations"""

    def get_user(self, db: Session, user_id: UUID) -> User:
        user = db.query(User).filter(User.id == user_id).first()
        if not user:
            raise NotFound("User not found.")
        return user

    def get_me(self, db: Session, caller: Identity) -> User:
        return self.get_user(db, caller.user_id)

    def get_profile(
        self,
        db: Session,
        caller: Identity,
        user_id: UUID
    ) -> Union[UserPublic, UserMatchView]:
        """
        Get any user's profile.

        Instagram details are included only for the owner and for matched users.
        """
        user = self.get_user(db, user_id)
        if user.id == caller.user_id or match_service.is_matched(db, caller.user_id, user.id):
            return UserMatchView.model_validate(user)
        return UserPublic.model_validate(user)

    def explore(self, db: Session, caller: Identity) -> List[User]:
        """Profiles for the swipe deck, excluding the caller"""
        return db.query(User).filter(
            User.id != caller.user_id
        ).order_by(User.created_at.desc()).all()

    def search(self, db: Session, caller: Identity, term: str) -> List[User]:
        """Case-insensitive substring search on username or profile name"""
        pattern = f"%{_escape_like(term.strip())}%"
        users = db.query(User).filter(
            User.id != caller.user_id,
            or_(
                User.username.ilike(pattern, escape="\\"),
                User.profile_name.ilike(pattern, escape="\\")
            )
        ).order_by(User.username.asc()).all()

        if not users:
            raise NotFound("No users found matching your search.")
        return users

    def update_me(self, db: Session, caller: Identity, update_dict: Dict[str, Any]) -> User:
        """Apply a partial profile update after validating it"""
        user = self.get_me(db, caller)
        validate_profile_update(update_dict)

        for field, value in update_dict.items():
            if value is None and field in _CLEARABLE_FIELDS:
                value = ""
            if isinstance(value, str):
                value = value.strip()
            elif field == "swipe_images":
                value = [url.strip() for url in value]
            setattr(user, field, value)

        user.updated_at = utc_now()
        db.commit()
        db.refresh(user)

        logger.info(f"Updated profile for user: {user.id}")
        return user

    def delete_me(self, db: Session, caller: Identity) -> Dict[str, int]:
        """
        Delete the caller's account together with their requests and messages.
        Everything happens in a single transaction.
        """
        user = self.get_me(db, caller)
        try:
            deleted_messages = chat_service.delete_messages_for_user(db, user.id)
            deleted_requests = match_service.delete_requests_for_user(db, user.id)
            db.delete(user)
            db.commit()
        except Exception:
            db.rollback()
            raise

        logger.info(
            f"Deleted user {caller.user_id} "
            f"({deleted_requests} requests, {deleted_messages} messages)"
        )
        return {
            "deleted_requests": deleted_requests,
            "deleted_messages": deleted_messages,
        }


user_service = UserService()
