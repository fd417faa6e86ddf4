"""
Authentication Service - registration, credential checks and JWT issuance
"""
from typing import Dict, Any, Optional
from uuid import UUID
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from dating_app.core.exceptions import Conflict, InvalidCredentials
from dating_app.core.security import create_access_token, hash_password, verify_password
from dating_app.models.user import User
from dating_app.services.validation import normalize_username, validate_registration
import logging

logger = logging.getLogger(__name__)

USERNAME_TAKEN = "Username already exists. Please choose a different one."


class AuthService:
    """Service for authentication operations"""

    def __init__(self, db: Session):
        self.db = db

    def get_user_by_username(self, username: str) -> Optional[User]:
        """Get user by username (case-insensitive, usernames are stored lowercase)"""
        return self.db.query(User).filter(User.username == normalize_username(username)).first()

    def get_user_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID"""
        return self.db.query(User).filter(User.id == user_id).first()

    def create_user(self, data: Dict[str, Any]) -> User:
        """
        Validate and persist a new user.

        The password is hashed here, before the row is written.

        Args:
            data: Registration fields (see RegisterRequest)

        Returns:
            Newly created User object

        Raises:
            ValidationError: If any field is missing or malformed
            Conflict: If the username is taken
        """
        data = dict(data)
        if isinstance(data.get("username"), str):
            data["username"] = normalize_username(data["username"])
        validate_registration(data)

        if self.get_user_by_username(data["username"]):
            raise Conflict(USERNAME_TAKEN)

        user = User(
            username=data["username"],
            password_hash=hash_password(data["password"]),
            profile_pic=data["profile_pic"].strip(),
            profile_name=data["profile_name"].strip(),
            bio=(data.get("bio") or "").strip(),
            country=data["country"].strip(),
            swipe_images=[url.strip() for url in data["swipe_images"]],
            instagram_username=(data.get("instagram_username") or "").strip(),
            instagram_profile_link=(data.get("instagram_profile_link") or "").strip(),
        )

        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError:
            # Lost a race with a concurrent registration for the same username
            self.db.rollback()
            raise Conflict(USERNAME_TAKEN)
        self.db.refresh(user)

        logger.info(f"Created new user with ID: {user.id}")
        return user

    def verify_credentials(self, username: Optional[str], password: Optional[str]) -> User:
        """
        Check a username/password pair.

        Raises:
            InvalidCredentials: If either is missing or they do not match
        """
        if not username or not password:
            raise InvalidCredentials("Please enter both username and password.")

        user = self.get_user_by_username(username)
        if not user or not verify_password(password, user.password_hash):
            logger.info("Failed login attempt")
            raise InvalidCredentials()
        return user

    def create_access_token_for_user(self, user: User) -> str:
        """Create JWT access token for user"""
        return create_access_token(user.id)
