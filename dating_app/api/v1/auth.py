"""
Authentication endpoints - registration and username/password login
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from dating_app.core.config import settings
from dating_app.database import get_db
from dating_app.schemas.auth import RegisterRequest, LoginRequest, AuthResponse
from dating_app.schemas.user import UserPrivate
from dating_app.services.auth_service import AuthService
import logging

router = APIRouter()
logger = logging.getLogger(__name__)


def _auth_response(auth_service: AuthService, user, message: str) -> AuthResponse:
    return AuthResponse(
        message=message,
        access_token=auth_service.create_access_token_for_user(user),
        expires_in=settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        user=UserPrivate.model_validate(user),
    )


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(
    request: RegisterRequest,
    db: Session = Depends(get_db)
):
    """
    Register a new user

    - **swipe_images**: exactly 3 image URLs (upload them first via /api/upload/image)
    - **username**: 3-30 letters, numbers, underscores or dots; stored lowercase

    Returns a JWT valid for 5 hours.
    """
    auth_service = AuthService(db)
    user = auth_service.create_user(request.model_dump())
    logger.info(f"Registration successful for user: {user.id}")
    return _auth_response(auth_service, user, "User registered successfully!")


@router.post("/login", response_model=AuthResponse)
def login(
    request: LoginRequest,
    db: Session = Depends(get_db)
):
    """Authenticate with username and password and get a token"""
    auth_service = AuthService(db)
    user = auth_service.verify_credentials(request.username, request.password)
    logger.info(f"Login successful for user: {user.id}")
    return _auth_response(auth_service, user, "Logged in successfully!")
