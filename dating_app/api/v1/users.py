"""
User profile endpoints
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List, Union
from uuid import UUID
from dating_app.database import get_db
from dating_app.schemas.user import (
    UserPublic,
    UserMatchView,
    UserPrivate,
    UserUpdate,
    ProfileUpdateResponse,
    AccountDeleteResponse,
)
from dating_app.core.dependencies import Identity, get_identity
from dating_app.services.user_service import user_service

router = APIRouter()


@router.get("/explore", response_model=List[UserPublic])
def explore_users(
    identity: Identity = Depends(get_identity),
    db: Session = Depends(get_db)
):
    """Profiles for the explore/swipe feature, excluding the current user"""
    return user_service.explore(db, identity)


@router.get("/me", response_model=UserPrivate)
def get_my_profile(
    identity: Identity = Depends(get_identity),
    db: Session = Depends(get_db)
):
    """Get the current user's full profile"""
    return user_service.get_me(db, identity)


@router.put("/me", response_model=ProfileUpdateResponse)
def update_my_profile(
    update_data: UserUpdate,
    identity: Identity = Depends(get_identity),
    db: Session = Depends(get_db)
):
    """
    Update the current user's profile

    Only the fields sent are changed. Username and password cannot be changed here.
    """
    user = user_service.update_me(db, identity, update_data.model_dump(exclude_unset=True))
    return ProfileUpdateResponse(
        message="Profile updated successfully!",
        user=UserPrivate.model_validate(user)
    )


@router.delete("/me", response_model=AccountDeleteResponse)
def delete_my_account(
    identity: Identity = Depends(get_identity),
    db: Session = Depends(get_db)
):
    """Delete the current user's account, their requests and their messages"""
    counts = user_service.delete_me(db, identity)
    return AccountDeleteResponse(message="Account deleted successfully.", **counts)


@router.get("/search/{search_term}", response_model=List[UserPublic])
def search_users(
    search_term: str,
    identity: Identity = Depends(get_identity),
    db: Session = Depends(get_db)
):
    """Search users by username or profile name (case-insensitive)"""
    return user_service.search(db, identity, search_term)


@router.get("/{user_id}", response_model=None)
def get_user_profile(
    user_id: UUID,
    identity: Identity = Depends(get_identity),
    db: Session = Depends(get_db)
) -> Union[UserMatchView, UserPublic]:
    """Get any user's profile by ID. Instagram details are shown to matches only."""
    return user_service.get_profile(db, identity, user_id)
