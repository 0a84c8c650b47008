"""
Profile API endpoints.
"""
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from huddle.core.deps import get_current_user, get_db
from huddle.db.session import store_operation
from huddle.models.profile import Profile
from huddle.schemas.profile import ProfileOut

router = APIRouter(prefix="/profiles", tags=["profiles"])


@router.get("", response_model=List[ProfileOut])
def list_profiles(
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user),
):
    """
    List team members by display name, for tagging agenda items.
    """
    with store_operation(db, "list profiles"):
        return db.query(Profile).order_by(Profile.display_name).all()


@router.get("/me", response_model=ProfileOut)
def read_my_profile(current_user: Profile = Depends(get_current_user)):
    """Profile of the authenticated caller."""
    return current_user
