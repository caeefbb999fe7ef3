from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from kolayfatura.database import get_db
from kolayfatura.dependencies import get_current_user
from kolayfatura.models.user import User
from kolayfatura.schemas.user import ProfileUpdate, UserProfile
from kolayfatura.services import profile as profile_service

router = APIRouter()


@router.get("", response_model=UserProfile)
def get_profile(
    current_user: Annotated[User, Depends(get_current_user)],
):
    """Isletme profili (faturadaki "From" bilgileri)."""
    return current_user


@router.put("", response_model=UserProfile)
def update_profile(
    data: ProfileUpdate,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
):
    return profile_service.update_profile(db=db, user_id=current_user.id, data=data)
