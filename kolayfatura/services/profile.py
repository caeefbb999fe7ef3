import uuid

from sqlalchemy.orm import Session

from kolayfatura.errors import RecordNotFound, persistence_errors
from kolayfatura.models.user import User
from kolayfatura.repository import RecordRepository
from kolayfatura.schemas.user import ProfileUpdate


def get_profile(db: Session, user_id: uuid.UUID) -> User:
    """Isletme profilini getir."""
    with persistence_errors(db, "Failed to get user profile"):
        user = RecordRepository(db).get_record("users", user_id)
    if user is None:
        raise RecordNotFound("User profile not found")
    return user


def update_profile(db: Session, user_id: uuid.UUID, data: ProfileUpdate) -> User:
    """Sadece gonderilen alanlari guncelle."""
    get_profile(db, user_id)
    with persistence_errors(db, "Failed to update user profile"):
        return RecordRepository(db).update_record(
            "users", user_id, data.model_dump(exclude_unset=True)
        )
