import uuid

from pydantic import BaseModel, EmailStr, ConfigDict


class UserProfile(BaseModel):
    """Faturayi kesen isletmenin profili (PDF "From" bolumu)."""
    id: uuid.UUID
    email: str
    display_name: str | None = None
    business_name: str | None = None
    address: str | None = None
    phone: str | None = None
    website: str | None = None
    gstin: str | None = None

    model_config = ConfigDict(from_attributes=True)


class ProfileUpdate(BaseModel):
    email: EmailStr | None = None
    display_name: str | None = None
    business_name: str | None = None
    address: str | None = None
    phone: str | None = None
    website: str | None = None
    gstin: str | None = None
