import uuid
from datetime import datetime

from pydantic import BaseModel, EmailStr, Field, ConfigDict


class ClientCreate(BaseModel):
    """Yeni musteri olusturmak icin"""
    name: str = Field(min_length=1, max_length=255)
    email: EmailStr
    phone: str | None = None
    address: str = Field(min_length=1)
    gstin: str | None = Field(default=None, max_length=20)


class ClientUpdate(BaseModel):
    """
    Musteri guncellemek icin. Tum alanlar opsiyonel (partial update).
    expected_version: iyimser kilitleme icin son okunan surum.
    """
    name: str | None = Field(default=None, min_length=1, max_length=255)
    email: EmailStr | None = None
    phone: str | None = None
    address: str | None = Field(default=None, min_length=1)
    gstin: str | None = Field(default=None, max_length=20)
    expected_version: int | None = None


class ClientResponse(BaseModel):
    """Musteri bilgisi dondurmek icin"""
    id: uuid.UUID
    name: str
    email: str
    phone: str | None
    address: str
    gstin: str | None
    version: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ClientListResponse(BaseModel):
    """Musteri listesi icin (sayfalama destekli)"""
    items: list[ClientResponse]
    total: int
    page: int
    size: int
