import uuid
from datetime import datetime

from sqlalchemy import String, Text, Boolean, DateTime
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from kolayfatura.database import Base


class User(Base):
    """
    Kullanici (fatura kesen isletme) modeli.
    Kimlik dogrulama harici servistedir; burada sadece faturanin
    "From" bolumunde kullanilan isletme profili tutulur.
    """

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True, default=uuid.uuid4
    )

    email: Mapped[str] = mapped_column(
        String(255), unique=True, index=True, nullable=False
    )

    # Gorunen ad ve resmi isletme adi (PDF basliginda isletme adi onceliklidir)
    display_name: Mapped[str | None] = mapped_column(
        String(255), nullable=True
    )
    business_name: Mapped[str | None] = mapped_column(
        String(255), nullable=True
    )
    address: Mapped[str | None] = mapped_column(
        Text, nullable=True
    )
    phone: Mapped[str | None] = mapped_column(
        String(50), nullable=True
    )
    website: Mapped[str | None] = mapped_column(
        String(255), nullable=True
    )
    # GSTIN: vergi kayit numarasi (opsiyonel)
    gstin: Mapped[str | None] = mapped_column(
        String(20), nullable=True
    )

    is_active: Mapped[bool] = mapped_column(
        Boolean, default=True
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    clients: Mapped[list["Client"]] = relationship(
        back_populates="owner", cascade="all, delete-orphan"
    )
