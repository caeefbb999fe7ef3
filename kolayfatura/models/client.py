import uuid
from datetime import datetime

from sqlalchemy import String, Text, DateTime, ForeignKey, Integer
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from kolayfatura.database import Base


class Client(Base):
    """
    Musteri (fatura alicisi) modeli.
    Her musteri tek bir kullaniciya (owner) aittir.
    Musteri silinince faturalar silinmez; faturalar musterinin
    o anki bilgilerinin kopyasini (snapshot) tasir.
    """

    __tablename__ = "clients"

    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True, default=uuid.uuid4
    )

    # ondelete="CASCADE": kullanici silinirse musterileri de silinir
    owner_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )

    name: Mapped[str] = mapped_column(
        String(255), nullable=False, index=True
    )
    email: Mapped[str] = mapped_column(
        String(255), nullable=False
    )
    phone: Mapped[str | None] = mapped_column(
        String(50), nullable=True
    )
    address: Mapped[str] = mapped_column(
        Text, nullable=False
    )
    gstin: Mapped[str | None] = mapped_column(
        String(20), nullable=True
    )

    # Iyimser kilitleme sayaci: her guncellemede SQLAlchemy tarafindan artirilir
    version: Mapped[int] = mapped_column(
        Integer, nullable=False, default=1
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    owner: Mapped["User"] = relationship(back_populates="clients")

    __mapper_args__ = {"version_id_col": version}
