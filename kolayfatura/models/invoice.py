import uuid
from datetime import datetime, date
from decimal import Decimal

from sqlalchemy import String, Text, DateTime, Date, ForeignKey, Numeric, Integer, JSON
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from kolayfatura.database import Base


class Invoice(Base):
    """
    Fatura modeli.
    Musteri bilgisi canli bir iliski degil, olusturma anindaki kopyadir
    (client sutunu). client_id sadece filtreleme icin tutulur.
    """

    __tablename__ = "invoices"

    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True, default=uuid.uuid4
    )
    owner_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    # Musteri silinirse fatura kalir, referans bosaltilir
    client_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("clients.id", ondelete="SET NULL"), nullable=True, index=True
    )
    # Musterinin fatura anindaki bilgileri (name, email, phone, address, gstin)
    client: Mapped[dict] = mapped_column(
        "client_snapshot", JSON, nullable=False
    )

    # Kullanici bazinda benzersiz olmasi beklenir ama zorlanmaz
    invoice_number: Mapped[str] = mapped_column(
        String(50), nullable=False, index=True
    )
    issue_date: Mapped[date] = mapped_column(
        Date, nullable=False
    )
    due_date: Mapped[date] = mapped_column(
        Date, nullable=False
    )
    # Saklanan durum: draft, sent, paid ("overdue" turetilir, saklanmaz)
    status: Mapped[str] = mapped_column(
        String(20), default="draft"
    )
    notes: Mapped[str | None] = mapped_column(
        Text, nullable=True
    )

    # Vergi orani kesir olarak (0.18 = %18)
    tax_rate: Mapped[Decimal] = mapped_column(
        Numeric(6, 4), default=Decimal("0")
    )
    # Toplam tutarlar (kalemlerden hesaplanir)
    subtotal: Mapped[Decimal] = mapped_column(
        Numeric(12, 2), default=Decimal("0.00")
    )
    tax_amount: Mapped[Decimal] = mapped_column(
        Numeric(12, 2), default=Decimal("0.00")
    )
    total: Mapped[Decimal] = mapped_column(
        Numeric(12, 2), default=Decimal("0.00")
    )

    version: Mapped[int] = mapped_column(
        Integer, nullable=False, default=1
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    items: Mapped[list["InvoiceItem"]] = relationship(
        back_populates="invoice",
        cascade="all, delete-orphan",
        order_by="InvoiceItem.position",
    )

    __mapper_args__ = {"version_id_col": version}

    def replace_items(self, items: list[dict]) -> None:
        """Kalemleri verilen sirayla yeniden olustur."""
        self.items = [
            InvoiceItem(
                line_id=str(item.get("id") or uuid.uuid4()),
                position=position,
                description=item["description"],
                quantity=item["quantity"],
                rate=item["rate"],
                amount=item["amount"],
            )
            for position, item in enumerate(items)
        ]


class InvoiceItem(Base):
    """
    Fatura kalemi modeli.
    Ornek: 10 saat "Design" x 500 = 5000
    """

    __tablename__ = "invoice_items"

    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True, default=uuid.uuid4
    )
    invoice_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("invoices.id", ondelete="CASCADE"), nullable=False, index=True
    )
    # Kalemin fatura icindeki kimligi (duzenleme ekraninda uretilir)
    line_id: Mapped[str] = mapped_column(
        String(64), nullable=False
    )
    # Ekleme sirasi
    position: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0
    )

    description: Mapped[str] = mapped_column(
        String(255), nullable=False
    )
    quantity: Mapped[Decimal] = mapped_column(
        Numeric(10, 2), nullable=False
    )
    rate: Mapped[Decimal] = mapped_column(
        Numeric(12, 2), nullable=False
    )
    # quantity * rate
    amount: Mapped[Decimal] = mapped_column(
        Numeric(12, 2), nullable=False
    )

    invoice: Mapped["Invoice"] = relationship(back_populates="items")
