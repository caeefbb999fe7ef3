import uuid
from datetime import datetime, date
from decimal import Decimal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, computed_field

from kolayfatura.services import lifecycle


def _new_line_id() -> str:
    return uuid.uuid4().hex


class LineItem(BaseModel):
    """
    Fatura kalemi.
    amount her zaman quantity * rate olmalidir; bunu LineItemEditor ve
    fatura servisi saglar.
    """
    id: str = Field(
        default_factory=_new_line_id,
        validation_alias=AliasChoices("line_id", "id"),
    )
    description: str = ""
    quantity: Decimal = Decimal("1")
    rate: Decimal = Decimal("0")
    amount: Decimal = Decimal("0")

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


class LineItemInput(BaseModel):
    """Istekten gelen kalem. amount istemciden alinmaz, hesaplanir."""
    id: str | None = None
    description: str = ""
    quantity: Decimal = Decimal("1")
    rate: Decimal = Decimal("0")


class ClientSnapshot(BaseModel):
    """Musterinin fatura anindaki bilgilerinin kopyasi."""
    id: str | None = None
    name: str
    email: str
    phone: str | None = None
    address: str
    gstin: str | None = None


class InvoiceCreate(BaseModel):
    client_id: uuid.UUID | None = None
    # Bos birakilirsa otomatik uretilir (INV-0001, INV-0002, ...)
    invoice_number: str | None = Field(default=None, max_length=50)
    issue_date: date | None = None
    due_date: date | None = None
    # Kesir olarak: 0.18 = %18
    tax_rate: Decimal | None = Field(default=None, ge=0, le=1)
    status: str = "draft"
    notes: str | None = None
    items: list[LineItemInput] = []


class InvoiceUpdate(BaseModel):
    """Fatura duzenleme. Gonderilmeyen alanlar degismez; items verilirse tamamen degisir."""
    client_id: uuid.UUID | None = None
    invoice_number: str | None = Field(default=None, max_length=50)
    issue_date: date | None = None
    due_date: date | None = None
    tax_rate: Decimal | None = Field(default=None, ge=0, le=1)
    status: str | None = None
    notes: str | None = None
    items: list[LineItemInput] | None = None
    expected_version: int | None = None


class InvoiceStatusUpdate(BaseModel):
    """Fatura durum guncelleme."""
    status: str
    expected_version: int | None = None


class InvoiceResponse(BaseModel):
    id: uuid.UUID
    client_id: uuid.UUID | None
    client: ClientSnapshot
    invoice_number: str
    issue_date: date
    due_date: date
    status: str
    notes: str | None
    tax_rate: Decimal
    subtotal: Decimal
    tax_amount: Decimal
    total: Decimal
    items: list[LineItem] = []
    version: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @computed_field
    @property
    def is_overdue(self) -> bool:
        return lifecycle.is_overdue(self)

    @computed_field
    @property
    def effective_status(self) -> str:
        return lifecycle.effective_status(self).value


class InvoiceListResponse(BaseModel):
    """Fatura listesi (sayfalama destekli)."""
    items: list[InvoiceResponse]
    total: int
    page: int
    size: int


class InvoiceStats(BaseModel):
    total_count: int
    total_revenue: Decimal
    paid_count: int
    paid_revenue: Decimal
    pending_count: int
    pending_amount: Decimal
    overdue_count: int
    overdue_amount: Decimal
    client_count: int
    by_status: dict[str, int]
