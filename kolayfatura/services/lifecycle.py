"""
Fatura yasam dongusu.

Saklanan durumlar: draft, sent, paid. Aralarindaki her gecise izin verilir
(ornek: paid -> draft). "overdue" saklanmaz, okuma aninda turetilir:
odenmemis ve vade gunu baslamis fatura (vade gunu 00:00'dan itibaren).
"""

from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from typing import Iterable

from kolayfatura.errors import ValidationFailed


class InvoiceStatus(str, Enum):
    DRAFT = "draft"
    SENT = "sent"
    PAID = "paid"
    OVERDUE = "overdue"


STORABLE_STATUSES = frozenset({InvoiceStatus.DRAFT, InvoiceStatus.SENT, InvoiceStatus.PAID})


def _moment(now: datetime | date | None) -> datetime:
    """Karsilastirma ani (yerel saat, tz bilgisi olmadan)."""
    if now is None:
        return datetime.now()
    if isinstance(now, datetime):
        if now.tzinfo is not None:
            return now.astimezone().replace(tzinfo=None)
        return now
    # Sadece tarih verildiyse gunun sonu kabul edilir
    return datetime.combine(now, time.max)


def is_overdue(invoice, now: datetime | date | None = None) -> bool:
    """
    Odenmemis ve vade gunu baslamis mi?
    Vade gunu 00:00'dan itibaren overdue sayilir (vade gunu dahil).
    """
    if invoice.status == InvoiceStatus.PAID.value:
        return False
    if invoice.due_date is None:
        return False
    return _moment(now) > datetime.combine(invoice.due_date, time.min)


def effective_status(invoice, now: datetime | date | None = None) -> InvoiceStatus:
    """Ekranda gosterilecek durum (saklanan durum veya turetilmis overdue)."""
    if is_overdue(invoice, now):
        return InvoiceStatus.OVERDUE
    return InvoiceStatus(invoice.status)


def check_status_change(new_status: str) -> InvoiceStatus:
    """
    Yeni durumu dogrula. Saklanabilir durumlar arasinda her gecis serbest.
    overdue elle atanamaz.
    """
    try:
        status = InvoiceStatus(new_status)
    except ValueError:
        raise ValidationFailed(
            f"Unknown invoice status '{new_status}'",
            details={"status": "must be one of draft, sent, paid"},
        )
    if status not in STORABLE_STATUSES:
        raise ValidationFailed(
            "Overdue is derived from the due date and cannot be set",
            details={"status": "must be one of draft, sent, paid"},
        )
    return status


def _field(item, name):
    return item[name] if isinstance(item, dict) else getattr(item, name)


def validate_submission(client_id, items: Iterable) -> None:
    """
    Kaydetmeden once fatura verisini dogrula (olusturma ve duzenleme).
    - musteri secilmis olmali
    - en az bir kalem olmali
    - her kalemde aciklama dolu, miktar > 0, birim fiyat > 0
    Hata varsa ValidationFailed; veritabanina hicbir sey yazilmaz.
    """
    errors: dict[str, str] = {}
    if not client_id:
        errors["client_id"] = "Please select a client"

    items = list(items)
    if not items:
        errors["items"] = "Add at least one item"

    for index, item in enumerate(items):
        description = (_field(item, "description") or "").strip()
        quantity = Decimal(str(_field(item, "quantity") or 0))
        rate = Decimal(str(_field(item, "rate") or 0))
        if not description or quantity <= 0 or rate <= 0:
            errors[f"items.{index}"] = "Please fill in all item details"

    if errors:
        raise ValidationFailed(next(iter(errors.values())), details=errors)
