import logging
import uuid
from datetime import date, timedelta
from decimal import Decimal

from sqlalchemy import or_
from sqlalchemy.orm import Session

from kolayfatura.config import settings
from kolayfatura.errors import PermissionDenied, RecordNotFound, ValidationFailed, persistence_errors
from kolayfatura.models.client import Client
from kolayfatura.models.invoice import Invoice
from kolayfatura.repository import RecordRepository
from kolayfatura.schemas.invoice import (
    ClientSnapshot,
    InvoiceCreate,
    InvoiceStats,
    InvoiceUpdate,
    LineItem,
)
from kolayfatura.services import client as client_service
from kolayfatura.services import email as email_service
from kolayfatura.services import lifecycle
from kolayfatura.services import profile as profile_service
from kolayfatura.services.lifecycle import InvoiceStatus
from kolayfatura.services.renderer import render_pdf
from kolayfatura.services.totals import compute_totals, line_amount, round_money, round_rate

logger = logging.getLogger(__name__)


def generate_invoice_number(db: Session, owner_id: uuid.UUID) -> str:
    """
    Otomatik fatura numarasi olustur.
    Format: INV-0001, INV-0002, ... (kullanici bazinda, kullanilmis numaralar atlanir)
    """
    with persistence_errors(db, "Failed to generate invoice number"):
        existing = {
            number for (number,) in db.query(Invoice.invoice_number).filter(
                Invoice.owner_id == owner_id
            )
        }
    seq = len(existing) + 1
    while f"{settings.INVOICE_NUMBER_PREFIX}{seq:04d}" in existing:
        seq += 1
    return f"{settings.INVOICE_NUMBER_PREFIX}{seq:04d}"


def _snapshot(client: Client) -> dict:
    """Musterinin o anki bilgilerini kopyala (canli referans degil)."""
    return ClientSnapshot(
        id=str(client.id),
        name=client.name,
        email=client.email,
        phone=client.phone,
        address=client.address,
        gstin=client.gstin,
    ).model_dump()


def _build_items(items) -> list[dict]:
    """
    Kalemleri amount = quantity * rate ile hazirla.
    quantity ve rate once kolon hassasiyetine (2 hane) yuvarlanir, amount
    yuvarlanmis degerlerden hesaplanir. Boylece okunan kayitta da
    amount == quantity * rate kalir.
    """
    built = []
    for item in items:
        quantity = round_money(item.quantity)
        rate = round_money(item.rate)
        built.append({
            "id": item.id or uuid.uuid4().hex,
            "description": item.description.strip(),
            "quantity": quantity,
            "rate": rate,
            "amount": line_amount(quantity, rate),
        })
    return built


def _check_dates(issue_date: date, due_date: date) -> None:
    if due_date < issue_date:
        raise ValidationFailed(
            "Due date cannot be before the issue date",
            details={"due_date": "must be on or after issue_date"},
        )


def get_invoices(
    db: Session,
    owner_id: uuid.UUID,
    invoice_status: str | None = None,
    client_id: uuid.UUID | None = None,
    search: str | None = None,
    page: int = 1,
    size: int = 20,
    today: date | None = None,
) -> tuple[list[Invoice], int]:
    """
    Fatura listesini sayfalama ile dondur (en yeni once).
    invoice_status: draft, sent, paid veya overdue (overdue vade tarihinden turetilir)
    search: fatura numarasi veya musteri adi icinde arama
    Dondurur: (fatura_listesi, toplam_sayi)
    """
    conditions = []
    stored_status = None
    if invoice_status and invoice_status != "all":
        try:
            wanted = InvoiceStatus(invoice_status)
        except ValueError:
            raise ValidationFailed(
                f"Unknown invoice status '{invoice_status}'",
                details={"status": "must be one of all, draft, sent, paid, overdue"},
            )
        if wanted == InvoiceStatus.OVERDUE:
            # lifecycle.is_overdue ile ayni kural: vade gunu basladiysa overdue
            conditions.append(Invoice.status != InvoiceStatus.PAID.value)
            conditions.append(Invoice.due_date <= (today or date.today()))
        else:
            stored_status = wanted.value

    if search:
        search_filter = f"%{search}%"
        conditions.append(or_(
            Invoice.invoice_number.ilike(search_filter),
            Invoice.client["name"].as_string().ilike(search_filter),
        ))

    repo = RecordRepository(db)
    with persistence_errors(db, "Failed to retrieve invoices"):
        total = repo.count_records(
            "invoices", owner_id, *conditions, status=stored_status, client_id=client_id,
        )
        invoices = repo.query_records(
            "invoices", owner_id, *conditions,
            offset=(page - 1) * size, limit=size,
            status=stored_status, client_id=client_id,
        )
    return invoices, total


def get_invoice(db: Session, invoice_id: uuid.UUID, owner_id: uuid.UUID) -> Invoice:
    with persistence_errors(db, "Failed to retrieve invoice"):
        invoice = RecordRepository(db).get_record("invoices", invoice_id)
    if invoice is None:
        raise RecordNotFound("Invoice not found")
    if invoice.owner_id != owner_id:
        raise PermissionDenied("You do not have access to this invoice")
    return invoice


def create_invoice(db: Session, owner_id: uuid.UUID, data: InvoiceCreate) -> Invoice:
    """
    Yeni fatura olustur.
    Sira: dogrulama -> musteri kopyasi -> kalem tutarlari ve toplamlar -> kayit.
    Dogrulama hatasinda veritabanina hicbir sey yazilmaz.
    """
    items = _build_items(data.items)
    lifecycle.validate_submission(data.client_id, items)
    status = lifecycle.check_status_change(data.status)

    client = client_service.get_client(db, data.client_id, owner_id)

    issue_date = data.issue_date or date.today()
    due_date = data.due_date or issue_date + timedelta(days=settings.DEFAULT_DUE_DAYS)
    _check_dates(issue_date, due_date)

    tax_rate = round_rate(
        data.tax_rate if data.tax_rate is not None else settings.DEFAULT_TAX_RATE
    )
    totals = compute_totals(items, tax_rate)

    invoice_number = (data.invoice_number or "").strip() or generate_invoice_number(db, owner_id)

    repo = RecordRepository(db)
    with persistence_errors(db, "Failed to create invoice"):
        invoice_id = repo.create_record("invoices", {
            "owner_id": owner_id,
            "client_id": client.id,
            "client": _snapshot(client),
            "invoice_number": invoice_number,
            "issue_date": issue_date,
            "due_date": due_date,
            "status": status.value,
            "notes": data.notes,
            "tax_rate": tax_rate,
            "subtotal": totals.subtotal,
            "tax_amount": totals.tax_amount,
            "total": totals.total,
            "items": items,
        })
        invoice = repo.get_record("invoices", invoice_id)

    logger.info("Fatura olusturuldu: %s (%s)", invoice.invoice_number, invoice.id)
    return invoice


def update_invoice(
    db: Session, invoice_id: uuid.UUID, owner_id: uuid.UUID, data: InvoiceUpdate
) -> Invoice:
    """
    Faturayi duzenle (olusturma ile ayni dogrulama).
    Musteri degisirse yeni musterinin kopyasi alinir, degismezse eski kopya korunur.
    Kalemler gonderilirse tamamen degistirilir; toplamlar her zaman yeniden hesaplanir.
    """
    invoice = get_invoice(db, invoice_id, owner_id)
    provided = data.model_dump(exclude_unset=True)

    client_id = data.client_id or invoice.client_id or invoice.client.get("id")
    if data.items is not None:
        items = _build_items(data.items)
    else:
        items = [LineItem.model_validate(item).model_dump() for item in invoice.items]
    lifecycle.validate_submission(client_id, items)

    changes: dict = {}
    if data.client_id is not None and data.client_id != invoice.client_id:
        client = client_service.get_client(db, data.client_id, owner_id)
        changes["client_id"] = client.id
        changes["client"] = _snapshot(client)

    if data.status is not None:
        changes["status"] = lifecycle.check_status_change(data.status).value

    issue_date = data.issue_date or invoice.issue_date
    due_date = data.due_date or invoice.due_date
    _check_dates(issue_date, due_date)
    changes["issue_date"] = issue_date
    changes["due_date"] = due_date

    if (data.invoice_number or "").strip():
        changes["invoice_number"] = data.invoice_number.strip()
    if "notes" in provided:
        changes["notes"] = data.notes

    tax_rate = round_rate(data.tax_rate if data.tax_rate is not None else invoice.tax_rate)
    totals = compute_totals(items, tax_rate)
    changes.update({
        "tax_rate": tax_rate,
        "subtotal": totals.subtotal,
        "tax_amount": totals.tax_amount,
        "total": totals.total,
    })
    if data.items is not None:
        changes["items"] = items

    with persistence_errors(db, "Failed to update invoice"):
        invoice = RecordRepository(db).update_record(
            "invoices", invoice_id, changes, expected_version=data.expected_version,
        )
    logger.info("Fatura guncellendi: %s", invoice.invoice_number)
    return invoice


def update_invoice_status(
    db: Session,
    invoice_id: uuid.UUID,
    owner_id: uuid.UUID,
    new_status: str,
    expected_version: int | None = None,
) -> Invoice:
    """Durumu degistir. draft/sent/paid arasinda her gecis serbest."""
    invoice = get_invoice(db, invoice_id, owner_id)
    old_status = invoice.status
    status = lifecycle.check_status_change(new_status)

    with persistence_errors(db, "Failed to update status"):
        invoice = RecordRepository(db).update_record(
            "invoices", invoice_id, {"status": status.value}, expected_version=expected_version,
        )
    logger.info(
        "Fatura '%s' durumu '%s' -> '%s' olarak degistirildi",
        invoice.invoice_number, old_status, status.value,
    )
    return invoice


def delete_invoice(db: Session, invoice_id: uuid.UUID, owner_id: uuid.UUID) -> None:
    invoice = get_invoice(db, invoice_id, owner_id)
    invoice_number = invoice.invoice_number
    with persistence_errors(db, "Failed to delete invoice"):
        RecordRepository(db).delete_record("invoices", invoice_id)
    logger.info("Fatura silindi: %s", invoice_number)


def get_invoice_stats(db: Session, owner_id: uuid.UUID, today: date | None = None) -> InvoiceStats:
    """
    Panel istatistikleri.
    pending: gonderilmis (sent) faturalar, overdue: vadesi gecmis odenmemis faturalar.
    """
    with persistence_errors(db, "Failed to retrieve user statistics"):
        invoices = RecordRepository(db).query_records("invoices", owner_id)
    client_count = client_service.get_client_count(db, owner_id)

    zero = Decimal("0.00")
    paid = [i for i in invoices if i.status == InvoiceStatus.PAID.value]
    pending = [i for i in invoices if i.status == InvoiceStatus.SENT.value]
    overdue = [i for i in invoices if lifecycle.is_overdue(i, today)]

    by_status: dict[str, int] = {}
    for i in invoices:
        by_status[i.status] = by_status.get(i.status, 0) + 1

    return InvoiceStats(
        total_count=len(invoices),
        total_revenue=sum((i.total for i in invoices), zero),
        paid_count=len(paid),
        paid_revenue=sum((i.total for i in paid), zero),
        pending_count=len(pending),
        pending_amount=sum((i.total for i in pending), zero),
        overdue_count=len(overdue),
        overdue_amount=sum((i.total for i in overdue), zero),
        client_count=client_count,
        by_status=by_status,
    )


def pdf_filename(invoice: Invoice) -> str:
    return f"invoice-{invoice.invoice_number}.pdf"


def export_invoice_pdf(
    db: Session, invoice_id: uuid.UUID, owner_id: uuid.UUID
) -> tuple[str, bytes]:
    """Faturanin PDF'ini olustur. Dondurur: (dosya_adi, pdf_bytes)"""
    invoice = get_invoice(db, invoice_id, owner_id)
    issuer = profile_service.get_profile(db, owner_id)
    pdf_bytes = render_pdf(invoice, issuer)
    return pdf_filename(invoice), pdf_bytes


def prepare_invoice_email(
    db: Session, invoice_id: uuid.UUID, owner_id: uuid.UUID
) -> dict:
    """
    Fatura email'ini hazirla (alici, konu, govde, PDF eki).
    Gonderim ayri yapilir: email_service.send_email(**mesaj)
    """
    invoice = get_invoice(db, invoice_id, owner_id)
    recipient = invoice.client.get("email")
    if not recipient:
        raise ValidationFailed(
            "Client has no email address",
            details={"email": "required to send the invoice"},
        )

    issuer = profile_service.get_profile(db, owner_id)
    subject, body = email_service.compose_invoice_email(invoice, issuer)
    pdf_bytes = render_pdf(invoice, issuer)
    return {
        "recipient": recipient,
        "subject": subject,
        "body": body,
        "pdf_bytes": pdf_bytes,
        "filename": pdf_filename(invoice),
    }
