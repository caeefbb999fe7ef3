"""
Fatura belge olusturucu.

Fatura + isletme profilini yazdirilabilir bir belge yapisina cevirir
(build_document), HTML'e (Jinja2) ve oradan PDF'e (xhtml2pdf) donusturur.

Belge yapisi:
    1. Baslik: isletme adi (sol), "Invoice #N" (sag)
    2. From / To bloklari (bos satirlar tamamen atlanir)
    3. Tarih satiri: Issue Date (sol), Due Date (sag)
    4. Kalem tablosu: Description, Qty, Rate, Amount
    5. Toplamlar: Subtotal, Tax (r%), Total
    6. Notlar (varsa)

Tutarlar kontrol edilmez; faturada saklanan degerler aynen basilir.
"""

import logging
from datetime import date
from functools import lru_cache
from io import BytesIO
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape
from pydantic import BaseModel
from xhtml2pdf import pisa

from kolayfatura.config import settings
from kolayfatura.errors import RenderError
from kolayfatura.schemas.invoice import ClientSnapshot
from kolayfatura.services.totals import format_number, format_percent, round_money

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parents[1] / "templates"

_env = Environment(
    loader=FileSystemLoader(str(TEMPLATES_DIR)),
    autoescape=select_autoescape(["html", "xml"]),
)

TABLE_COLUMNS = ("Description", "Qty", "Rate", "Amount")


class ItemRow(BaseModel):
    description: str
    quantity: str
    rate: str
    amount: str


class TotalsRow(BaseModel):
    label: str
    value: str
    emphasized: bool = False


class InvoiceDocument(BaseModel):
    business_name: str
    invoice_label: str
    from_lines: list[str]
    to_lines: list[str]
    issue_date: str
    due_date: str
    columns: tuple[str, ...] = TABLE_COLUMNS
    rows: list[ItemRow]
    totals: list[TotalsRow]
    notes: str | None = None


def format_currency(value) -> str:
    """Sabit sembol + 2 ondalik: 900 -> "₹900.00"."""
    return f"{settings.CURRENCY_SYMBOL}{round_money(value):.2f}"


def format_date(value: date) -> str:
    """Jan 05, 2026"""
    return value.strftime("%b %d, %Y")


def _labeled(label: str, value: str | None) -> str:
    return f"{label}: {value}" if value else ""


def _non_empty(lines: list[str | None]) -> list[str]:
    return [line for line in lines if line and line.strip()]


def _issuer_name(issuer) -> str:
    return getattr(issuer, "business_name", None) or getattr(issuer, "display_name", None) or ""


def build_document(invoice, issuer) -> InvoiceDocument:
    """Faturayi yazdirilabilir belge yapisina cevir (saf fonksiyon)."""
    client = invoice.client
    if isinstance(client, dict):
        client = ClientSnapshot(**client)

    from_lines = _non_empty([
        _issuer_name(issuer),
        getattr(issuer, "address", None),
        _labeled("Phone", getattr(issuer, "phone", None)),
        _labeled("Email", getattr(issuer, "email", None)),
        _labeled("Website", getattr(issuer, "website", None)),
        _labeled("GSTIN", getattr(issuer, "gstin", None)),
    ])
    to_lines = _non_empty([
        client.name,
        client.address,
        client.email,
        _labeled("Phone", client.phone),
        _labeled("GSTIN", client.gstin),
    ])

    rows = [
        ItemRow(
            description=item.description,
            quantity=format_number(item.quantity),
            rate=format_currency(item.rate),
            amount=format_currency(item.amount),
        )
        for item in invoice.items
    ]
    totals = [
        TotalsRow(label="Subtotal:", value=format_currency(invoice.subtotal)),
        TotalsRow(
            label=f"Tax ({format_percent(invoice.tax_rate)}%):",
            value=format_currency(invoice.tax_amount),
        ),
        TotalsRow(label="Total:", value=format_currency(invoice.total), emphasized=True),
    ]

    notes = invoice.notes if invoice.notes and invoice.notes.strip() else None

    return InvoiceDocument(
        business_name=_issuer_name(issuer) or "Your Business",
        invoice_label=f"Invoice #{invoice.invoice_number}",
        from_lines=from_lines,
        to_lines=to_lines,
        issue_date=f"Issue Date: {format_date(invoice.issue_date)}",
        due_date=f"Due Date: {format_date(invoice.due_date)}",
        rows=rows,
        totals=totals,
        notes=notes,
    )


def _latin1(text: str) -> bool:
    try:
        text.encode("latin-1")
    except UnicodeEncodeError:
        return False
    return True


@lru_cache(maxsize=None)
def _warn_missing_glyphs(symbol: str) -> None:
    logger.warning(
        "PDF_FONT_PATH ayarli degil; yerlesik Helvetica '%s' sembolunu cizemez. "
        "Sembolu iceren bir TTF dosyasi tanimlayin.",
        symbol,
    )


def pdf_font_path() -> str | None:
    """
    PDF'e gomulecek TTF dosyasi (PDF_FONT_PATH).
    Tanimli degilse veya dosya yoksa None; sablon Helvetica kullanir.
    """
    configured = settings.PDF_FONT_PATH
    if configured and Path(configured).is_file():
        return Path(configured).resolve().as_posix()
    if configured:
        logger.warning("PDF fontu bulunamadi: %s", configured)
    if not _latin1(settings.CURRENCY_SYMBOL):
        _warn_missing_glyphs(settings.CURRENCY_SYMBOL)
    return None


def render_html(document: InvoiceDocument) -> str:
    template = _env.get_template("invoices/pdf.html")
    return template.render(doc=document, font_path=pdf_font_path())


def document_to_pdf(document: InvoiceDocument) -> bytes:
    """
    Belgeyi PDF'e cevir.
    Hata olursa RenderError; baska bir formata geri donulmez.
    """
    html = render_html(document)

    pdf_buffer = BytesIO()
    try:
        result = pisa.CreatePDF(html, dest=pdf_buffer, encoding="utf-8")
    except Exception as exc:
        logger.error("PDF olusturulamadi (%s): %s", document.invoice_label, exc)
        raise RenderError("Failed to generate PDF") from exc

    if result.err:
        logger.error("PDF olusturulamadi (%s): %d hata", document.invoice_label, result.err)
        raise RenderError("Failed to generate PDF")
    return pdf_buffer.getvalue()


def render_pdf(invoice, issuer) -> bytes:
    return document_to_pdf(build_document(invoice, issuer))

