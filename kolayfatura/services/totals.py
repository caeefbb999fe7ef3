"""
Fatura toplam hesaplayicisi.

Vergi orani her yerde kesir olarak kullanilir (0.18 = %18).
Yuzde gosterimi sadece ekrana/PDF'e yazarken yapilir (format_percent).
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, NamedTuple

CENT = Decimal("0.01")
# tax_rate kolonu 4 ondalik hane saklar (Numeric(6, 4))
RATE_STEP = Decimal("0.0001")


class Totals(NamedTuple):
    subtotal: Decimal
    tax_amount: Decimal
    total: Decimal


def to_decimal(value) -> Decimal:
    """int/float/str degerini Decimal'e cevir (float icin str uzerinden)."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def round_money(value) -> Decimal:
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def round_rate(value) -> Decimal:
    """Vergi oranini saklanan hassasiyete yuvarla: 0.123456 -> 0.1235."""
    return to_decimal(value).quantize(RATE_STEP, rounding=ROUND_HALF_UP)


def line_amount(quantity, rate) -> Decimal:
    """Kalem tutari: quantity * rate (2 haneye yuvarlanmis)."""
    return round_money(to_decimal(quantity) * to_decimal(rate))


def compute_totals(items: Iterable, tax_rate) -> Totals:
    """
    Kalemlerden ara toplam, vergi ve genel toplami hesapla.

    Kalemlerin amount alanina guvenilir; quantity * rate burada tekrar
    hesaplanmaz. Kalemler dict veya amount niteligi olan nesne olabilir.

    Ornek:
        [{"amount": 5000}], 0.18 -> (5000.00, 900.00, 5900.00)
    """
    subtotal = Decimal("0")
    for item in items:
        amount = item["amount"] if isinstance(item, dict) else item.amount
        subtotal += to_decimal(amount)

    subtotal = round_money(subtotal)
    tax_amount = round_money(subtotal * to_decimal(tax_rate))
    return Totals(subtotal, tax_amount, subtotal + tax_amount)


def format_number(value) -> str:
    """Gereksiz sifirlari at: 10.00 -> "10", 1.50 -> "1.5"."""
    normalized = to_decimal(value).normalize()
    return f"{normalized:f}"


def format_percent(tax_rate) -> str:
    """Kesir oranini yuzde metnine cevir: 0.18 -> "18"."""
    return format_number(to_decimal(tax_rate) * 100)
