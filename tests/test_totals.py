"""
KolayFatura - Toplam Hesaplama Testleri

Test edilen fonksiyonlar (kolayfatura.services.totals):
    compute_totals  - ara toplam, vergi, genel toplam
    line_amount     - kalem tutari
    round_rate      - vergi orani hassasiyeti
    format_number / format_percent
"""

from decimal import Decimal

from kolayfatura.services.totals import (
    compute_totals,
    format_number,
    format_percent,
    line_amount,
    round_rate,
)


class TestComputeTotals:
    """Ara toplam / vergi / toplam hesaplama testleri."""

    def test_single_item_with_tax(self):
        """5000 tutarli kalem, %18 vergi -> 5000 / 900 / 5900."""
        totals = compute_totals([{"amount": Decimal("5000")}], Decimal("0.18"))
        assert totals.subtotal == Decimal("5000.00")
        assert totals.tax_amount == Decimal("900.00")
        assert totals.total == Decimal("5900.00")

    def test_zero_tax(self):
        """Vergi orani 0 ise toplam ara toplama esit olmali."""
        totals = compute_totals([{"amount": 250}], 0)
        assert totals == (Decimal("250"), Decimal("0"), Decimal("250"))

    def test_two_items_zero_tax(self):
        items = [
            {"quantity": 2, "rate": 100, "amount": Decimal("200")},
            {"quantity": 1, "rate": 50, "amount": Decimal("50")},
        ]
        totals = compute_totals(items, Decimal("0"))
        assert totals == (Decimal("250"), Decimal("0"), Decimal("250"))

    def test_empty_items(self):
        """Kalem yoksa tum degerler sifir."""
        totals = compute_totals([], Decimal("0.18"))
        assert totals.subtotal == 0
        assert totals.tax_amount == 0
        assert totals.total == 0

    def test_order_does_not_matter(self):
        """Kalemlerin sirasi sonucu degistirmemeli."""
        items = [{"amount": Decimal("100.10")}, {"amount": Decimal("0.35")}, {"amount": Decimal("49.99")}]
        assert compute_totals(items, Decimal("0.05")) == compute_totals(items[::-1], Decimal("0.05"))

    def test_amount_is_trusted(self):
        """amount alanina guvenilir, quantity * rate tekrar hesaplanmaz."""
        item = {"quantity": 2, "rate": 100, "amount": Decimal("150")}
        assert compute_totals([item], 0).subtotal == Decimal("150")

    def test_total_is_subtotal_plus_tax(self):
        items = [{"amount": Decimal("333.33")}, {"amount": Decimal("0.01")}]
        totals = compute_totals(items, Decimal("0.075"))
        assert totals.total == totals.subtotal + totals.tax_amount
        # 333.34 * 0.075 = 25.0005 -> 25.00
        assert totals.tax_amount == Decimal("25.00")

    def test_float_tax_rate(self):
        """float oran da kabul edilmeli (str uzerinden Decimal'e cevrilir)."""
        totals = compute_totals([{"amount": 1000}], 0.18)
        assert totals.tax_amount == Decimal("180.00")


class TestLineAmount:

    def test_quantity_times_rate(self):
        assert line_amount(10, 500) == Decimal("5000.00")

    def test_rounds_half_up(self):
        # 2.5 * 3.333 = 8.3325
        assert line_amount("2.5", "3.333") == Decimal("8.33")
        # 1 * 0.125 = 0.125 -> 0.13
        assert line_amount(1, "0.125") == Decimal("0.13")


class TestRoundRate:

    def test_four_decimal_places(self):
        assert round_rate("0.123456") == Decimal("0.1235")
        assert round_rate(0.18) == Decimal("0.1800")

    def test_rounds_half_up(self):
        assert round_rate("0.00005") == Decimal("0.0001")


class TestFormatting:

    def test_format_number_strips_zeros(self):
        assert format_number(Decimal("10.00")) == "10"
        assert format_number(Decimal("1.50")) == "1.5"
        assert format_number(Decimal("100")) == "100"

    def test_format_percent(self):
        """Kesir oran yuzde metnine cevrilmeli."""
        assert format_percent(Decimal("0.18")) == "18"
        assert format_percent(Decimal("0.1800")) == "18"
        assert format_percent(Decimal("0.075")) == "7.5"
        assert format_percent(0) == "0"
