"""
Fatura kalemi duzenleme durumu.

Fatura olusturma/duzenleme sirasinda kalemlerin bellek ici listesini tutar.
quantity veya rate degistiginde amount ayni adimda yeniden hesaplanir;
disaridan eski (stale) bir amount okunamaz.
"""

from decimal import Decimal
from typing import Iterable

from kolayfatura.schemas.invoice import LineItem
from kolayfatura.services.totals import Totals, compute_totals, line_amount, to_decimal

EDITABLE_FIELDS = ("description", "quantity", "rate")


class LineItemEditor:
    """
    Kullanim:
        editor = LineItemEditor()          # tek bos kalemle baslar
        editor.update_item(0, "description", "Design")
        editor.update_item(0, "quantity", 10)
        editor.update_item(0, "rate", 500)
        editor.totals(Decimal("0.18"))     # (5000.00, 900.00, 5900.00)
    """

    def __init__(self, items: Iterable[LineItem] | None = None):
        if items is None:
            self._items: list[LineItem] = [self._blank_item()]
        else:
            # Duzenleme akisi: mevcut kalemlerin amount'u tekrar hesaplanir
            self._items = [
                item.model_copy(update={"amount": line_amount(item.quantity, item.rate)})
                for item in items
            ]

    @staticmethod
    def _blank_item() -> LineItem:
        return LineItem(
            description="",
            quantity=Decimal("1"),
            rate=Decimal("0"),
            amount=Decimal("0"),
        )

    @property
    def items(self) -> tuple[LineItem, ...]:
        return tuple(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def add_item(self) -> LineItem:
        """Sona yeni bos kalem ekle (miktar 1, fiyat 0)."""
        item = self._blank_item()
        self._items.append(item)
        return item

    def update_item(self, index: int, field: str, value) -> LineItem:
        """
        index'teki kalemin alanini guncelle.
        quantity/rate degisirse amount ayni kopyada hesaplanir.
        Gecersiz index IndexError firlatir.
        """
        if field not in EDITABLE_FIELDS:
            raise ValueError(f"Duzenlenemeyen alan: {field}")

        current = self._items[index]
        if field == "description":
            updated = current.model_copy(update={"description": value})
        else:
            changes = {field: to_decimal(value)}
            quantity = changes.get("quantity", current.quantity)
            rate = changes.get("rate", current.rate)
            changes["amount"] = line_amount(quantity, rate)
            updated = current.model_copy(update=changes)

        self._items[index] = updated
        return updated

    def remove_item(self, index: int) -> None:
        """Kalemi sil. Son kalan kalem silinmez (sessizce yok sayilir)."""
        if len(self._items) <= 1:
            return
        del self._items[index]

    def totals(self, tax_rate) -> Totals:
        return compute_totals(self._items, tax_rate)

    def to_payload(self) -> list[dict]:
        """Fatura servisine gonderilecek kalem listesi."""
        return [item.model_dump() for item in self._items]
