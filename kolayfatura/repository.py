"""
Kayit deposu (Record Repository).

Musteri, fatura ve kullanici kayitlari icin koleksiyon adina gore calisan
genel CRUD katmani. created_at / updated_at degerleri yazma aninda burada atanir.

Koleksiyonlar:
    clients   -> Client
    invoices  -> Invoice (data["items"] kalem listesi olarak yazilir)
    users     -> User
"""

import uuid
from datetime import datetime, timezone
from typing import Any

from sqlalchemy.orm import Session

from kolayfatura.errors import ConflictError
from kolayfatura.models.client import Client
from kolayfatura.models.invoice import Invoice
from kolayfatura.models.user import User

COLLECTIONS = {
    "clients": Client,
    "invoices": Invoice,
    "users": User,
}

# Disaridan degistirilemeyen alanlar
_PROTECTED_FIELDS = {"id", "owner_id", "created_at", "updated_at", "version"}


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _model(collection: str):
    try:
        return COLLECTIONS[collection]
    except KeyError:
        raise ValueError(f"Bilinmeyen koleksiyon: {collection}")


class RecordRepository:
    """SQLAlchemy oturumu uzerinde calisan belge deposu."""

    def __init__(self, db: Session):
        self.db = db

    def _apply(self, record: Any, data: dict) -> None:
        for field, value in data.items():
            if field == "items" and hasattr(record, "replace_items"):
                record.replace_items(value)
            else:
                setattr(record, field, value)

    def create_record(self, collection: str, data: dict) -> uuid.UUID:
        model = _model(collection)
        now = _now()
        payload = {k: v for k, v in data.items() if k not in ("items", "created_at", "updated_at")}
        record = model(**payload, created_at=now, updated_at=now)
        if "items" in data:
            record.replace_items(data["items"])
        self.db.add(record)
        self.db.commit()
        self.db.refresh(record)
        return record.id

    def get_record(self, collection: str, record_id: uuid.UUID) -> Any | None:
        model = _model(collection)
        return self.db.get(model, record_id)

    def _owned(self, collection: str, owner_id: uuid.UUID, conditions, filters: dict):
        model = _model(collection)
        owner_column = model.id if collection == "users" else model.owner_id
        query = self.db.query(model).filter(owner_column == owner_id, *conditions)
        for field, value in filters.items():
            if value is not None:
                query = query.filter(getattr(model, field) == value)
        return model, query

    def query_records(
        self,
        collection: str,
        owner_id: uuid.UUID,
        *conditions: Any,
        order_by: str = "created_at",
        descending: bool = True,
        offset: int | None = None,
        limit: int | None = None,
        **filters: Any,
    ) -> list[Any]:
        """
        Sahibine ait kayitlari sirali dondur.
        conditions: SQLAlchemy ifadeleri (ornek: Client.name.ilike("%acme%"))
        filters: esitlik filtreleri (ornek: status="paid", client_id=...)
        offset/limit: sayfalama (SQL OFFSET / LIMIT)
        """
        model, query = self._owned(collection, owner_id, conditions, filters)

        sort_column = getattr(model, order_by)
        if descending:
            query = query.order_by(sort_column.desc())
        else:
            query = query.order_by(sort_column.asc())

        if offset:
            query = query.offset(offset)
        if limit is not None:
            query = query.limit(limit)
        return query.all()

    def count_records(
        self, collection: str, owner_id: uuid.UUID, *conditions: Any, **filters: Any
    ) -> int:
        """query_records ile ayni filtrelerle toplam kayit sayisi (sayfalama icin)."""
        _, query = self._owned(collection, owner_id, conditions, filters)
        return query.count()

    def update_record(
        self,
        collection: str,
        record_id: uuid.UUID,
        data: dict,
        expected_version: int | None = None,
    ) -> Any:
        """
        Kismi guncelleme.
        expected_version verilirse kayittaki surum ile karsilastirilir
        (compare-and-swap); farkliysa ConflictError.
        """
        record = self.get_record(collection, record_id)
        if record is None:
            return None
        current_version = getattr(record, "version", None)
        if expected_version is not None and current_version != expected_version:
            raise ConflictError(
                "The record was changed by another session. Reload and try again.",
                details={"expected_version": expected_version, "current_version": current_version},
            )

        changes = {k: v for k, v in data.items() if k not in _PROTECTED_FIELDS}
        self._apply(record, changes)
        record.updated_at = _now()
        self.db.commit()
        self.db.refresh(record)
        return record

    def delete_record(self, collection: str, record_id: uuid.UUID) -> bool:
        record = self.get_record(collection, record_id)
        if record is None:
            return False
        self.db.delete(record)
        self.db.commit()
        return True
