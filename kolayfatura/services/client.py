import logging
import uuid

from sqlalchemy import and_, or_
from sqlalchemy.orm import Session

from kolayfatura.errors import PermissionDenied, RecordNotFound, ValidationFailed, persistence_errors
from kolayfatura.models.client import Client
from kolayfatura.repository import RecordRepository
from kolayfatura.schemas.client import ClientCreate, ClientUpdate

logger = logging.getLogger(__name__)

GSTIN_FILTERS = ("all", "gstin", "no-gstin")


def get_clients(
    db: Session,
    owner_id: uuid.UUID,
    page: int = 1,
    size: int = 20,
    search: str | None = None,
    gstin_filter: str = "all",
) -> tuple[list[Client], int]:
    """
    Kullanicinin musterilerini listele (en yeni once).
    search: ad veya email icinde arama (buyuk/kucuk harf duyarsiz)
    gstin_filter: all, gstin (GSTIN'i olanlar), no-gstin (olmayanlar)
    Dondurur: (musteri_listesi, toplam_sayi)
    """
    if gstin_filter not in GSTIN_FILTERS:
        raise ValidationFailed(
            f"Unknown filter '{gstin_filter}'",
            details={"gstin": "must be one of all, gstin, no-gstin"},
        )

    conditions = []
    if search:
        search_filter = f"%{search}%"
        conditions.append(
            or_(Client.name.ilike(search_filter), Client.email.ilike(search_filter))
        )
    if gstin_filter == "gstin":
        conditions.append(and_(Client.gstin.isnot(None), Client.gstin != ""))
    elif gstin_filter == "no-gstin":
        conditions.append(or_(Client.gstin.is_(None), Client.gstin == ""))

    repo = RecordRepository(db)
    with persistence_errors(db, "Failed to retrieve clients"):
        total = repo.count_records("clients", owner_id, *conditions)
        clients = repo.query_records(
            "clients", owner_id, *conditions, offset=(page - 1) * size, limit=size,
        )
    return clients, total


def get_client_count(db: Session, owner_id: uuid.UUID) -> int:
    with persistence_errors(db, "Failed to retrieve clients"):
        return RecordRepository(db).count_records("clients", owner_id)


def get_client(db: Session, client_id: uuid.UUID, owner_id: uuid.UUID) -> Client:
    """Tek bir musteriyi getir. Sahiplik kontrolu yapar."""
    with persistence_errors(db, "Failed to retrieve client"):
        client = RecordRepository(db).get_record("clients", client_id)
    if client is None:
        raise RecordNotFound("Client not found")
    if client.owner_id != owner_id:
        raise PermissionDenied("You do not have access to this client")
    return client


def create_client(db: Session, owner_id: uuid.UUID, data: ClientCreate) -> Client:
    """Yeni musteri olustur."""
    repo = RecordRepository(db)
    with persistence_errors(db, "Failed to create client"):
        client_id = repo.create_record("clients", {"owner_id": owner_id, **data.model_dump()})
        client = repo.get_record("clients", client_id)
    logger.info("Musteri olusturuldu: %s (%s)", client.name, client.id)
    return client


def update_client(
    db: Session, client_id: uuid.UUID, owner_id: uuid.UUID, data: ClientUpdate
) -> Client:
    """
    Musteriyi guncelle.
    exclude_unset=True: sadece gonderilen alanlari gunceller.
    Bu musteriye kesilmis faturalardaki kopya bilgiler degismez.
    """
    get_client(db, client_id, owner_id)

    update_data = data.model_dump(exclude_unset=True, exclude={"expected_version"})
    # Zorunlu alanlar None ile silinemez
    for field in ("name", "email", "address"):
        if field in update_data and update_data[field] is None:
            del update_data[field]

    with persistence_errors(db, "Failed to update client"):
        client = RecordRepository(db).update_record(
            "clients", client_id, update_data, expected_version=data.expected_version,
        )
    logger.info("Musteri guncellendi: %s", client_id)
    return client


def delete_client(db: Session, client_id: uuid.UUID, owner_id: uuid.UUID) -> None:
    """Musteriyi sil. Faturalar silinmez (kopya bilgilerini korur)."""
    get_client(db, client_id, owner_id)
    with persistence_errors(db, "Failed to delete client"):
        RecordRepository(db).delete_record("clients", client_id)
    logger.info("Musteri silindi: %s", client_id)
