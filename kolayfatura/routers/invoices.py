"""
Fatura REST API Router'i.

Tum endpoint'ler JWT authentication gerektirir.
Her kullanici sadece kendi faturalarini gorebilir/duzenleyebilir.

Endpoint'ler:
    GET    /                         -> Fatura listesi (sayfalama + arama + durum filtresi)
    GET    /stats                    -> Panel istatistikleri
    POST   /                         -> Yeni fatura
    GET    /{invoice_id}             -> Fatura detay
    PUT    /{invoice_id}             -> Fatura duzenle
    PATCH  /{invoice_id}/status      -> Durum degistir
    DELETE /{invoice_id}             -> Fatura sil
    GET    /{invoice_id}/pdf         -> PDF indir
    POST   /{invoice_id}/send-email  -> Faturayi musteriye email ile gonder
"""

import uuid
from typing import Annotated

from fastapi import APIRouter, BackgroundTasks, Depends, Query, status
from fastapi.responses import Response
from sqlalchemy.orm import Session

from kolayfatura.database import get_db
from kolayfatura.dependencies import get_current_user
from kolayfatura.models.user import User
from kolayfatura.schemas.invoice import (
    InvoiceCreate,
    InvoiceListResponse,
    InvoiceResponse,
    InvoiceStats,
    InvoiceStatusUpdate,
    InvoiceUpdate,
)
from kolayfatura.services import email as email_service
from kolayfatura.services import invoice as invoice_service

router = APIRouter()


@router.get("", response_model=InvoiceListResponse)
def list_invoices(
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
    page: int = Query(default=1, ge=1, description="Sayfa numarasi"),
    size: int = Query(default=20, ge=1, le=100, description="Sayfa basi kayit sayisi"),
    search: str | None = Query(default=None, description="Fatura numarasi veya musteri adi"),
    invoice_status: str | None = Query(
        default=None,
        alias="status",
        description="Durum filtresi (all/draft/sent/paid/overdue)",
    ),
    client_id: uuid.UUID | None = Query(default=None, description="Musteriye gore filtrele"),
):
    """
    Ornek:
        GET /api/v1/invoices?page=1&size=10&status=overdue
    """
    invoices, total = invoice_service.get_invoices(
        db=db,
        owner_id=current_user.id,
        invoice_status=invoice_status,
        client_id=client_id,
        search=search,
        page=page,
        size=size,
    )
    return InvoiceListResponse(
        items=[InvoiceResponse.model_validate(i) for i in invoices],
        total=total,
        page=page,
        size=size,
    )


@router.get("/stats", response_model=InvoiceStats)
def invoice_stats(
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
):
    return invoice_service.get_invoice_stats(db=db, owner_id=current_user.id)


@router.post("", response_model=InvoiceResponse, status_code=status.HTTP_201_CREATED)
def create_invoice(
    data: InvoiceCreate,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
):
    return invoice_service.create_invoice(db=db, owner_id=current_user.id, data=data)


@router.get("/{invoice_id}", response_model=InvoiceResponse)
def get_invoice(
    invoice_id: uuid.UUID,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
):
    return invoice_service.get_invoice(db=db, invoice_id=invoice_id, owner_id=current_user.id)


@router.put("/{invoice_id}", response_model=InvoiceResponse)
def update_invoice(
    invoice_id: uuid.UUID,
    data: InvoiceUpdate,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
):
    return invoice_service.update_invoice(
        db=db, invoice_id=invoice_id, owner_id=current_user.id, data=data,
    )


@router.patch("/{invoice_id}/status", response_model=InvoiceResponse)
def update_invoice_status(
    invoice_id: uuid.UUID,
    data: InvoiceStatusUpdate,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
):
    return invoice_service.update_invoice_status(
        db=db,
        invoice_id=invoice_id,
        owner_id=current_user.id,
        new_status=data.status,
        expected_version=data.expected_version,
    )


@router.delete("/{invoice_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_invoice(
    invoice_id: uuid.UUID,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
):
    invoice_service.delete_invoice(db=db, invoice_id=invoice_id, owner_id=current_user.id)


@router.get("/{invoice_id}/pdf")
def download_invoice_pdf(
    invoice_id: uuid.UUID,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
):
    """Faturanin PDF ciktisini indir."""
    filename, pdf_bytes = invoice_service.export_invoice_pdf(
        db=db, invoice_id=invoice_id, owner_id=current_user.id,
    )
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post("/{invoice_id}/send-email", status_code=status.HTTP_202_ACCEPTED)
def send_invoice_email(
    invoice_id: uuid.UUID,
    background_tasks: BackgroundTasks,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
):
    """
    Fatura PDF'ini musteri email adresine gonder.
    Gonderim arka planda yapilir; teslim sonucu beklenmez.
    """
    message = invoice_service.prepare_invoice_email(
        db=db, invoice_id=invoice_id, owner_id=current_user.id,
    )
    background_tasks.add_task(email_service.send_email, **message)
    return {"detail": "Invoice email queued", "recipient": message["recipient"]}
