"""
Musteri REST API Router'i.

Endpoint'ler:
    GET    /              -> Musteri listesi (sayfalama + arama + GSTIN filtresi)
    POST   /              -> Yeni musteri
    GET    /{client_id}   -> Musteri detay
    PUT    /{client_id}   -> Musteri guncelle (kismi)
    DELETE /{client_id}   -> Musteri sil (faturalar korunur)
"""

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from kolayfatura.database import get_db
from kolayfatura.dependencies import get_current_user
from kolayfatura.models.user import User
from kolayfatura.schemas.client import (
    ClientCreate,
    ClientUpdate,
    ClientResponse,
    ClientListResponse,
)
from kolayfatura.services import client as client_service

router = APIRouter()


@router.get("", response_model=ClientListResponse)
def list_clients(
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
    page: int = Query(default=1, ge=1, description="Sayfa numarasi"),
    size: int = Query(default=20, ge=1, le=100, description="Sayfa basi kayit"),
    search: str | None = Query(default=None, description="Arama (ad, email)"),
    gstin: str = Query(default="all", description="GSTIN filtresi (all/gstin/no-gstin)"),
):
    clients, total = client_service.get_clients(
        db=db,
        owner_id=current_user.id,
        page=page,
        size=size,
        search=search,
        gstin_filter=gstin,
    )
    return ClientListResponse(items=clients, total=total, page=page, size=size)


@router.post("", response_model=ClientResponse, status_code=status.HTTP_201_CREATED)
def create_client(
    data: ClientCreate,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
):
    """Yeni musteri olustur."""
    return client_service.create_client(db=db, owner_id=current_user.id, data=data)


@router.get("/{client_id}", response_model=ClientResponse)
def get_client(
    client_id: uuid.UUID,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
):
    return client_service.get_client(db=db, client_id=client_id, owner_id=current_user.id)


@router.put("/{client_id}", response_model=ClientResponse)
def update_client(
    client_id: uuid.UUID,
    data: ClientUpdate,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
):
    """Musteri guncelle. expected_version verilirse surum cakismasi kontrol edilir."""
    return client_service.update_client(
        db=db, client_id=client_id, owner_id=current_user.id, data=data,
    )


@router.delete("/{client_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_client(
    client_id: uuid.UUID,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
):
    client_service.delete_client(db=db, client_id=client_id, owner_id=current_user.id)
