"""
KolayFatura - Test Yapilandirmasi (conftest.py)

SQLite in-memory veritabani kullanarak tum servisleri ve
API endpoint'lerini test etmeye olanak saglar.

Her test fonksiyonu icin temiz bir veritabani olusturulur (function scope).
"""

import os

# Ayarlar import aninda okunur: uygulama import edilmeden once tanimlanmali
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["LOG_DIR"] = ""
os.environ["SMTP_HOST"] = ""
os.environ["SMTP_USER"] = ""
os.environ["SMTP_PASSWORD"] = ""

import uuid
from datetime import date
from decimal import Decimal

import pytest
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from fastapi.testclient import TestClient

from kolayfatura.database import Base, get_db
from kolayfatura.main import app
from kolayfatura.services.auth import create_access_token
from kolayfatura.services import invoice as invoice_service
from kolayfatura.schemas.invoice import InvoiceCreate, LineItemInput

# Tum modelleri import et - Base.metadata.create_all icin gerekli
from kolayfatura.models import User, Client, Invoice, InvoiceItem  # noqa: F401


# ---------------------------------------------------------------------------
# SQLite In-Memory Test Veritabani
# ---------------------------------------------------------------------------

SQLITE_TEST_URL = "sqlite:///file::memory:?cache=shared"

test_engine = create_engine(
    SQLITE_TEST_URL,
    connect_args={"check_same_thread": False},
    echo=False,
)

# Musteri silinince faturadaki client_id'nin bosaltilmasi (SET NULL) icin
@event.listens_for(test_engine, "connect")
def _set_sqlite_pragma(dbapi_conn, connection_record):
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture(scope="function")
def db_session():
    """
    Her test icin temiz bir veritabani oturumu olusturur.
    Test bittikten sonra tablolar silinir.
    """
    Base.metadata.create_all(bind=test_engine)

    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=test_engine)


@pytest.fixture(scope="function")
def client(db_session):
    """
    FastAPI TestClient olusturur.
    get_db dependency'sini override ederek test veritabanini kullanir.
    """
    def _override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = _override_get_db

    with TestClient(app, raise_server_exceptions=False) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def test_user(db_session):
    """Isletme profili dolu test kullanicisi."""
    user = User(
        id=uuid.uuid4(),
        email="owner@acme.test",
        display_name="Jane Doe",
        business_name="Acme Studio",
        address="12 MG Road, Bengaluru",
        phone="+91 98450 00000",
        website="acme.test",
        gstin="29ABCDE1234F1Z5",
        is_active=True,
    )
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture(scope="function")
def other_user(db_session):
    """Sahiplik kontrolleri icin ikinci kullanici."""
    user = User(id=uuid.uuid4(), email="other@example.test", is_active=True)
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture(scope="function")
def auth_headers(test_user):
    """
    Yetkilendirilmis istek icin Authorization header'i dondurur.
    Dondurur: {"Authorization": "Bearer <jwt_token>"}
    """
    token = create_access_token(test_user.id)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture(scope="function")
def test_client_record(db_session, test_user):
    """test_user'a ait, telefonu ve GSTIN'i olmayan bir musteri."""
    record = Client(
        id=uuid.uuid4(),
        owner_id=test_user.id,
        name="Globex Ltd",
        email="billing@globex.test",
        phone=None,
        address="1 Main St, Pune",
        gstin=None,
    )
    db_session.add(record)
    db_session.commit()
    db_session.refresh(record)
    return record


@pytest.fixture(scope="function")
def test_invoice(db_session, test_user, test_client_record):
    """10 x 500 tek kalemli, varsayilan %18 vergili fatura (INV-0001)."""
    data = InvoiceCreate(
        client_id=test_client_record.id,
        issue_date=date(2026, 1, 5),
        due_date=date(2026, 2, 4),
        items=[LineItemInput(description="Design", quantity=Decimal("10"), rate=Decimal("500"))],
    )
    return invoice_service.create_invoice(db=db_session, owner_id=test_user.id, data=data)
