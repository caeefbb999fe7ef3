from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, DeclarativeBase

from kolayfatura.config import settings

_is_sqlite = settings.DATABASE_URL.startswith("sqlite")

# SQLite tek thread kisitini kaldir (FastAPI sync endpoint'leri threadpool'da calisir)
_connect_args = {"check_same_thread": False} if _is_sqlite else {}

# Engine: veritabanina baglantiyi yoneten nesne
engine = create_engine(settings.DATABASE_URL, echo=False, connect_args=_connect_args)

if _is_sqlite:
    # SQLite foreign key'leri varsayilan olarak uygulamaz
    # (musteri silinince faturadaki client_id'nin bosaltilmasi icin gerekli)
    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

# autocommit=False: degisiklikleri elle commit etmen gerekir
# autoflush=False: sorgu oncesi otomatik flush yapmaz
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


# Base: tum modellerin miras alacagi temel sinif
class Base(DeclarativeBase):
    pass


def get_db():
    """
    FastAPI dependency olarak kullanilir.
    Her istek icin yeni bir veritabani oturumu acar,
    istek bitince kapatir.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
