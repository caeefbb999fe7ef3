"""
Uygulama hata siniflari.

Servis katmani disina sadece AppError (ve alt siniflari) cikar.
Veritabani ve token kutuphanelerinin hatalari burada kapali bir
ErrorKind kumesine cevrilir; ham hata nesneleri kullaniciya ulasmaz.
"""

import logging
from contextlib import contextmanager
from enum import Enum

from jwt.exceptions import InvalidTokenError
from sqlalchemy.exc import (
    DBAPIError,
    IntegrityError,
    NoResultFound,
    OperationalError,
    SQLAlchemyError,
)
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

logger = logging.getLogger(__name__)


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    PERMISSION = "permission"
    CONFLICT = "conflict"
    UNAVAILABLE = "unavailable"
    RENDERING = "rendering"


# ErrorKind -> HTTP durum kodu
HTTP_STATUS_CODES = {
    ErrorKind.VALIDATION: 422,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.PERMISSION: 403,
    ErrorKind.CONFLICT: 409,
    ErrorKind.UNAVAILABLE: 503,
    ErrorKind.RENDERING: 500,
}


class AppError(Exception):
    """Kullaniciya gosterilebilir mesaj tasiyan alan hatasi."""

    kind = ErrorKind.UNAVAILABLE

    def __init__(self, message: str, kind: ErrorKind | None = None, details: dict | None = None):
        super().__init__(message)
        self.message = message
        if kind is not None:
            self.kind = kind
        self.details = details or {}

    @property
    def status_code(self) -> int:
        return HTTP_STATUS_CODES[self.kind]

    def to_dict(self) -> dict:
        return {
            "detail": self.message,
            "kind": self.kind.value,
            "errors": self.details,
        }


class ValidationFailed(AppError):
    kind = ErrorKind.VALIDATION


class RecordNotFound(AppError):
    kind = ErrorKind.NOT_FOUND


class PermissionDenied(AppError):
    kind = ErrorKind.PERMISSION


class ConflictError(AppError):
    kind = ErrorKind.CONFLICT


class ServiceUnavailable(AppError):
    kind = ErrorKind.UNAVAILABLE


class RenderError(AppError):
    kind = ErrorKind.RENDERING


def classify(exc: Exception) -> ErrorKind:
    """Harici kutuphane hatasini ErrorKind'a cevir."""
    if isinstance(exc, AppError):
        return exc.kind
    if isinstance(exc, (IntegrityError, StaleDataError)):
        return ErrorKind.CONFLICT
    if isinstance(exc, NoResultFound):
        return ErrorKind.NOT_FOUND
    if isinstance(exc, InvalidTokenError):
        return ErrorKind.PERMISSION
    if isinstance(exc, (OperationalError, DBAPIError)):
        return ErrorKind.UNAVAILABLE
    return ErrorKind.UNAVAILABLE


def from_collaborator(exc: Exception, message: str) -> AppError:
    """
    Harici hatayi sabit mesajli bir AppError'a sar.
    Zaten AppError ise oldugu gibi dondurulur.
    """
    if isinstance(exc, AppError):
        return exc
    kind = classify(exc)
    error_classes = {
        ErrorKind.CONFLICT: ConflictError,
        ErrorKind.NOT_FOUND: RecordNotFound,
        ErrorKind.PERMISSION: PermissionDenied,
        ErrorKind.UNAVAILABLE: ServiceUnavailable,
    }
    return error_classes[kind](message)


@contextmanager
def persistence_errors(db: Session, message: str):
    """
    Veritabani cagrilarini sarar.
    Hata olursa oturumu geri alir, loglar ve AppError olarak tekrar firlatir.
    Otomatik tekrar deneme yapilmaz.

    Kullanim:
        with persistence_errors(db, "Failed to create invoice"):
            repo.create_record("invoices", data)
    """
    try:
        yield
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error("%s: %s", message, exc)
        raise from_collaborator(exc, message) from exc
