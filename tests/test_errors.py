"""
KolayFatura - Hata Siniflandirma Testleri

Test edilen fonksiyonlar (kolayfatura.errors):
    classify / from_collaborator
    persistence_errors
"""

from unittest.mock import MagicMock

import jwt
import pytest
from sqlalchemy.exc import IntegrityError, NoResultFound, OperationalError
from sqlalchemy.orm.exc import StaleDataError

from kolayfatura.errors import (
    AppError,
    ConflictError,
    ErrorKind,
    PermissionDenied,
    RecordNotFound,
    ServiceUnavailable,
    ValidationFailed,
    classify,
    from_collaborator,
    persistence_errors,
)


class TestClassify:

    @pytest.mark.parametrize("exc, kind", [
        (IntegrityError("INSERT", {}, Exception("UNIQUE")), ErrorKind.CONFLICT),
        (StaleDataError("version mismatch"), ErrorKind.CONFLICT),
        (NoResultFound(), ErrorKind.NOT_FOUND),
        (jwt.InvalidTokenError(), ErrorKind.PERMISSION),
        (OperationalError("SELECT", {}, Exception("database is locked")), ErrorKind.UNAVAILABLE),
        (RuntimeError("unexpected"), ErrorKind.UNAVAILABLE),
    ])
    def test_kinds(self, exc, kind):
        assert classify(exc) == kind

    def test_app_error_keeps_kind(self):
        assert classify(ValidationFailed("bad")) == ErrorKind.VALIDATION


class TestFromCollaborator:

    def test_wraps_with_fixed_message(self):
        """Ham hata mesaji kullaniciya ulasmamali."""
        error = from_collaborator(
            IntegrityError("INSERT", {}, Exception("secret detail")), "Failed to create client",
        )
        assert isinstance(error, ConflictError)
        assert error.message == "Failed to create client"
        assert error.status_code == 409
        assert "secret detail" not in str(error.to_dict())

    def test_app_error_is_returned_as_is(self):
        original = RecordNotFound("Invoice not found")
        assert from_collaborator(original, "ignored") is original

    def test_token_error_is_permission(self):
        error = from_collaborator(jwt.ExpiredSignatureError(), "Invalid token")
        assert isinstance(error, PermissionDenied)
        assert error.status_code == 403


class TestAppError:

    def test_to_dict(self):
        error = ValidationFailed("Please select a client", details={"client_id": "Please select a client"})
        assert error.to_dict() == {
            "detail": "Please select a client",
            "kind": "validation",
            "errors": {"client_id": "Please select a client"},
        }
        assert error.status_code == 422

    def test_explicit_kind(self):
        error = AppError("Not yours", kind=ErrorKind.PERMISSION)
        assert error.status_code == 403


class TestPersistenceErrors:

    def test_database_error_is_wrapped_and_rolled_back(self):
        db = MagicMock()
        original = OperationalError("SELECT", {}, Exception("disk I/O error"))

        with pytest.raises(ServiceUnavailable) as exc_info:
            with persistence_errors(db, "Failed to retrieve clients"):
                raise original

        db.rollback.assert_called_once()
        assert exc_info.value.message == "Failed to retrieve clients"
        assert exc_info.value.__cause__ is original

    def test_other_errors_pass_through(self):
        db = MagicMock()
        with pytest.raises(ValueError):
            with persistence_errors(db, "Failed"):
                raise ValueError("not a database error")
        db.rollback.assert_not_called()

    def test_no_error(self):
        db = MagicMock()
        with persistence_errors(db, "Failed"):
            pass
        db.rollback.assert_not_called()
