"""
KolayFatura - Token Dogrulama Testleri

Kullanici kaydi/girisi harici servistedir; burada sadece JWT dogrulama
ve korunan endpoint'lerin token kontrolu test edilir.
"""

import uuid
from datetime import datetime, timedelta, timezone

import jwt
import pytest

from kolayfatura.config import settings
from kolayfatura.errors import PermissionDenied
from kolayfatura.services.auth import create_access_token, verify_token


class TestVerifyToken:

    def test_valid_token(self):
        user_id = uuid.uuid4()
        assert verify_token(create_access_token(user_id)) == user_id

    def test_garbage_token(self):
        with pytest.raises(PermissionDenied):
            verify_token("not-a-jwt")

    def test_expired_token(self):
        token = jwt.encode(
            {"sub": str(uuid.uuid4()), "exp": datetime.now(timezone.utc) - timedelta(minutes=1)},
            settings.SECRET_KEY,
            algorithm=settings.ALGORITHM,
        )
        with pytest.raises(PermissionDenied):
            verify_token(token)

    def test_wrong_secret(self):
        token = jwt.encode({"sub": str(uuid.uuid4())}, "another-secret", algorithm=settings.ALGORITHM)
        with pytest.raises(PermissionDenied):
            verify_token(token)

    def test_missing_subject(self):
        token = jwt.encode({"role": "admin"}, settings.SECRET_KEY, algorithm=settings.ALGORITHM)
        with pytest.raises(PermissionDenied):
            verify_token(token)

    def test_subject_not_uuid(self):
        token = jwt.encode({"sub": "42"}, settings.SECRET_KEY, algorithm=settings.ALGORITHM)
        with pytest.raises(PermissionDenied):
            verify_token(token)


class TestProtectedEndpoints:

    def test_no_token(self, client):
        response = client.get("/api/v1/clients")
        assert response.status_code == 401

    def test_invalid_token(self, client):
        response = client.get("/api/v1/invoices", headers={"Authorization": "Bearer nope"})
        assert response.status_code == 401

    def test_unknown_user(self, client):
        token = create_access_token(uuid.uuid4())
        response = client.get("/api/v1/profile", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401

    def test_inactive_user(self, client, db_session, test_user, auth_headers):
        test_user.is_active = False
        db_session.commit()
        response = client.get("/api/v1/profile", headers=auth_headers)
        assert response.status_code == 401

    def test_health_is_public(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"
