"""
Token dogrulama.
Kullanici kaydi ve girisi harici kimlik servisindedir; bu uygulama sadece
ayni SECRET_KEY ile imzalanmis JWT'yi dogrular ve icindeki kullanici ID'sini okur.
"""

import uuid
from datetime import datetime, timedelta, timezone

import jwt
from jwt.exceptions import InvalidTokenError

from kolayfatura.config import settings
from kolayfatura.errors import PermissionDenied, from_collaborator


def create_access_token(user_id: uuid.UUID) -> str:
    """
    JWT token olustur (testler ve yerel gelistirme icin).
    Token icinde kullanici ID'si ve son kullanma tarihi var.
    """
    expire = datetime.now(timezone.utc) + timedelta(
        minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES
    )
    to_encode = {"sub": str(user_id), "exp": expire}
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def verify_token(token: str) -> uuid.UUID:
    """
    JWT token'i dogrula ve icindeki kullanici ID'sini dondur.
    Token gecersizse veya suresi dolmussa PermissionDenied firlatir.
    """
    try:
        payload = jwt.decode(
            token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM]
        )
    except InvalidTokenError as exc:
        raise from_collaborator(exc, "Invalid token") from exc

    try:
        return uuid.UUID(payload["sub"])
    except (KeyError, ValueError) as exc:
        raise PermissionDenied("Invalid token") from exc
