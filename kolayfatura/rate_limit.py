"""Rate limiting yapilandirmasi (slowapi)."""

from slowapi import Limiter
from slowapi.util import get_remote_address

from kolayfatura.config import settings

# Client IP bazli rate limiter
# Global limit: varsayilan dakikada 120 istek
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[settings.RATE_LIMIT],
    enabled=settings.RATE_LIMIT_ENABLED,
)
