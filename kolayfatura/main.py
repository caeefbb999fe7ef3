import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from kolayfatura.config import settings
from kolayfatura.errors import AppError, ErrorKind
from kolayfatura.logging_config import setup_logging
from kolayfatura.rate_limit import limiter
from kolayfatura.routers import clients, invoices, profile

setup_logging()

logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.APP_NAME,
    description="Kucuk isletmeler icin musteri ve fatura yonetimi",
    version="0.1.0",
)

# slowapi: istemci IP'si basina global limit (RATE_LIMIT)
app.state.limiter = limiter
app.add_middleware(SlowAPIMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
    allow_credentials=True,
    # PDF indirmede dosya adinin frontend'den okunabilmesi icin
    expose_headers=["Content-Disposition"],
)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Guvenlik header'lari. Fatura verisi ve PDF'ler tarayicida cache'lenmez."""

    async def dispatch(self, request: Request, call_next) -> Response:
        response: Response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        if request.url.path.startswith("/api/"):
            response.headers["Cache-Control"] = "no-store"
        return response


app.add_middleware(SecurityHeadersMiddleware)


@app.exception_handler(RateLimitExceeded)
async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded):
    logger.warning("Rate limit asildi: %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=429,
        content={
            "detail": "Too many requests. Please wait a moment and try again.",
            "retry_after": exc.detail,
        },
    )


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    """Alan hatalari: {detail, kind, errors} ve kind'a karsilik gelen HTTP kodu."""
    log = logger.warning if exc.status_code < 500 else logger.error
    log("%s: %s %s - %s", exc.kind.value, request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    # Ham hata mesaji kullaniciya gosterilmez
    logger.error("Yakalanmamis hata: %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=500,
        content={
            "detail": "Something went wrong. Please try again.",
            "kind": ErrorKind.UNAVAILABLE.value,
            "errors": {},
        },
    )


app.include_router(clients.router, prefix="/api/v1/clients", tags=["Musteriler"])
app.include_router(invoices.router, prefix="/api/v1/invoices", tags=["Faturalar"])
app.include_router(profile.router, prefix="/api/v1/profile", tags=["Profil"])


@app.get("/health")
def health():
    return {"status": "ok", "app": settings.APP_NAME}
