from decimal import Decimal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Uygulama ayarlari.
    Degerler .env dosyasindan okunur. .env dosyasi yoksa default degerler kullanilir.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )

    # Veritabani baglanti adresi
    DATABASE_URL: str = "sqlite:///./kolayfatura.db"

    # JWT (token) ayarlari
    # Token'lar harici kimlik dogrulama servisi tarafindan ayni anahtarla uretilir
    SECRET_KEY: str = "CHANGE-THIS-IN-PRODUCTION"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 30

    # Uygulama
    APP_NAME: str = "KolayFatura"
    DEBUG: bool = True

    # Loglama seviyesi (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    LOG_LEVEL: str = "INFO"
    # Log dosyalarinin klasoru; bos ise sadece konsola yazilir
    LOG_DIR: str = "logs"

    # Frontend adresleri (CORS)
    CORS_ORIGINS: list[str] = ["http://localhost:8000", "http://localhost:5173"]

    # SMTP (email gonderme) ayarlari
    SMTP_HOST: str = ""
    SMTP_PORT: int = 587
    SMTP_USER: str = ""
    SMTP_PASSWORD: str = ""
    SMTP_FROM_EMAIL: str = ""

    # Rate limit (slowapi formati)
    RATE_LIMIT: str = "120/minute"
    RATE_LIMIT_ENABLED: bool = True

    # Fatura ayarlari
    # Para birimi sembolu: PDF ve email'de tutarlarin onune sabit olarak eklenir
    CURRENCY_SYMBOL: str = "₹"
    # Vergi orani her yerde kesir olarak tutulur (0.18 = %18)
    DEFAULT_TAX_RATE: Decimal = Decimal("0.18")
    DEFAULT_DUE_DAYS: int = 30
    INVOICE_NUMBER_PREFIX: str = "INV-"
    # PDF icin TTF font dosyasi. Bos ise yerlesik Helvetica kullanilir;
    # Helvetica latin-1 disindaki sembolleri (ornek: ₹) cizemez.
    PDF_FONT_PATH: str = ""


# Tek bir settings nesnesi olustur, her yerde bunu kullan
settings = Settings()
