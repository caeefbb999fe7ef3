import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from kolayfatura.config import settings

# PDF motoru her CSS uyarisinda log uretir; sadece gercek hatalar gorunsun
_NOISY_LOGGERS = ("xhtml2pdf", "reportlab", "fontTools")

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging() -> None:
    """
    Loglama: konsol + logs/kolayfatura.log (5 MB, 3 yedek).

    LOG_DIR bos birakilirsa dosyaya yazilmaz (testler ve container ortami).
    main.py icinde uygulama olusturulmadan once bir kez cagrilir.
    """
    level = logging.getLevelName(settings.LOG_LEVEL.upper())
    if not isinstance(level, int):
        level = logging.INFO

    root = logging.getLogger()
    root.setLevel(level)

    # uvicorn --reload tekrar import ettiginde handler'lar cogalmasin
    if root.handlers:
        return

    formatter = logging.Formatter(LOG_FORMAT)

    console = logging.StreamHandler()
    console.setFormatter(formatter)
    root.addHandler(console)

    if settings.LOG_DIR:
        log_dir = Path(settings.LOG_DIR)
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_dir / "kolayfatura.log",
            maxBytes=5 * 1024 * 1024,
            backupCount=3,
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.ERROR)

    logging.getLogger(__name__).info("Loglama hazir (seviye: %s)", logging.getLevelName(level))
