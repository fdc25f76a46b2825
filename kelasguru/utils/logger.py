import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from kelasguru.config import ClientSettings, get_settings


def setup_logger(settings: Optional[ClientSettings] = None, max_bytes: int = 10_000_000, backup_count: int = 5):
    settings = settings or get_settings()
    logger = logging.getLogger("kelasguru")
    logger.setLevel(getattr(logging, settings.LOG_LEVEL))
    formatter = logging.Formatter(settings.LOG_FORMAT)

    if not any(getattr(h, "_kelasguru", False) for h in logger.handlers):
        console = logging.StreamHandler(sys.stdout)
        console.setFormatter(formatter)
        console._kelasguru = True
        logger.addHandler(console)

        if settings.LOG_TO_FILE and settings.LOG_FILE:
            Path(settings.LOG_FILE).parent.mkdir(exist_ok=True, parents=True)
            handler = RotatingFileHandler(settings.LOG_FILE, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8")
            handler.setFormatter(formatter)
            handler._kelasguru = True
            logger.addHandler(handler)

    # Отключаем излишне подробные логи aiohttp
    logging.getLogger("aiohttp.access").setLevel(logging.WARNING)
    return logger
