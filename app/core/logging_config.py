import logging
from typing import Optional

from app.core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def setup_logging(level: Optional[str] = None) -> None:
    """Configura el logger raíz según LOG_LEVEL (idempotente)."""
    level_name = (level or settings.LOG_LEVEL or "INFO").upper()
    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
    root.setLevel(getattr(logging, level_name, logging.INFO))
    # httpx registra cada request en INFO; lo dejamos en WARNING
    logging.getLogger("httpx").setLevel(logging.WARNING)
