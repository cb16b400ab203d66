import logging
from typing import Optional

from sqlalchemy import inspect
from sqlalchemy.engine import Engine

from app.db.models import Base
from app.db.session import engine as default_engine

logger = logging.getLogger(__name__)


def init_db(engine: Optional[Engine] = None) -> None:
    """Crea las tablas que falten. Nunca borra ni altera datos existentes."""
    bind = engine or default_engine
    existing = set(inspect(bind).get_table_names())
    Base.metadata.create_all(bind=bind, checkfirst=True)
    created = sorted(set(Base.metadata.tables) - existing)
    if created:
        logger.info(f"[init_db] Tablas creadas: {', '.join(created)}")
    else:
        logger.info("[init_db] Esquema ya existente, nada que crear")


if __name__ == "__main__":
    from app.core.logging_config import setup_logging

    setup_logging()
    init_db()
