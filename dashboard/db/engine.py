# dashboard/db/engine.py

from functools import lru_cache

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine

from dashboard.config import settings


@lru_cache(maxsize=1)
def get_engine() -> Engine:
    """Return the shared engine for the configured database."""
    return create_engine(settings.DATABASE_URL, echo=settings.SQL_ECHO, future=True)
