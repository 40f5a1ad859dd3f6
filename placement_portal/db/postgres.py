"""
PostgreSQL access - users, roles, the student profile and its sections,
attendance and quiz attempts.

Each unit of work gets its own session through get_db_session(); the
session commits when the block exits cleanly and rolls back otherwise.
Nothing spans several units of work, so there are no cross-section
transactions.
"""

from contextlib import contextmanager
from datetime import date, datetime
from decimal import Decimal
from typing import Iterator, List, Optional
import logging

from sqlalchemy import create_engine, text
from sqlalchemy.orm import Session, sessionmaker

from placement_portal.core.config import get_settings

settings = get_settings()
logger = logging.getLogger(__name__)

# Shared by every request and by the bundle thread pool
engine = create_engine(
    settings.postgres_url,
    pool_size=settings.postgres_pool_size,
    max_overflow=settings.postgres_max_overflow,
    pool_pre_ping=True,
    echo=settings.debug,
)

SessionLocal = sessionmaker(bind=engine, autoflush=False)


@contextmanager
def get_db_session() -> Iterator[Session]:
    """
    Session scope for one unit of work.

        with get_db_session() as db:
            db.execute(text("SELECT ..."), {...})
    """
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def test_postgres_connection() -> bool:
    """True when a trivial query round-trips."""
    try:
        with get_db_session() as db:
            return db.execute(text("SELECT 1")).scalar() == 1
    except Exception as e:
        logger.warning("PostgreSQL unreachable: %s", e)
        return False


# ============================================================
# ROW HELPERS
# ============================================================

def to_json_value(value):
    """Dates and timestamps become ISO strings, NUMERIC becomes float."""
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Decimal):
        return float(value)
    return value


def row_to_dict(columns, row) -> dict:
    return {column: to_json_value(value) for column, value in zip(columns, row)}


def execute_raw_sql(sql: str, params: Optional[dict] = None) -> List[dict]:
    """Run a read query and return its rows as dicts."""
    with get_db_session() as db:
        result = db.execute(text(sql), params or {})
        columns = list(result.keys())
        return [row_to_dict(columns, row) for row in result.fetchall()]
