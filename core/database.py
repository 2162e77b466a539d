from sqlmodel import SQLModel, create_engine
from sqlalchemy.engine import Engine
import logging

from core.config import settings
from models.models import KVEntry  # noqa: F401  registers the table on SQLModel.metadata

logger = logging.getLogger(__name__)


# ============================================================
# ✅ Create SQLModel engine for the key-value backend
# ============================================================
def make_engine(database_url: str) -> Engine:
    """
    Build an engine for ``database_url``.
    SQLite connections are shared across FastAPI's worker threads.
    """
    connect_args = {}
    if database_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
    # For PostgreSQL, pool_pre_ping avoids stale connections
    return create_engine(
        database_url,
        echo=False,
        pool_pre_ping=True,
        connect_args=connect_args,
    )


engine = make_engine(settings.DATABASE_URL)


# ============================================================
# ✅ Create tables (called at startup)
# ============================================================
def create_db_and_tables(bind: Engine = engine) -> None:
    """
    Create the key-value table if it does not exist yet.
    """
    try:
        SQLModel.metadata.create_all(bind)
        logger.info("✅ Key-value tables created successfully.")
    except Exception as e:
        logger.error(f"❌ Failed to create tables: {e}")
        raise

