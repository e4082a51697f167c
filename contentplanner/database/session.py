"""
Database Session Management

Handles connection pooling, session lifecycle, and database initialization.
Designed for both PostgreSQL (DATABASE_URL) and local development (SQLite).
"""

import logging
from contextlib import contextmanager
from typing import Generator, Dict, Any

from sqlalchemy import create_engine, event, inspect, text
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import QueuePool

from contentplanner.utils.config import get_settings
from .models import Base

logger = logging.getLogger(__name__)

# =============================================================================
# DATABASE URL CONFIGURATION
# =============================================================================

def get_database_url() -> str:
    """
    Get database URL from settings.

    Priority:
    1. DATABASE_URL
    2. SQLite fallback for local development
    """
    settings = get_settings()
    url = settings.DATABASE_URL

    if url:
        # Hosted PostgreSQL URLs use postgres:// but SQLAlchemy needs postgresql://
        if url.startswith("postgres://"):
            url = url.replace("postgres://", "postgresql://", 1)
        logger.info("Using database from DATABASE_URL")
        return url

    logger.warning(f"No DATABASE_URL found, using SQLite: {settings.SQLITE_PATH}")
    return f"sqlite:///{settings.SQLITE_PATH}"


# =============================================================================
# ENGINE CONFIGURATION
# =============================================================================

def _configure_sqlite(engine) -> None:
    """
    Enable foreign keys and let SQLAlchemy own BEGIN.

    pysqlite's implicit transaction handling breaks SAVEPOINT, which the
    repository uses for conflict-tolerant inserts.
    """
    @event.listens_for(engine, "connect")
    def set_sqlite_pragma(dbapi_conn, connection_record):
        dbapi_conn.isolation_level = None
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def do_begin(conn):
        conn.exec_driver_sql("BEGIN")


def create_db_engine(url: str = None, **engine_kwargs):
    """
    Create database engine with appropriate settings.

    PostgreSQL: Connection pooling
    SQLite: Simpler settings, foreign key support

    Extra keyword arguments go straight to create_engine for SQLite
    (tests pass poolclass=StaticPool for in-memory databases).
    """
    url = url or get_database_url()
    echo = get_settings().SQL_DEBUG

    if url.startswith("postgresql"):
        engine = create_engine(
            url,
            poolclass=QueuePool,
            pool_size=5,
            max_overflow=10,
            pool_timeout=30,
            pool_recycle=1800,
            pool_pre_ping=True,
            echo=echo,
        )
        logger.info("Created PostgreSQL engine with connection pooling")
    else:
        engine = create_engine(
            url,
            connect_args={"check_same_thread": False},  # Allow multi-thread access
            echo=echo,
            **engine_kwargs,
        )
        if url.startswith("sqlite"):
            _configure_sqlite(engine)
        logger.info("Created SQLite engine")

    return engine


# Global engine (lazy initialization)
_engine = None

def get_engine():
    """Get or create the database engine."""
    global _engine
    if _engine is None:
        _engine = create_db_engine()
    return _engine


# =============================================================================
# SESSION MANAGEMENT
# =============================================================================

# Session factory (lazy initialization)
_SessionLocal = None

def get_session_factory():
    """Get or create session factory."""
    global _SessionLocal
    if _SessionLocal is None:
        _SessionLocal = sessionmaker(
            bind=get_engine(),
            autocommit=False,
            autoflush=False,
            expire_on_commit=False,  # Don't expire objects after commit
        )
    return _SessionLocal


def get_db() -> Generator[Session, None, None]:
    """
    FastAPI dependency for database sessions.

    Commits when the request handler returns, rolls back if it raises.

    Usage:
        @router.get("/items")
        def get_items(db: Session = Depends(get_db)):
            return db.query(Item).all()
    """
    SessionLocal = get_session_factory()
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


@contextmanager
def get_db_context() -> Generator[Session, None, None]:
    """
    Context manager for database sessions.

    Usage:
        with get_db_context() as db:
            db.query(Item).all()
    """
    SessionLocal = get_session_factory()
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


# =============================================================================
# DATABASE INITIALIZATION
# =============================================================================

def init_db(engine=None) -> None:
    """Create all tables that do not exist yet."""
    engine = engine or get_engine()
    Base.metadata.create_all(bind=engine)
    logger.info(f"Database initialized ({len(Base.metadata.tables)} tables)")


def check_db_connection() -> bool:
    """Return True if a trivial query succeeds."""
    try:
        with get_engine().connect() as conn:
            conn.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logger.error(f"Database connection check failed: {e}")
        return False


def get_db_info() -> Dict[str, Any]:
    """Summarize the configured database for the health endpoint."""
    url = get_database_url()
    info = {
        "database_type": "postgresql" if url.startswith("postgresql") else "sqlite",
        "connected": check_db_connection(),
        "tables": [],
    }
    if info["connected"]:
        info["tables"] = sorted(inspect(get_engine()).get_table_names())
    info["table_count"] = len(info["tables"])
    return info
