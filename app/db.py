"""
Database engine and session management.
"""
from contextlib import contextmanager
from typing import Generator

from sqlalchemy import create_engine, event, text
from sqlalchemy.orm import sessionmaker, Session

from app.config import settings
from app.logger import get_logger

logger = get_logger(__name__)


def build_engine(database_url: str, **engine_kwargs):
    """
    Create an engine for the given URL.
    SQLite connections are shared with the FastAPI threadpool and need
    foreign key enforcement switched on per connection.
    """
    if database_url.startswith("sqlite"):
        new_engine = create_engine(
            database_url,
            connect_args={"check_same_thread": False},
            echo=settings.debug,
            **engine_kwargs,
        )

        @event.listens_for(new_engine, "connect")
        def _enable_sqlite_fk(dbapi_conn, connection_record):
            cursor = dbapi_conn.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()
    else:
        new_engine = create_engine(
            database_url,
            pool_size=5,
            max_overflow=10,
            pool_pre_ping=True,  # Enable connection health checks
            echo=settings.debug,  # Log SQL queries in debug mode
            **engine_kwargs,
        )

    @event.listens_for(new_engine, "connect")
    def on_connect(dbapi_conn, connection_record):
        """Log new database connections."""
        logger.debug("New database connection established")

    return new_engine


engine = build_engine(settings.database_url)

# Session factory
SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)


def get_db() -> Generator[Session, None, None]:
    """
    Dependency for FastAPI to get database session.
    Yields a session and ensures it's closed after use.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def get_db_session() -> Generator[Session, None, None]:
    """
    Context manager for database sessions.
    Use this for non-FastAPI contexts (e.g., seeding scripts).
    """
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception as e:
        db.rollback()
        logger.error(f"Database session error: {e}")
        raise
    finally:
        db.close()


def init_db(bind=None) -> None:
    """
    Initialize database tables.
    Call this on application startup.
    """
    from app.models import Base

    logger.info("Creating database tables...")
    Base.metadata.create_all(bind=bind or engine)
    logger.info("Database tables created successfully.")


def check_db_connection() -> bool:
    """
    Check if database connection is healthy.
    """
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logger.error(f"Database connection check failed: {e}")
        return False
