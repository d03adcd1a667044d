"""
Database connection and session management.
Provides the declarative base for models and the Store that owns the pooled engine.
"""
import logging

from fastapi import Request
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker, declarative_base, Session

from .config import Settings

logger = logging.getLogger(__name__)

# Create base class for declarative models
Base = declarative_base()


class Store:
    """
    Owns the connection pool for the lifetime of the application.

    Created once at startup, attached to ``app.state.store`` and disposed at
    shutdown. Request handlers never build engines themselves.
    """
    def __init__(self, engine: Engine):
        self.engine = engine
        self.session_factory = sessionmaker(bind=engine, autoflush=False, autocommit=False)

    @classmethod
    def from_settings(cls, settings: Settings) -> "Store":
        url = settings.sqlalchemy_url
        kwargs = {"pool_pre_ping": True}
        if not url.startswith("sqlite"):
            kwargs["pool_size"] = settings.db_pool_size
        return cls(create_engine(url, **kwargs))

    def create_all(self) -> None:
        # Import every models module so their tables register on Base.metadata
        from . import models  # noqa: F401
        Base.metadata.create_all(bind=self.engine)

    def ping(self) -> bool:
        """Return True when a trivial query succeeds."""
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError as e:
            logger.error(f"Database ping failed: {str(e)}")
            return False

    def dispose(self) -> None:
        self.engine.dispose()


def row_to_dict(instance) -> dict:
    """Snapshot of a mapped instance's column values, keyed by attribute name."""
    return {column.key: getattr(instance, column.key) for column in instance.__mapper__.column_attrs}


def get_store(request: Request) -> Store:
    return request.app.state.store


def get_db(request: Request):
    """
    Database dependency - Creates and yields a database session.

    The session is automatically closed after the request is processed,
    even if an exception occurs during request handling.

    Yields:
        SQLAlchemy Session: Database session
    """
    db: Session = get_store(request).session_factory()
    try:
        yield db
    finally:
        db.close()
