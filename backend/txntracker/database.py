"""
Database engine, session factory and declarative base.
"""

import logging
from pathlib import Path
from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from sqlalchemy.pool import StaticPool

from txntracker.config import settings

logger = logging.getLogger(__name__)


def _make_engine(url: str):
    connect_args = {}
    kwargs = {}
    if url.startswith("sqlite"):
        # SQLite only supports one writer at a time
        connect_args["check_same_thread"] = False
        if ":memory:" in url:
            kwargs["poolclass"] = StaticPool
    return create_engine(url, connect_args=connect_args, **kwargs)


engine = _make_engine(settings.database_url)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def init_db() -> None:
    """Create tables and indexes if they do not exist yet."""
    # Register models on the metadata before create_all
    import txntracker.models  # noqa: F401

    db_file = engine.url.database
    if engine.url.get_backend_name() == "sqlite" and db_file and db_file != ":memory:":
        Path(db_file).parent.mkdir(parents=True, exist_ok=True)

    logger.info("Running migrations on %s", engine.url)
    Base.metadata.create_all(bind=engine)
    logger.info("Migrations completed successfully")


def get_db() -> Generator[Session, None, None]:
    """
    Dependency for getting database sessions.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
