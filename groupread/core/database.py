"""
Database engine, session factory and declarative base.

The read services receive a ``Session`` from their caller and only ever
query through it; table management here is for scripts and tests.
"""

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

from groupread.config.settings import settings


def _connect_args(database_url: str) -> dict:
    # SQLite connections are shared between threads by the pool
    return {"check_same_thread": False} if database_url.startswith("sqlite") else {}


engine = create_engine(
    settings.database_url,
    connect_args=_connect_args(settings.database_url),
    echo=settings.debug
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def create_tables(bind: Engine = None):
    """Create every mapped table that does not exist yet on ``bind`` (default engine)."""
    Base.metadata.create_all(bind=bind or engine)


def drop_tables(bind: Engine = None):
    """Drop every mapped table on ``bind`` (default engine)."""
    Base.metadata.drop_all(bind=bind or engine)
