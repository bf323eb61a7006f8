"""
Database connection and session management.
"""

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

def build_engine(database_url: str, echo: bool = False) -> Engine:
    """Create a database engine for ``database_url``."""
    if database_url.startswith("sqlite"):
        # SQLite specific configuration
        return create_engine(
            database_url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
            echo=echo
        )

    # PostgreSQL configuration
    return create_engine(
        database_url,
        pool_pre_ping=True,
        pool_recycle=300,
        echo=echo
    )

def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autoflush=False, expire_on_commit=False, bind=engine)

def create_tables(engine: Engine):
    """Create all database tables."""
    from .base import Base
    from . import models  # noqa: F401  registers the tables
    Base.metadata.create_all(bind=engine)

def drop_tables(engine: Engine):
    """Drop all database tables."""
    from .base import Base
    Base.metadata.drop_all(bind=engine)
