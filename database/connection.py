"""
Database connection management for the warehouse planner.
Handles SQLAlchemy engine creation, session management, and connection verification.
"""

import os
import logging
from contextlib import contextmanager

from sqlalchemy import create_engine, text
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)

# SQLAlchemy Base for model declarations
Base = declarative_base()

# Engine and SessionLocal are created by init_engine()
engine = None
SessionLocal = None


def normalize_database_url(database_url):
    """Accept Heroku/Render style postgres:// URLs."""
    if database_url and database_url.startswith('postgres://'):
        return database_url.replace('postgres://', 'postgresql://', 1)
    return database_url


def init_engine(database_url=None, engine_options=None):
    """
    Create the engine and session factory for a database URL.

    In-memory SQLite shares one connection across threads so tables created
    at startup stay visible to every request.
    """
    global engine, SessionLocal

    database_url = normalize_database_url(database_url or os.environ.get('DATABASE_URL'))
    if not database_url:
        raise RuntimeError(
            "DATABASE_URL not configured. Set the DATABASE_URL environment variable "
            "or the DATABASE_URL config value."
        )

    options = dict(engine_options or {})
    if database_url.startswith('sqlite'):
        options.pop('pool_recycle', None)
        options.setdefault('connect_args', {'check_same_thread': False})
        if ':memory:' in database_url or database_url in ('sqlite://', 'sqlite:///'):
            options['poolclass'] = StaticPool

    try:
        engine = create_engine(database_url, **options)
    except Exception as e:
        logger.error(f"Failed to create database engine: {e}")
        raise RuntimeError(f"Failed to connect to database: {e}")

    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    logger.info(f"Database engine created ({engine.url.get_backend_name()})")
    return engine


def get_engine():
    """Get the SQLAlchemy engine, creating it from DATABASE_URL if needed."""
    if engine is None:
        init_engine()
    return engine


def get_session_factory():
    """Get or create the session factory."""
    if SessionLocal is None:
        init_engine()
    return SessionLocal


@contextmanager
def get_db_session():
    """
    Context manager for getting a database session.
    Commits on success, rolls back on error.

    Example:
        with get_db_session() as db:
            floors = FloorRepository(db).list_floor_plans(warehouse_id)
    """
    session_factory = get_session_factory()
    db = session_factory()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def check_db_connection():
    """
    Verify that the database connection is working.
    Returns True if connection is successful, raises exception otherwise.
    """
    try:
        eng = get_engine()
        with eng.connect() as conn:
            conn.execute(text("SELECT 1")).fetchone()
        logger.debug("Database connection verified successfully")
        return True
    except Exception as e:
        logger.error(f"Database connection failed: {e}")
        raise RuntimeError(f"Cannot connect to database: {e}")


def init_db():
    """
    Create all tables.
    This should be called at application startup.
    """
    # Import models to ensure they're registered with Base
    from database import models  # noqa: F401

    Base.metadata.create_all(bind=get_engine())
    logger.info("Database tables created/verified")
