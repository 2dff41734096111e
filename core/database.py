from contextlib import contextmanager

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool

from core.config import settings


# Base class for all models
Base = declarative_base()


def make_engine(url: str | None = None):
    """
    Build an engine for the given URL.

    The default "sqlite://" is an in-memory database. A StaticPool keeps a
    single connection alive so every session sees the same data for the
    lifetime of the engine.
    """
    url = url or settings.database_url
    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        return create_engine(url, **kwargs)
    return create_engine(url)


def make_session_factory(bind):
    # expire_on_commit=False so snapshots stay readable after commit
    return sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=bind)


def create_schema(bind):
    # Import models so their tables are registered on Base.metadata
    import models  # noqa: F401

    Base.metadata.create_all(bind=bind)


@contextmanager
def session_scope(factory):
    """
    Context manager for database sessions.
    Rolls back on error and always closes the session.

    Usage:
        with session_scope(SessionLocal) as db:
            result = db.query(Model).all()
    """
    db = factory()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
