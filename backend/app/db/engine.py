"""Database engine and session factory."""

from collections.abc import Generator

from sqlalchemy import Engine, create_engine, make_url
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from backend.app.config import Settings, get_settings
from backend.app.db.models import Base


def create_engine_from_settings(settings: Settings) -> Engine:
    """Create SQLAlchemy engine from settings.

    Raises:
        ValueError: If DATABASE_URL is unset or empty.
    """
    database_url = settings.database_url

    if not database_url:
        raise ValueError(
            "DATABASE_URL must be set to a valid connection string. "
            "Please configure the database_url setting."
        )

    url = make_url(database_url)
    if url.get_backend_name() == "sqlite":
        if url.database in (None, "", ":memory:"):
            # One shared connection so the in-memory database survives across sessions
            return create_engine(
                url,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
                echo=False,
            )
        return create_engine(url, connect_args={"check_same_thread": False}, echo=False)

    return create_engine(database_url, pool_pre_ping=True, echo=False)


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    """Create sessionmaker for creating database sessions.

    Args:
        engine: SQLAlchemy engine

    Returns:
        Sessionmaker bound to the engine
    """
    return sessionmaker(bind=engine, expire_on_commit=False)


# Global engine, created on first use
_engine: Engine | None = None


def get_engine() -> Engine:
    """Get global engine instance, creating tables for SQLite databases."""
    global _engine
    if _engine is None:
        _engine = create_engine_from_settings(get_settings())
        if _engine.url.get_backend_name() == "sqlite":
            Base.metadata.create_all(_engine)
    return _engine


def get_session() -> Generator[Session, None, None]:
    """FastAPI dependency for database session.

    Yields:
        Session instance
    """
    with create_session_factory(get_engine())() as session:
        yield session
