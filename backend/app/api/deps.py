"""FastAPI dependencies for the catalog and tour repository.

Tests override these through app.dependency_overrides.
"""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from backend.app.config import get_settings
from backend.app.db.engine import get_session
from backend.app.db.repositories import TourRepository
from backend.app.db.sql_repositories import SqlTourRepository
from backend.app.rates.catalog import RateCatalog, load_fixture_catalog


@lru_cache
def get_rate_catalog() -> RateCatalog:
    """Get the shared rate catalog, loaded once from the configured fixture."""
    return load_fixture_catalog(get_settings().rates_fixture_path)


def get_tour_repository(
    session: Annotated[Session, Depends(get_session)],
) -> TourRepository:
    """Get a SQL tour repository bound to the request session."""
    return SqlTourRepository(session)
