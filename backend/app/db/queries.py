"""Query helpers for saved tours."""

from sqlalchemy import Select, select
from sqlalchemy.orm import selectinload

from backend.app.db.models import TourDayRow, TourRow


def select_tours() -> Select[tuple[TourRow]]:
    """Select tours with days, activities and pricing eagerly loaded."""
    return select(TourRow).options(
        selectinload(TourRow.days).selectinload(TourDayRow.activities),
        selectinload(TourRow.pricing),
    )


def select_tour_by_code(tour_code: str) -> Select[tuple[TourRow]]:
    """Select a single tour by its code."""
    return select_tours().where(TourRow.tour_code == tour_code)
