"""In-memory implementations of repository interfaces."""

import uuid
from datetime import datetime

from backend.app.db.repositories import (
    SavedTour,
    StoredTour,
    TourSaveError,
    TourSummary,
    summarize,
)
from backend.app.models.common import PriceTier
from backend.app.models.itinerary import Tour
from backend.app.models.pricing import CostBreakdown


class InMemoryTourRepository:
    """In-memory implementation of TourRepository."""

    def __init__(self) -> None:
        self._tours: dict[str, StoredTour] = {}

    def save_tour(
        self,
        tour: Tour,
        party_size: int,
        tier: PriceTier,
        breakdown: CostBreakdown | None,
    ) -> SavedTour:
        """Save a new tour."""
        if not tour.code:
            raise TourSaveError("tour code is required")
        if tour.code in self._tours:
            raise TourSaveError(f"tour code {tour.code} already exists", duplicate=True)

        tour_id = uuid.uuid4()
        self._tours[tour.code] = StoredTour(
            tour_id=tour_id,
            tour=tour,
            party_size=party_size,
            tier=tier,
            breakdown=breakdown,
            created_at=datetime.now(),
        )
        return SavedTour(tour_id=tour_id, tour_code=tour.code, tour_name=tour.name)

    def get_tour(self, tour_code: str) -> StoredTour | None:
        """Get tour by code."""
        return self._tours.get(tour_code)

    def list_tours(self, limit: int = 20) -> list[TourSummary]:
        """List recent tours."""
        results = [summarize(stored) for stored in self._tours.values()]

        # Sort by created_at descending
        results.sort(key=lambda x: x.created_at, reverse=True)

        return results[:limit]
