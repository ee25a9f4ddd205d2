"""Repository protocol interfaces for tour persistence."""

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol
from uuid import UUID

from backend.app.models.common import PriceTier
from backend.app.models.itinerary import Tour
from backend.app.models.pricing import CostBreakdown


class TourSaveError(RuntimeError):
    """Tour could not be persisted."""

    def __init__(self, message: str, *, duplicate: bool = False) -> None:
        super().__init__(message)
        self.duplicate = duplicate


@dataclass(frozen=True)
class SavedTour:
    """Identity of a freshly saved tour."""

    tour_id: UUID
    tour_code: str
    tour_name: str


@dataclass
class StoredTour:
    """A saved tour with the pricing inputs and result it was saved with."""

    tour_id: UUID
    tour: Tour
    party_size: int
    tier: PriceTier
    breakdown: CostBreakdown | None
    created_at: datetime


@dataclass
class TourSummary:
    """Summary of a saved tour for listing."""

    tour_id: UUID
    tour_code: str
    tour_name: str
    duration_days: int
    cities: list[str]
    grand_total: float | None
    per_person: float | None
    created_at: datetime


class TourRepository(Protocol):
    """Repository for saved tours."""

    def save_tour(
        self,
        tour: Tour,
        party_size: int,
        tier: PriceTier,
        breakdown: CostBreakdown | None,
    ) -> SavedTour:
        """Persist a tour together with its pricing.

        Args:
            tour: Tour to save; its code must be set and unique
            party_size: Party size the breakdown was computed for
            tier: Price tier the breakdown was computed for
            breakdown: Computed pricing, or None if none was available

        Returns:
            Identity of the saved tour

        Raises:
            TourSaveError: If the tour cannot be stored
        """
        ...

    def get_tour(self, tour_code: str) -> StoredTour | None:
        """Get a saved tour by code."""
        ...

    def list_tours(self, limit: int = 20) -> list[TourSummary]:
        """List saved tours, most recent first."""
        ...


def summarize(stored: StoredTour) -> TourSummary:
    """Build the listing summary of a stored tour."""
    return TourSummary(
        tour_id=stored.tour_id,
        tour_code=stored.tour.code,
        tour_name=stored.tour.name,
        duration_days=stored.tour.duration_days,
        cities=list(stored.tour.cities),
        grand_total=stored.breakdown.totals.grand_total if stored.breakdown else None,
        per_person=stored.breakdown.per_person if stored.breakdown else None,
        created_at=stored.created_at,
    )
