"""Models package - re-exports for convenience."""

from backend.app.models.common import (
    AllocationKind,
    BoardBasis,
    CostCategory,
    DaySlot,
    MealType,
    PriceTier,
    RateKind,
    TourType,
)
from backend.app.models.itinerary import Activity, SelectedService, Tour, TourDay
from backend.app.models.pricing import CostBreakdown, CostTotals, DailyCost
from backend.app.models.rates import (
    AccommodationRate,
    EntranceFeeRate,
    GuideRate,
    MealRate,
    RateRecord,
    ServiceFeeRate,
    ServiceRecord,
    TransportationRate,
)
from backend.app.models.violations import FieldViolation

__all__ = [
    # Common
    "AllocationKind",
    "BoardBasis",
    "CostCategory",
    "DaySlot",
    "MealType",
    "PriceTier",
    "RateKind",
    "TourType",
    # Rates
    "AccommodationRate",
    "MealRate",
    "GuideRate",
    "TransportationRate",
    "EntranceFeeRate",
    "ServiceFeeRate",
    "RateRecord",
    "ServiceRecord",
    # Itinerary
    "Tour",
    "TourDay",
    "Activity",
    "SelectedService",
    # Pricing
    "CostBreakdown",
    "CostTotals",
    "DailyCost",
    # Violations
    "FieldViolation",
]
