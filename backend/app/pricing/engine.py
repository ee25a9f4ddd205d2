"""Cost aggregation engine for multi-day tours.

Pure and deterministic: no I/O, no shared state, never mutates its input.
Safe to call from several threads at once.
"""

import math

from backend.app.models.common import AllocationKind, CostCategory, PriceTier
from backend.app.models.itinerary import Activity, SelectedService, Tour, TourDay
from backend.app.models.pricing import CostBreakdown, CostTotals, DailyCost

# Double-room occupancy policy; not derived from the accommodation record
ROOM_OCCUPANCY = 2


class InvalidInputError(ValueError):
    """Engine precondition failed (non-positive party size or no days)."""

    pass


def rooms_needed(party_size: int) -> int:
    """Rooms required to sleep the party two to a room."""
    return math.ceil(party_size / ROOM_OCCUPANCY)


def accommodation_cost(day: TourDay, party_size: int, tier: PriceTier) -> float:
    """Room rate times rooms needed, or 0 without a hotel."""
    if day.accommodation is None:
        return 0.0
    return rooms_needed(party_size) * day.accommodation.rate(tier)


def meal_cost(day: TourDay, party_size: int, tier: PriceTier) -> float:
    """Lunch and dinner per person.

    Breakfast comes with the accommodation's board basis and is never priced.
    """
    total = 0.0
    for meal in (day.lunch, day.dinner):
        if meal is not None:
            total += party_size * meal.rate(tier)
    return total


def guide_cost(day: TourDay, tier: PriceTier) -> float:
    """Flat guide rate when a guide is both required and assigned."""
    if day.guide_required and day.guide is not None:
        return day.guide.rate(tier)
    return 0.0


def activity_costs(
    activities: list[Activity], party_size: int, tier: PriceTier
) -> tuple[float, float]:
    """Sum entrances and transportation over a day's activities.

    Args:
        activities: Ordered activities of one day
        party_size: Number of travelers
        tier: Price column to apply

    Returns:
        (entrances, transportation) subtotals. Every entrance is charged per
        person with no combo discount; each activity's vehicle is charged once.
    """
    entrances = 0.0
    transportation = 0.0

    for activity in activities:
        for entrance in activity.entrances:
            entrances += party_size * entrance.rate(tier)
        if activity.transportation is not None:
            transportation += activity.transportation.rate(tier)

    return entrances, transportation


def service_cost(selected: SelectedService, party_size: int, tier: PriceTier) -> float:
    """Price one additional service according to its allocation kind."""
    rate = selected.service.rate(tier)
    allocation = selected.service.allocation

    if allocation == AllocationKind.per_person:
        return party_size * rate
    if allocation == AllocationKind.per_vehicle:
        return selected.effective_quantity * rate
    # per_group and per_day are flat
    return rate


def compute_day_cost(day: TourDay, party_size: int, tier: PriceTier) -> DailyCost:
    """Compute the six category subtotals for a single day."""
    entrances, transportation = activity_costs(day.activities, party_size, tier)
    subtotals = {
        CostCategory.accommodation: accommodation_cost(day, party_size, tier),
        CostCategory.meals: meal_cost(day, party_size, tier),
        CostCategory.guide: guide_cost(day, tier),
        CostCategory.transportation: transportation,
        CostCategory.entrances: entrances,
        CostCategory.additional_services: sum(
            (service_cost(s, party_size, tier) for s in day.additional_services), 0.0
        ),
    }

    return DailyCost(
        day_number=day.day_number,
        city=day.city,
        **{category.value: amount for category, amount in subtotals.items()},
        daily_total=sum(subtotals[category] for category in CostCategory),
    )


def sum_totals(daily: list[DailyCost]) -> CostTotals:
    """Elementwise sum of daily category subtotals."""
    sums = {
        category: sum((d.amount(category) for d in daily), 0.0) for category in CostCategory
    }
    return CostTotals(
        **{category.value: amount for category, amount in sums.items()},
        grand_total=sum(sums[category] for category in CostCategory),
    )


def compute_itinerary_cost(tour: Tour, party_size: int, tier: PriceTier) -> CostBreakdown:
    """Compute the full cost breakdown of a tour.

    Business completeness is not checked: a missing slot simply contributes 0.
    Days are priced independently and only coupled through summation.

    Args:
        tour: Tour to price (read only)
        party_size: Number of travelers, must be positive
        tier: Price column applied uniformly to every record

    Returns:
        Freshly allocated CostBreakdown with one DailyCost per tour day

    Raises:
        InvalidInputError: If party_size <= 0 or the tour has no days
    """
    if party_size <= 0:
        raise InvalidInputError(f"party size must be greater than 0, got {party_size}")
    if not tour.days:
        raise InvalidInputError("tour must have at least one day")

    daily = [compute_day_cost(day, party_size, tier) for day in tour.days]
    totals = sum_totals(daily)

    return CostBreakdown(
        party_size=party_size,
        tier=tier,
        days=daily,
        totals=totals,
        per_person=totals.grand_total / party_size,
    )
