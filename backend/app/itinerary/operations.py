"""Itinerary operations - pure edits on a Tour.

Every function returns a new Tour and never mutates its input, so callers
can compare old and new values to detect changes. Day and activity indices
are 0-based; out-of-range indices raise IndexError.
"""

from collections.abc import Callable

from backend.app.models.common import AllocationKind, DaySlot
from backend.app.models.itinerary import Activity, SelectedService, Tour, TourDay
from backend.app.models.rates import (
    AccommodationRate,
    EntranceFeeRate,
    GuideRate,
    MealRate,
    ServiceFeeRate,
    TransportationRate,
)

SlotRecord = AccommodationRate | MealRate | GuideRate

_SLOT_TYPES: dict[DaySlot, type] = {
    DaySlot.accommodation: AccommodationRate,
    DaySlot.lunch: MealRate,
    DaySlot.dinner: MealRate,
    DaySlot.guide: GuideRate,
}


def default_day(day_number: int, city_fallback: str) -> TourDay:
    """Build a fresh day.

    The only place new-day defaults live; resizing and clearing both use it.
    """
    return TourDay(
        day_number=day_number,
        city=city_fallback,
        breakfast_included=True,
        guide_required=True,
        activities=[],
        additional_services=[],
    )


def _check_index(items: list, index: int, what: str) -> None:
    if not 0 <= index < len(items):
        raise IndexError(f"{what} index {index} out of range (0..{len(items) - 1})")


def _renumber(activities: list[Activity]) -> list[Activity]:
    return [a.model_copy(update={"order": i}) for i, a in enumerate(activities, start=1)]


def update_day(tour: Tour, day_index: int, fn: Callable[[TourDay], TourDay]) -> Tour:
    """Replace one day with fn(day), keeping its day number."""
    _check_index(tour.days, day_index, "day")
    old = tour.days[day_index]
    new = fn(old)
    if new == old:
        return tour

    days = list(tour.days)
    days[day_index] = new.model_copy(update={"day_number": old.day_number})
    return tour.model_copy(update={"days": days})


def resize_days(tour: Tour, new_duration: int) -> Tour:
    """Truncate or extend the day list to new_duration days.

    Existing days are kept by index; appended days default to the tour's
    first city.
    """
    if new_duration < 1:
        raise ValueError(f"duration must be at least 1 day, got {new_duration}")

    days = list(tour.days[:new_duration])
    for number in range(len(days) + 1, new_duration + 1):
        days.append(default_day(number, tour.first_city))

    return tour.model_copy(update={"days": days, "duration_days": new_duration})


def replace_day_slot(
    tour: Tour, day_index: int, slot: DaySlot, record: SlotRecord | None
) -> Tour:
    """Set or clear accommodation, lunch, dinner, or guide.

    The record is stored as a value copy. Setting the same record twice is a
    no-op.
    """
    if record is not None and not isinstance(record, _SLOT_TYPES[slot]):
        raise TypeError(f"{type(record).__name__} cannot fill the {slot.value} slot")

    value = record.model_copy() if record is not None else None
    return update_day(tour, day_index, lambda d: d.model_copy(update={slot.value: value}))


def set_day_city(tour: Tour, day_index: int, city: str) -> Tour:
    """Change the city of a day."""
    return update_day(tour, day_index, lambda d: d.model_copy(update={"city": city}))


def set_guide_required(tour: Tour, day_index: int, required: bool) -> Tour:
    """Toggle whether a guide is needed; an assigned guide is kept."""
    return update_day(
        tour, day_index, lambda d: d.model_copy(update={"guide_required": required})
    )


def set_breakfast_included(tour: Tour, day_index: int, included: bool) -> Tour:
    """Record whether breakfast is part of the board basis."""
    return update_day(
        tour, day_index, lambda d: d.model_copy(update={"breakfast_included": included})
    )


def set_day_notes(tour: Tour, day_index: int, notes: str) -> Tour:
    """Replace a day's free-text notes."""
    return update_day(tour, day_index, lambda d: d.model_copy(update={"notes": notes}))


def add_activity(tour: Tour, day_index: int, notes: str = "") -> Tour:
    """Append an empty activity at the end of the day."""

    def _add(day: TourDay) -> TourDay:
        activity = Activity(order=len(day.activities) + 1, notes=notes)
        return day.model_copy(update={"activities": [*day.activities, activity]})

    return update_day(tour, day_index, _add)


def remove_activity(tour: Tour, day_index: int, activity_index: int) -> Tour:
    """Remove an activity and renumber the rest 1..N."""

    def _remove(day: TourDay) -> TourDay:
        _check_index(day.activities, activity_index, "activity")
        remaining = [a for i, a in enumerate(day.activities) if i != activity_index]
        return day.model_copy(update={"activities": _renumber(remaining)})

    return update_day(tour, day_index, _remove)


def reorder_activity(tour: Tour, day_index: int, from_index: int, to_index: int) -> Tour:
    """Move one activity to a new position and renumber the list 1..N."""

    def _move(day: TourDay) -> TourDay:
        _check_index(day.activities, from_index, "activity")
        _check_index(day.activities, to_index, "activity")
        activities = list(day.activities)
        activities.insert(to_index, activities.pop(from_index))
        return day.model_copy(update={"activities": _renumber(activities)})

    return update_day(tour, day_index, _move)


def _update_activity(
    tour: Tour, day_index: int, activity_index: int, fn: Callable[[Activity], Activity]
) -> Tour:
    def _apply(day: TourDay) -> TourDay:
        _check_index(day.activities, activity_index, "activity")
        activities = list(day.activities)
        activities[activity_index] = fn(activities[activity_index])
        return day.model_copy(update={"activities": activities})

    return update_day(tour, day_index, _apply)


def toggle_entrance(
    tour: Tour, day_index: int, activity_index: int, entrance: EntranceFeeRate
) -> Tour:
    """Select an entrance on an activity, or deselect it if already there."""

    def _toggle(activity: Activity) -> Activity:
        if any(e.id == entrance.id for e in activity.entrances):
            entrances = [e for e in activity.entrances if e.id != entrance.id]
        else:
            entrances = [*activity.entrances, entrance.model_copy()]
        return activity.model_copy(update={"entrances": entrances})

    return _update_activity(tour, day_index, activity_index, _toggle)


def set_activity_transportation(
    tour: Tour, day_index: int, activity_index: int, transport: TransportationRate | None
) -> Tour:
    """Set or clear the single vehicle of an activity."""
    value = transport.model_copy() if transport is not None else None
    return _update_activity(
        tour,
        day_index,
        activity_index,
        lambda a: a.model_copy(update={"transportation": value}),
    )


def set_activity_notes(tour: Tour, day_index: int, activity_index: int, notes: str) -> Tour:
    """Replace an activity's notes."""
    return _update_activity(
        tour, day_index, activity_index, lambda a: a.model_copy(update={"notes": notes})
    )


def toggle_service(
    tour: Tour, day_index: int, service: ServiceFeeRate | TransportationRate
) -> Tour:
    """Add an additional service to a day, or remove it if already selected.

    Per-vehicle services start with a quantity of 1.
    """

    def _toggle(day: TourDay) -> TourDay:
        if any(s.service.id == service.id for s in day.additional_services):
            services = [s for s in day.additional_services if s.service.id != service.id]
        else:
            quantity = 1 if service.allocation == AllocationKind.per_vehicle else None
            services = [
                *day.additional_services,
                SelectedService(service=service.model_copy(), quantity=quantity),
            ]
        return day.model_copy(update={"additional_services": services})

    return update_day(tour, day_index, _toggle)


def set_service_quantity(tour: Tour, day_index: int, service_id: str, quantity: int) -> Tour:
    """Change the quantity of a selected service, never below 1."""

    def _set(day: TourDay) -> TourDay:
        services = [
            s.model_copy(update={"quantity": max(1, quantity)}) if s.service.id == service_id else s
            for s in day.additional_services
        ]
        return day.model_copy(update={"additional_services": services})

    return update_day(tour, day_index, _set)


def clear_day(tour: Tour, day_index: int) -> Tour:
    """Reset a day to defaults, keeping its city."""
    _check_index(tour.days, day_index, "day")
    city = tour.days[day_index].city or tour.first_city
    return update_day(tour, day_index, lambda d: default_day(d.day_number, city))


def copy_day_to_all(tour: Tour, source_index: int) -> Tour:
    """Copy a day's settings onto every other day, keeping their day numbers."""
    _check_index(tour.days, source_index, "day")
    source = tour.days[source_index]
    days = [
        day if i == source_index else source.model_copy(update={"day_number": day.day_number})
        for i, day in enumerate(tour.days)
    ]
    return tour.model_copy(update={"days": days})


def has_pricing_data(tour: Tour | None) -> bool:
    """Readiness check: at least one day has a slot, activity, or service."""
    if tour is None:
        return False
    return any(day.has_selections() for day in tour.days)
