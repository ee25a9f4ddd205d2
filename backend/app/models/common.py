"""Common types and enums shared across all models."""

from enum import Enum


class PriceTier(str, Enum):
    """Traveler-class flag selecting one of the two parallel price columns.

    Tier A is the EU-passport column, tier B the non-EU column.
    """

    tier_a = "tier_a"
    tier_b = "tier_b"


class AllocationKind(str, Enum):
    """How a rate multiplies into a total."""

    per_room = "per_room"
    per_person = "per_person"
    per_group = "per_group"
    per_vehicle = "per_vehicle"
    per_day = "per_day"  # Priced like per_group


class RateKind(str, Enum):
    """Catalog slot kind of a rate record."""

    accommodation = "accommodation"
    meal = "meal"
    guide = "guide"
    transportation = "transportation"
    entrance_fee = "entrance_fee"
    service_fee = "service_fee"


class DaySlot(str, Enum):
    """Single-record slots on a tour day."""

    accommodation = "accommodation"
    lunch = "lunch"
    dinner = "dinner"
    guide = "guide"


class MealType(str, Enum):
    """Meal served by a restaurant rate."""

    breakfast = "breakfast"
    lunch = "lunch"
    dinner = "dinner"


class BoardBasis(str, Enum):
    """Hotel board basis."""

    BB = "BB"  # Bed & breakfast
    HB = "HB"  # Half board
    FB = "FB"  # Full board
    AI = "AI"  # All inclusive


class TourType(str, Enum):
    """Tour type tag (no effect on pricing)."""

    classic = "classic"
    luxury = "luxury"
    budget = "budget"
    custom = "custom"


class CostCategory(str, Enum):
    """Cost categories reported per day and in totals."""

    accommodation = "accommodation"
    meals = "meals"
    guide = "guide"
    transportation = "transportation"
    entrances = "entrances"
    additional_services = "additional_services"
