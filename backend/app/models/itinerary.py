"""Itinerary models - the tour being assembled day by day."""

from typing import Annotated

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from backend.app.models.common import TourType
from backend.app.models.rates import (
    AccommodationRate,
    EntranceFeeRate,
    GuideRate,
    MealRate,
    ServiceRecord,
    TransportationRate,
)


class Activity(BaseModel):
    """One ordered unit of a day: entrances plus at most one vehicle."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    order: int = Field(..., ge=1, validation_alias=AliasChoices("order", "activity_order"))
    entrances: list[EntranceFeeRate] = Field(default_factory=list)
    transportation: TransportationRate | None = None
    notes: str = Field("", validation_alias=AliasChoices("notes", "activity_notes"))


class SelectedService(BaseModel):
    """An additional service picked for a day."""

    model_config = ConfigDict(frozen=True)

    service: ServiceRecord
    quantity: int | None = Field(None, ge=1)  # Only meaningful per vehicle

    @property
    def effective_quantity(self) -> int:
        return self.quantity or 1


class TourDay(BaseModel):
    """A single day of the tour."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    day_number: int = Field(..., ge=1)
    city: str = ""
    accommodation: AccommodationRate | None = None
    breakfast_included: bool = True
    lunch: MealRate | None = Field(None, validation_alias=AliasChoices("lunch", "lunch_meal"))
    dinner: MealRate | None = Field(None, validation_alias=AliasChoices("dinner", "dinner_meal"))
    guide_required: bool = True
    guide: GuideRate | None = None
    activities: list[Activity] = Field(default_factory=list)
    additional_services: list[SelectedService] = Field(default_factory=list)
    notes: str = ""

    @field_validator("activities")
    @classmethod
    def validate_activity_order(cls, v: list[Activity]) -> list[Activity]:
        """Ensure activity order runs 1..N with no gaps or duplicates."""
        orders = [a.order for a in v]
        if orders != list(range(1, len(v) + 1)):
            raise ValueError(f"activity order must be contiguous from 1, got {orders}")
        return v

    def has_selections(self) -> bool:
        """True when any slot, activity, or service is filled in."""
        return bool(
            self.accommodation
            or self.lunch
            or self.dinner
            or self.guide
            or self.activities
            or self.additional_services
        )

    def is_empty(self) -> bool:
        """A day with neither a city nor any selection."""
        return not self.city.strip() and not self.has_selections()


class Tour(BaseModel):
    """Complete tour: header fields plus the ordered days."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    code: str = Field("", validation_alias=AliasChoices("code", "tour_code"))
    name: Annotated[str, Field(min_length=1, validation_alias=AliasChoices("name", "tour_name"))]
    duration_days: int = Field(..., ge=1, le=30)
    cities: Annotated[list[str], Field(min_length=1)]
    tour_type: TourType = TourType.custom
    is_template: bool = False
    description: str = ""
    days: list[TourDay] = Field(default_factory=list)

    @field_validator("name")
    @classmethod
    def validate_name_not_blank(cls, v: str) -> str:
        """Reject whitespace-only names."""
        if not v.strip():
            raise ValueError("tour name must not be blank")
        return v

    @field_validator("days")
    @classmethod
    def validate_day_numbers(cls, v: list[TourDay]) -> list[TourDay]:
        """Ensure day numbers run 1..N."""
        numbers = [d.day_number for d in v]
        if numbers != list(range(1, len(v) + 1)):
            raise ValueError(f"day numbers must be contiguous from 1, got {numbers}")
        return v

    @property
    def first_city(self) -> str:
        return self.cities[0] if self.cities else ""
