"""Rate records - priced services resolved from the rate catalog.

Records are frozen values. A tour day stores its own copy of every selected
record, so later catalog edits never change a saved itinerary.
"""

from typing import Annotated, Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from backend.app.models.common import AllocationKind, BoardBasis, MealType, PriceTier


class BaseRate(BaseModel):
    """Fields shared by every catalog record."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    id: str
    service_code: str = ""
    city: str
    price_tier_a: float = Field(
        ...,
        ge=0,
        validation_alias=AliasChoices("price_tier_a", "base_rate_eur", "eur_rate"),
    )
    price_tier_b: float = Field(
        ...,
        ge=0,
        validation_alias=AliasChoices("price_tier_b", "base_rate_non_eur", "non_eur_rate"),
    )

    def rate(self, tier: PriceTier) -> float:
        """Return the price column selected by tier."""
        if tier == PriceTier.tier_a:
            return self.price_tier_a
        return self.price_tier_b


class AccommodationRate(BaseRate):
    """Hotel room rate, priced per room."""

    kind: Literal["accommodation"] = "accommodation"
    property_name: str = ""
    property_type: str | None = None
    star_rating: int | None = Field(None, ge=1, le=7)
    room_type: str | None = None
    board_basis: BoardBasis = BoardBasis.BB

    @property
    def allocation(self) -> AllocationKind:
        return AllocationKind.per_room


class MealRate(BaseRate):
    """Restaurant meal rate, priced per person."""

    kind: Literal["meal"] = "meal"
    restaurant_name: str = ""
    meal_type: MealType = MealType.lunch
    cuisine_type: str | None = None

    @field_validator("meal_type", mode="before")
    @classmethod
    def normalize_meal_type(cls, v: object) -> object:
        """Accept catalog spellings such as 'Lunch'."""
        if isinstance(v, str):
            return v.lower()
        return v

    @property
    def allocation(self) -> AllocationKind:
        return AllocationKind.per_person


class GuideRate(BaseRate):
    """Guide day rate, flat per group."""

    kind: Literal["guide"] = "guide"
    guide_language: str = ""
    guide_type: str | None = None
    tour_duration: str | None = None

    @property
    def allocation(self) -> AllocationKind:
        return AllocationKind.per_group


class TransportationRate(BaseRate):
    """Vehicle hire rate, charged per vehicle regardless of seats used."""

    kind: Literal["transportation"] = "transportation"
    vehicle_type: str = ""
    service_type: str | None = None
    capacity_min: int = Field(1, ge=1)
    capacity_max: int | None = Field(None, ge=1)

    @property
    def allocation(self) -> AllocationKind:
        return AllocationKind.per_vehicle

    def fits_party(self, party_size: int) -> bool:
        """Check the vehicle can seat the whole party."""
        return self.capacity_max is None or self.capacity_max >= party_size


class EntranceFeeRate(BaseRate):
    """Attraction entrance ticket, priced per person."""

    kind: Literal["entrance_fee"] = "entrance_fee"
    attraction_name: str = ""
    fee_type: str | None = None
    category: str | None = None

    @property
    def allocation(self) -> AllocationKind:
        return AllocationKind.per_person


class ServiceFeeRate(BaseRate):
    """Generic additional service with its own allocation rule."""

    kind: Literal["service_fee"] = "service_fee"
    service_name: str = ""
    service_category: str = "Other"
    allocation: AllocationKind = Field(
        ..., validation_alias=AliasChoices("allocation", "rate_type")
    )

    @field_validator("allocation")
    @classmethod
    def validate_allocation(cls, v: AllocationKind) -> AllocationKind:
        """Services are never priced per room."""
        if v == AllocationKind.per_room:
            raise ValueError("service fees cannot be allocated per room")
        return v


RateRecord = Annotated[
    AccommodationRate | MealRate | GuideRate | TransportationRate | EntranceFeeRate | ServiceFeeRate,
    Field(discriminator="kind"),
]

ServiceRecord = Annotated[ServiceFeeRate | TransportationRate, Field(discriminator="kind")]
