"""Rate catalog query endpoint."""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Query

from backend.app.api.deps import get_rate_catalog
from backend.app.models.common import MealType, RateKind
from backend.app.rates.catalog import RateCatalog, meals_of_type, vehicles_for_party

router = APIRouter(prefix="/rates", tags=["rates"])


@router.get("")
async def list_rates(
    catalog: Annotated[RateCatalog, Depends(get_rate_catalog)],
    kind: Annotated[RateKind, Query(description="Record kind")],
    city: Annotated[str, Query(min_length=1, description="City the service is offered in")],
    meal_type: Annotated[MealType | None, Query(description="Only meals of this type")] = None,
    party_size: Annotated[
        int | None, Query(ge=1, description="Only vehicles seating this many travelers")
    ] = None,
) -> list[dict[str, Any]]:
    """List catalog records of one kind in a city.

    Returns:
        Records serialized with their "kind" tag
    """
    records = catalog.fetch_rates(kind, city)

    if kind == RateKind.meal and meal_type is not None:
        records = meals_of_type(records, meal_type)
    if kind == RateKind.transportation and party_size is not None:
        records = vehicles_for_party(records, party_size)

    return [record.model_dump(mode="json") for record in records]
