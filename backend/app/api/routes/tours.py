"""Tour endpoints - pricing, setup validation, save and lookup."""

import dataclasses
import logging
from datetime import datetime
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel, Field

from backend.app.api.deps import get_tour_repository
from backend.app.builder.state import TourSetupDraft
from backend.app.builder.validation import (
    collect_setup_violations,
    generate_tour_code,
    parse_cities,
)
from backend.app.config import get_settings
from backend.app.db.repositories import TourRepository, TourSaveError
from backend.app.itinerary.operations import has_pricing_data
from backend.app.models.common import PriceTier, TourType
from backend.app.models.itinerary import Tour
from backend.app.models.pricing import CostBreakdown
from backend.app.models.violations import FieldViolation
from backend.app.pricing.engine import InvalidInputError, compute_itinerary_cost

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tours", tags=["tours"])


class CalculateRequest(BaseModel):
    """Request body for POST /tours/calculate."""

    tour: Tour
    party_size: int = Field(..., description="Number of travelers")
    tier: PriceTier = PriceTier.tier_a


class SetupRequest(BaseModel):
    """Request body for POST /tours/validate-setup."""

    name: str = ""
    duration_days: int = 1
    cities: list[str] | str = Field(default_factory=list)
    tour_type: TourType = TourType.custom
    party_size: int = 2


class SetupResponse(BaseModel):
    """Response for a valid setup."""

    valid: bool
    suggested_code: str


class SaveTourRequest(BaseModel):
    """Request body for POST /tours."""

    tour: Tour
    party_size: int = Field(..., ge=1)
    tier: PriceTier = PriceTier.tier_a
    breakdown: CostBreakdown | None = None


class SaveTourResponse(BaseModel):
    """Response for POST /tours."""

    tour_id: UUID
    tour_code: str
    tour_name: str


class TourSummaryResponse(BaseModel):
    """Item of GET /tours."""

    tour_id: UUID
    tour_code: str
    tour_name: str
    duration_days: int
    cities: list[str]
    grand_total: float | None
    per_person: float | None
    created_at: datetime


class TourDetailResponse(BaseModel):
    """Response for GET /tours/{tour_code}."""

    tour_id: UUID
    tour: Tour
    party_size: int
    tier: PriceTier
    breakdown: CostBreakdown | None
    created_at: datetime


@router.post("/calculate", response_model=CostBreakdown)
async def calculate(request: CalculateRequest) -> CostBreakdown:
    """Compute the cost breakdown of a tour.

    Raises:
        HTTPException: 400 if the party size or day list cannot be priced
    """
    try:
        return compute_itinerary_cost(request.tour, request.party_size, request.tier)
    except InvalidInputError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e


@router.post("/validate-setup", response_model=SetupResponse)
async def validate_setup(request: SetupRequest) -> SetupResponse:
    """Check setup fields, reporting every violation at once.

    Raises:
        HTTPException: 422 with one entry per invalid field
    """
    settings = get_settings()
    cities = parse_cities(request.cities) if isinstance(request.cities, str) else request.cities
    draft = TourSetupDraft(
        name=request.name,
        duration_days=request.duration_days,
        cities=cities,
        tour_type=request.tour_type,
    )

    violations: list[FieldViolation] = collect_setup_violations(
        draft, request.party_size, settings.max_duration_days
    )
    if violations:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={
                "message": "Invalid tour setup",
                "violations": [v.model_dump() for v in violations],
            },
        )

    return SetupResponse(
        valid=True,
        suggested_code=generate_tour_code(
            draft.name, draft.duration_days, prefix=settings.tour_code_prefix
        ),
    )


@router.post("", response_model=SaveTourResponse, status_code=status.HTTP_201_CREATED)
def save_tour(
    request: SaveTourRequest,
    repository: Annotated[TourRepository, Depends(get_tour_repository)],
) -> SaveTourResponse:
    """Save a tour with its pricing.

    A missing tour code is generated; a missing breakdown is computed when
    the tour has anything selected.

    Raises:
        HTTPException: 409 if the tour code exists, 500 on other save failures
    """
    settings = get_settings()
    tour = request.tour
    if not tour.code:
        tour = tour.model_copy(
            update={
                "code": generate_tour_code(
                    tour.name, tour.duration_days, prefix=settings.tour_code_prefix
                )
            }
        )

    breakdown = request.breakdown
    if breakdown is None and has_pricing_data(tour):
        try:
            breakdown = compute_itinerary_cost(tour, request.party_size, request.tier)
        except InvalidInputError as e:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e

    try:
        saved = repository.save_tour(tour, request.party_size, request.tier, breakdown)
    except TourSaveError as e:
        if e.duplicate:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from e
        logger.error("Tour save failed: %s", e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to save tour"
        ) from e

    return SaveTourResponse(
        tour_id=saved.tour_id, tour_code=saved.tour_code, tour_name=saved.tour_name
    )


@router.get("", response_model=list[TourSummaryResponse])
def list_tours(
    repository: Annotated[TourRepository, Depends(get_tour_repository)],
    limit: Annotated[int | None, Query(ge=1, le=100)] = None,
) -> list[TourSummaryResponse]:
    """List recently saved tours, newest first."""
    summaries = repository.list_tours(limit or get_settings().recent_tours_limit)
    return [TourSummaryResponse(**dataclasses.asdict(s)) for s in summaries]


@router.get("/{tour_code}", response_model=TourDetailResponse)
def get_tour(
    tour_code: str,
    repository: Annotated[TourRepository, Depends(get_tour_repository)],
) -> TourDetailResponse:
    """Get a saved tour by code.

    Raises:
        HTTPException: 404 if no tour has this code
    """
    stored = repository.get_tour(tour_code)
    if stored is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Tour not found")

    return TourDetailResponse(
        tour_id=stored.tour_id,
        tour=stored.tour,
        party_size=stored.party_size,
        tier=stored.tier,
        breakdown=stored.breakdown,
        created_at=stored.created_at,
    )
