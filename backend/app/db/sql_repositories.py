"""SQL implementations of repository interfaces."""

import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from backend.app.db.models import TourDayActivityRow, TourDayRow, TourPricingRow, TourRow
from backend.app.db.queries import select_tour_by_code, select_tours
from backend.app.db.repositories import (
    SavedTour,
    StoredTour,
    TourSaveError,
    TourSummary,
    summarize,
)
from backend.app.models.common import PriceTier
from backend.app.models.itinerary import Tour, TourDay
from backend.app.models.pricing import CostBreakdown

logger = logging.getLogger(__name__)


def _dump(record: object) -> dict | None:
    return record.model_dump(mode="json") if record is not None else None  # type: ignore[attr-defined]


def _day_row(day: TourDay) -> TourDayRow:
    return TourDayRow(
        day_number=day.day_number,
        city=day.city,
        accommodation=_dump(day.accommodation),
        breakfast_included=day.breakfast_included,
        lunch=_dump(day.lunch),
        dinner=_dump(day.dinner),
        guide_required=day.guide_required,
        guide=_dump(day.guide),
        additional_services=[s.model_dump(mode="json") for s in day.additional_services],
        notes=day.notes or None,
        activities=[
            TourDayActivityRow(
                activity_order=activity.order,
                entrances=[e.model_dump(mode="json") for e in activity.entrances],
                transportation=_dump(activity.transportation),
                activity_notes=activity.notes or None,
            )
            for activity in day.activities
        ],
    )


def _pricing_row(breakdown: CostBreakdown) -> TourPricingRow:
    totals = breakdown.totals
    return TourPricingRow(
        party_size=breakdown.party_size,
        tier=breakdown.tier.value,
        total_accommodation=totals.accommodation,
        total_meals=totals.meals,
        total_guides=totals.guide,
        total_transportation=totals.transportation,
        total_entrances=totals.entrances,
        total_additional_services=totals.additional_services,
        grand_total=totals.grand_total,
        per_person_total=breakdown.per_person,
        breakdown=breakdown.model_dump(mode="json"),
    )


def _to_tour(row: TourRow) -> Tour:
    return Tour.model_validate(
        {
            "code": row.tour_code,
            "name": row.tour_name,
            "duration_days": row.duration_days,
            "cities": row.cities,
            "tour_type": row.tour_type,
            "is_template": row.is_template,
            "description": row.description or "",
            "days": [
                {
                    "day_number": d.day_number,
                    "city": d.city,
                    "accommodation": d.accommodation,
                    "breakfast_included": d.breakfast_included,
                    "lunch": d.lunch,
                    "dinner": d.dinner,
                    "guide_required": d.guide_required,
                    "guide": d.guide,
                    "additional_services": d.additional_services,
                    "notes": d.notes or "",
                    "activities": [
                        {
                            "order": a.activity_order,
                            "entrances": a.entrances,
                            "transportation": a.transportation,
                            "notes": a.activity_notes or "",
                        }
                        for a in d.activities
                    ],
                }
                for d in row.days
            ],
        }
    )


def _to_stored(row: TourRow) -> StoredTour:
    breakdown = None
    if row.pricing:
        latest = max(row.pricing, key=lambda p: p.calculated_at)
        breakdown = CostBreakdown.model_validate(latest.breakdown)

    return StoredTour(
        tour_id=row.tour_id,
        tour=_to_tour(row),
        party_size=row.party_size,
        tier=PriceTier(row.price_tier),
        breakdown=breakdown,
        created_at=row.created_at,
    )


class SqlTourRepository:
    """SQL implementation of TourRepository."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def save_tour(
        self,
        tour: Tour,
        party_size: int,
        tier: PriceTier,
        breakdown: CostBreakdown | None,
    ) -> SavedTour:
        """Save tour, days, activities and pricing in one transaction."""
        if not tour.code:
            raise TourSaveError("tour code is required")

        row = TourRow(
            tour_code=tour.code,
            tour_name=tour.name,
            duration_days=tour.duration_days,
            cities=list(tour.cities),
            tour_type=tour.tour_type.value,
            is_template=tour.is_template,
            description=tour.description or None,
            party_size=party_size,
            price_tier=tier.value,
            days=[_day_row(day) for day in tour.days],
            pricing=[_pricing_row(breakdown)] if breakdown is not None else [],
        )

        try:
            self._session.add(row)
            self._session.commit()
        except IntegrityError as e:
            self._session.rollback()
            logger.warning("Duplicate tour code %s", tour.code)
            raise TourSaveError(f"tour code {tour.code} already exists", duplicate=True) from e
        except SQLAlchemyError as e:
            self._session.rollback()
            logger.exception("Failed to save tour %s", tour.code)
            raise TourSaveError(f"failed to save tour {tour.code}") from e

        return SavedTour(tour_id=row.tour_id, tour_code=row.tour_code, tour_name=row.tour_name)

    def get_tour(self, tour_code: str) -> StoredTour | None:
        """Get tour by code."""
        row = self._session.scalars(select_tour_by_code(tour_code)).first()

        if row is None:
            return None

        return _to_stored(row)

    def list_tours(self, limit: int = 20) -> list[TourSummary]:
        """List recent tours."""
        rows = self._session.scalars(
            select_tours().order_by(TourRow.created_at.desc()).limit(limit)
        ).all()
        return [summarize(_to_stored(row)) for row in rows]
