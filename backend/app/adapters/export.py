"""Export adapters.

Rendering (PDF, spreadsheets) lives outside this package. Exporters receive
the tour with its pricing inputs and return whatever document they produce.
"""

from datetime import datetime
from typing import Any, Protocol

from backend.app.models.common import CostCategory, PriceTier
from backend.app.models.itinerary import Tour, TourDay
from backend.app.models.pricing import CostBreakdown


class TourExporter(Protocol):
    """Produced-to interface for tour documents."""

    def export(
        self,
        tour: Tour,
        party_size: int,
        tier: PriceTier,
        breakdown: CostBreakdown | None,
    ) -> Any:
        """Export a tour with its pricing inputs and breakdown."""
        ...


def _day_lines(day: TourDay) -> list[str]:
    lines: list[str] = []
    if day.accommodation:
        lines.append(f"Accommodation: {day.accommodation.property_name or day.accommodation.id}")
    if day.breakfast_included:
        lines.append("Breakfast included")
    for meal in (day.lunch, day.dinner):
        if meal:
            lines.append(f"{meal.meal_type.value.title()}: {meal.restaurant_name or meal.id}")
    if day.guide_required and day.guide:
        lines.append(f"Guide: {day.guide.guide_language or day.guide.id}")
    for activity in day.activities:
        sites = ", ".join(e.attraction_name or e.id for e in activity.entrances)
        lines.append(f"Activity {activity.order}: {sites or 'free time'}")
    for selected in day.additional_services:
        service = selected.service
        label = getattr(service, "service_name", "") or getattr(service, "vehicle_type", "") or service.id
        lines.append(f"Service: {label} x{selected.effective_quantity}")
    return lines


class TourSummaryExporter:
    """Exports a tour as a plain summary document (dict)."""

    def __init__(self, now_fn: Any = None) -> None:
        """Initialize exporter.

        Args:
            now_fn: Injectable clock (default: datetime.now)
        """
        self._now = now_fn or datetime.now

    def export(
        self,
        tour: Tour,
        party_size: int,
        tier: PriceTier,
        breakdown: CostBreakdown | None,
    ) -> dict[str, Any]:
        """Build the summary document."""
        document: dict[str, Any] = {
            "tour_code": tour.code,
            "tour_name": tour.name,
            "duration_days": tour.duration_days,
            "cities": list(tour.cities),
            "party_size": party_size,
            "tier": tier.value,
            "generated_at": self._now().isoformat(),
            "days": [
                {"day_number": day.day_number, "city": day.city, "lines": _day_lines(day)}
                for day in tour.days
            ],
            "pricing": None,
        }

        if breakdown is not None:
            totals = breakdown.totals
            document["pricing"] = {
                "categories": {
                    category.value: {
                        "amount": totals.amount(category),
                        "share_pct": round(totals.share_pct(category), 1),
                    }
                    for category in CostCategory
                },
                "grand_total": totals.grand_total,
                "per_person": breakdown.per_person,
            }

        return document
