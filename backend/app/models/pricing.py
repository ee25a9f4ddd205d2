"""Pricing models - cost breakdown produced by the aggregation engine."""

from pydantic import BaseModel, Field

from backend.app.models.common import CostCategory, PriceTier


class DailyCost(BaseModel):
    """Category subtotals for one tour day."""

    day_number: int = Field(..., ge=1)
    city: str = ""
    accommodation: float = Field(0.0, ge=0)
    meals: float = Field(0.0, ge=0)
    guide: float = Field(0.0, ge=0)
    transportation: float = Field(0.0, ge=0)
    entrances: float = Field(0.0, ge=0)
    additional_services: float = Field(0.0, ge=0)
    daily_total: float = Field(0.0, ge=0)

    def amount(self, category: CostCategory) -> float:
        """Subtotal for a single category."""
        return float(getattr(self, category.value))


class CostTotals(BaseModel):
    """Category totals across every day."""

    accommodation: float = Field(0.0, ge=0)
    meals: float = Field(0.0, ge=0)
    guide: float = Field(0.0, ge=0)
    transportation: float = Field(0.0, ge=0)
    entrances: float = Field(0.0, ge=0)
    additional_services: float = Field(0.0, ge=0)
    grand_total: float = Field(0.0, ge=0)

    def amount(self, category: CostCategory) -> float:
        """Total for a single category."""
        return float(getattr(self, category.value))

    def share_pct(self, category: CostCategory) -> float:
        """Percentage of the grand total spent on a category."""
        if self.grand_total == 0:
            return 0.0
        return self.amount(category) / self.grand_total * 100


class CostBreakdown(BaseModel):
    """Full computed result for one (tour, party size, tier) input."""

    party_size: int = Field(..., gt=0)
    tier: PriceTier
    days: list[DailyCost]
    totals: CostTotals
    per_person: float = Field(..., ge=0)
