"""Builder state models."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from backend.app.models.common import TourType
from backend.app.models.pricing import CostBreakdown


class BuilderStage(str, Enum):
    """Linear builder stages."""

    setup = "setup"
    planning = "planning"
    review = "review"


class PricingStatus(str, Enum):
    """Outcome of the latest pricing run."""

    idle = "idle"  # Nothing computed yet
    ready = "ready"
    skipped = "skipped"  # Readiness guard: not enough data, not an error
    unavailable = "unavailable"  # Engine rejected the input


@dataclass
class TourSetupDraft:
    """Setup form contents before they become a Tour."""

    name: str = ""
    duration_days: int = 1
    cities: list[str] = field(default_factory=list)
    tour_type: TourType = TourType.custom
    description: str = ""
    code: str = ""
    is_template: bool = False


@dataclass(frozen=True)
class PricingSnapshot:
    """Published pricing result.

    breakdown is only set when status is ready; message explains skipped
    and unavailable results.
    """

    status: PricingStatus
    generation: int
    breakdown: CostBreakdown | None = None
    message: str | None = None
    computed_at: datetime = field(default_factory=lambda: datetime.now())

    @property
    def grand_total(self) -> float | None:
        return self.breakdown.totals.grand_total if self.breakdown else None
