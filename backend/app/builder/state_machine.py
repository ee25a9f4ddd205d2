"""Itinerary builder - staged tour assembly with reactive pricing.

The builder walks a tour through three stages (setup -> planning -> review),
owns the Tour value, and re-runs the cost engine after every change to the
days, party size, or price tier. Runs are debounced: a burst of edits
produces a single computation once the quiet period has elapsed.
"""

import dataclasses
import logging
import time
from collections.abc import Callable
from typing import Any

from backend.app.adapters.export import TourExporter
from backend.app.builder.scheduler import DebouncedTask
from backend.app.builder.state import (
    BuilderStage,
    PricingSnapshot,
    PricingStatus,
    TourSetupDraft,
)
from backend.app.builder.validation import generate_tour_code, parse_cities, validate_setup
from backend.app.config import Settings, get_settings
from backend.app.db.repositories import SavedTour, TourRepository
from backend.app.itinerary import operations as ops
from backend.app.models.common import DaySlot, MealType, PriceTier, RateKind
from backend.app.models.itinerary import Tour
from backend.app.models.pricing import CostBreakdown
from backend.app.models.rates import (
    EntranceFeeRate,
    RateRecord,
    ServiceFeeRate,
    TransportationRate,
)
from backend.app.pricing.engine import InvalidInputError, compute_itinerary_cost
from backend.app.rates.catalog import (
    RateCatalog,
    RateSnapshotCache,
    meals_of_type,
    vehicles_for_party,
)

logger = logging.getLogger(__name__)

SKIPPED_MESSAGE = "Add accommodation, meals, guides, activities or services to see pricing"

PricingListener = Callable[[PricingSnapshot], None]


class StageTransitionError(RuntimeError):
    """Illegal stage step, or an operation not allowed in the current stage."""

    pass


# Metrics interface (PrometheusPricingMetrics implements it)
class PricingMetrics:
    """Interface for pricing metrics."""

    def record_run(self, outcome: str, latency_ms: float) -> None:
        """Record a finished pricing run."""
        pass

    def inc_superseded(self) -> None:
        """Increment superseded counter."""
        pass


# Logging interface
class PricingLogger:
    """Interface for structured pricing logs."""

    def log_run(
        self,
        tour_code: str,
        generation: int,
        outcome: str,
        latency_ms: float,
        grand_total: float | None = None,
        error_reason: str | None = None,
    ) -> None:
        """Log a pricing run."""
        pass


class ItineraryBuilder:
    """Stateful tour builder.

    Day edits are only accepted in the planning stage. Each accepted change
    schedules a pricing run; the result is published to subscribers as a
    PricingSnapshot.
    """

    def __init__(
        self,
        catalog: RateCatalog,
        *,
        settings: Settings | None = None,
        party_size: int | None = None,
        tier: PriceTier | None = None,
        debounce_seconds: float | None = None,
        metrics: PricingMetrics | None = None,
        pricing_logger: PricingLogger | None = None,
        loop: Any = None,
    ) -> None:
        """Initialize builder.

        Args:
            catalog: Rate catalog queried for day options
            settings: Settings (default: get_settings())
            party_size: Initial party size (default: settings.default_party_size)
            tier: Initial price tier (default: settings.default_price_tier)
            debounce_seconds: Quiet period before pricing (default:
                settings.pricing_debounce_ms); 0 prices inline on every change
            metrics: Metrics recorder (optional, defaults to no-op)
            pricing_logger: Structured logger (optional, defaults to no-op)
            loop: Event loop for the debounce timer (default: running loop)
        """
        settings = settings or get_settings()
        self._max_duration_days = settings.max_duration_days
        self._code_prefix = settings.tour_code_prefix

        self._rates = RateSnapshotCache(catalog)
        self._metrics = metrics or PricingMetrics()
        self._logger = pricing_logger or PricingLogger()

        self._stage = BuilderStage.setup
        self._draft = TourSetupDraft()
        self._tour: Tour | None = None
        self._party_size = party_size if party_size is not None else settings.default_party_size
        self._tier = tier or settings.default_price_tier

        self._snapshot = PricingSnapshot(status=PricingStatus.idle, generation=0)
        self._listeners: list[PricingListener] = []

        if debounce_seconds is None:
            debounce_seconds = settings.pricing_debounce_ms / 1000
        self._task = DebouncedTask(
            debounce_seconds,
            self._run_pricing,
            loop=loop,
            on_superseded=self._on_superseded,
        )

    # State accessors

    @property
    def stage(self) -> BuilderStage:
        return self._stage

    @property
    def draft(self) -> TourSetupDraft:
        """Copy of the setup draft."""
        return dataclasses.replace(self._draft, cities=list(self._draft.cities))

    @property
    def tour(self) -> Tour | None:
        return self._tour

    @property
    def party_size(self) -> int:
        return self._party_size

    @property
    def tier(self) -> PriceTier:
        return self._tier

    @property
    def pricing(self) -> PricingSnapshot:
        """Latest published pricing result."""
        return self._snapshot

    @property
    def pricing_pending(self) -> bool:
        return self._task.pending

    def subscribe(self, listener: PricingListener) -> Callable[[], None]:
        """Register a listener for pricing snapshots.

        Returns:
            Function that removes the listener
        """
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    # Stage transitions

    def update_setup(self, **changes: Any) -> TourSetupDraft:
        """Edit setup fields (name, duration_days, cities, tour_type, ...).

        Cities may be passed as a comma-separated string.

        Raises:
            StageTransitionError: If not in the setup stage
            TypeError: If a field name is unknown
        """
        self._require_stage(BuilderStage.setup, "edit the tour setup")

        cities = changes.get("cities")
        if isinstance(cities, str):
            changes["cities"] = parse_cities(cities)

        self._draft = dataclasses.replace(self._draft, **changes)
        return self.draft

    def start_planning(self) -> Tour:
        """Validate the setup and move to planning.

        Creates the tour on first entry. On re-entry the existing tour takes
        the edited header fields and is resized to the new duration, keeping
        the days that still fit.

        Raises:
            StageTransitionError: If not in the setup stage
            SetupValidationError: Listing every invalid setup field
        """
        self._require_stage(BuilderStage.setup, "start planning")
        validate_setup(self._draft, self._party_size, self._max_duration_days)

        draft = self._draft
        cities = [c.strip() for c in draft.cities if c.strip()]
        if not draft.code:
            draft.code = generate_tour_code(
                draft.name, draft.duration_days, prefix=self._code_prefix
            )

        header = {
            "code": draft.code,
            "name": draft.name.strip(),
            "cities": cities,
            "tour_type": draft.tour_type,
            "is_template": draft.is_template,
            "description": draft.description,
        }

        if self._tour is None:
            self._tour = Tour(
                duration_days=draft.duration_days,
                days=[ops.default_day(n, cities[0]) for n in range(1, draft.duration_days + 1)],
                **header,
            )
        else:
            # Day cities may have changed while in setup
            self._rates.clear()
            self._tour = ops.resize_days(
                self._tour.model_copy(update=header), draft.duration_days
            )

        self._stage = BuilderStage.planning
        logger.info("Planning tour %s (%d days)", draft.code, draft.duration_days)
        self._schedule_pricing()
        return self._tour

    def review(self) -> None:
        """Move from planning to review."""
        self._require_stage(BuilderStage.planning, "review the tour")
        self._stage = BuilderStage.review

    def back_to_setup(self) -> None:
        """Move from planning back to setup."""
        self._require_stage(BuilderStage.planning, "go back to setup")
        self._stage = BuilderStage.setup

    def back_to_planning(self) -> None:
        """Move from review back to planning."""
        self._require_stage(BuilderStage.review, "go back to planning")
        self._stage = BuilderStage.planning

    # Pricing inputs

    def set_party_size(self, party_size: int) -> None:
        """Change the number of travelers and reprice."""
        if party_size == self._party_size:
            return
        self._party_size = party_size
        self._schedule_pricing()

    def set_tier(self, tier: PriceTier) -> None:
        """Switch the price column and reprice."""
        if tier == self._tier:
            return
        self._tier = tier
        self._schedule_pricing()

    # Day editing (planning stage only)

    def set_day_city(self, day_index: int, city: str) -> None:
        self._edit(ops.set_day_city, day_index, city)

    def select_slot(self, day_index: int, slot: DaySlot, record: RateRecord | None) -> None:
        """Fill or clear accommodation, lunch, dinner, or guide."""
        self._edit(ops.replace_day_slot, day_index, slot, record)

    def set_guide_required(self, day_index: int, required: bool) -> None:
        self._edit(ops.set_guide_required, day_index, required)

    def set_breakfast_included(self, day_index: int, included: bool) -> None:
        self._edit(ops.set_breakfast_included, day_index, included)

    def set_day_notes(self, day_index: int, notes: str) -> None:
        self._edit(ops.set_day_notes, day_index, notes)

    def add_activity(self, day_index: int, notes: str = "") -> None:
        self._edit(ops.add_activity, day_index, notes)

    def remove_activity(self, day_index: int, activity_index: int) -> None:
        self._edit(ops.remove_activity, day_index, activity_index)

    def reorder_activity(self, day_index: int, from_index: int, to_index: int) -> None:
        self._edit(ops.reorder_activity, day_index, from_index, to_index)

    def toggle_entrance(
        self, day_index: int, activity_index: int, entrance: EntranceFeeRate
    ) -> None:
        self._edit(ops.toggle_entrance, day_index, activity_index, entrance)

    def set_activity_transportation(
        self, day_index: int, activity_index: int, vehicle: TransportationRate | None
    ) -> None:
        self._edit(ops.set_activity_transportation, day_index, activity_index, vehicle)

    def set_activity_notes(self, day_index: int, activity_index: int, notes: str) -> None:
        self._edit(ops.set_activity_notes, day_index, activity_index, notes)

    def toggle_service(
        self, day_index: int, service: ServiceFeeRate | TransportationRate
    ) -> None:
        self._edit(ops.toggle_service, day_index, service)

    def set_service_quantity(self, day_index: int, service_id: str, quantity: int) -> None:
        self._edit(ops.set_service_quantity, day_index, service_id, quantity)

    def clear_day(self, day_index: int) -> None:
        self._edit(ops.clear_day, day_index)

    def copy_day_to_all(self, source_index: int) -> None:
        self._edit(ops.copy_day_to_all, source_index)

    # Catalog access

    def available_rates(
        self, day_index: int, kind: RateKind, meal_type: MealType | None = None
    ) -> list[RateRecord]:
        """Catalog options for a day, from the day's rate snapshot.

        Meals can be narrowed to a meal type. Vehicles are limited to those
        seating the whole party.

        Raises:
            StageTransitionError: If the tour has not been created yet
            IndexError: If day_index is out of range
        """
        tour = self._require_tour()
        if not 0 <= day_index < len(tour.days):
            raise IndexError(f"day index {day_index} out of range (0..{len(tour.days) - 1})")

        city = tour.days[day_index].city or tour.first_city
        records = self._rates.get(day_index, city, kind)

        if kind == RateKind.meal and meal_type is not None:
            return meals_of_type(records, meal_type)
        if kind == RateKind.transportation:
            return vehicles_for_party(records, self._party_size)
        return list(records)

    # Pricing

    def recompute_now(self) -> PricingSnapshot:
        """Run pricing immediately, replacing any pending debounced run."""
        if not self._task.flush():
            self._run_pricing(self._task.generation)
        return self._snapshot

    def close(self) -> None:
        """Drop any pending pricing run."""
        self._task.cancel()

    # Persistence and export

    def save(self, repository: TourRepository) -> SavedTour:
        """Persist the tour from the review stage.

        The breakdown is recomputed at save time; it is None when no day
        has anything selected or the party size cannot be priced.

        Raises:
            StageTransitionError: If not in the review stage
            TourSaveError: If the repository rejects the tour
        """
        self._require_stage(BuilderStage.review, "save the tour")
        tour = self._require_tour()
        breakdown = self._fresh_breakdown(tour)

        saved = repository.save_tour(tour, self._party_size, self._tier, breakdown)
        logger.info("Saved tour %s as %s", saved.tour_code, saved.tour_id)
        return saved

    def export(self, exporter: TourExporter) -> Any:
        """Hand the tour and its pricing to an exporter.

        Raises:
            StageTransitionError: If the tour has not been created yet
        """
        tour = self._require_tour()
        return exporter.export(tour, self._party_size, self._tier, self._fresh_breakdown(tour))

    # Internals

    def _require_stage(self, stage: BuilderStage, action: str) -> None:
        if self._stage != stage:
            raise StageTransitionError(
                f"Cannot {action} in the {self._stage.value} stage (requires {stage.value})"
            )

    def _require_tour(self) -> Tour:
        if self._tour is None:
            raise StageTransitionError("Tour has not been created; complete the setup first")
        return self._tour

    def _edit(self, fn: Callable[..., Tour], *args: Any) -> None:
        self._require_stage(BuilderStage.planning, "edit days")
        tour = self._require_tour()

        updated = fn(tour, *args)
        if updated == tour:
            return
        self._tour = updated
        self._schedule_pricing()

    def _fresh_breakdown(self, tour: Tour) -> CostBreakdown | None:
        if not ops.has_pricing_data(tour):
            return None
        try:
            return compute_itinerary_cost(tour, self._party_size, self._tier)
        except InvalidInputError as e:
            logger.warning("Pricing unavailable for tour %s: %s", tour.code, e)
            return None

    def _schedule_pricing(self) -> None:
        if self._tour is None:
            return
        self._task.schedule()

    def _on_superseded(self, token: int) -> None:
        self._metrics.inc_superseded()

    def _run_pricing(self, token: int) -> None:
        tour = self._tour
        if tour is None:
            return

        start = time.monotonic()
        error_reason: str | None = None

        if not ops.has_pricing_data(tour):
            snapshot = PricingSnapshot(
                status=PricingStatus.skipped, generation=token, message=SKIPPED_MESSAGE
            )
        else:
            try:
                breakdown = compute_itinerary_cost(tour, self._party_size, self._tier)
                snapshot = PricingSnapshot(
                    status=PricingStatus.ready, generation=token, breakdown=breakdown
                )
            except InvalidInputError as e:
                error_reason = str(e)
                snapshot = PricingSnapshot(
                    status=PricingStatus.unavailable, generation=token, message=error_reason
                )

        latency_ms = (time.monotonic() - start) * 1000
        self._metrics.record_run(snapshot.status.value, latency_ms)
        self._logger.log_run(
            tour.code,
            token,
            snapshot.status.value,
            latency_ms,
            grand_total=snapshot.grand_total,
            error_reason=error_reason,
        )
        self._publish(snapshot)

    def _publish(self, snapshot: PricingSnapshot) -> None:
        self._snapshot = snapshot
        for listener in list(self._listeners):
            if self._snapshot is not snapshot:
                break  # A listener triggered a newer run that was already delivered
            listener(snapshot)
