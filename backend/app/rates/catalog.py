"""Rate catalog adapters.

The catalog is an external collaborator: the builder only queries it for
resolved records by kind and city and keeps the results as a snapshot.
"""

import json
import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from pydantic import TypeAdapter

from backend.app.models.common import MealType, RateKind
from backend.app.models.rates import MealRate, RateRecord, TransportationRate

logger = logging.getLogger(__name__)

FIXTURES_DIR = Path(__file__).parent.parent / "fixtures"

_records_adapter: TypeAdapter[list[RateRecord]] = TypeAdapter(list[RateRecord])


class RateCatalog(Protocol):
    """Query interface of the rate catalog."""

    def fetch_rates(self, kind: RateKind, city: str) -> list[RateRecord]:
        """Return the records of one kind offered in a city."""
        ...


class InMemoryRateCatalog:
    """In-memory implementation of RateCatalog."""

    def __init__(self, records: Iterable[RateRecord] = ()) -> None:
        self._records: list[RateRecord] = list(records)

    def add(self, record: RateRecord) -> None:
        """Register one more record."""
        self._records.append(record)

    def fetch_rates(self, kind: RateKind, city: str) -> list[RateRecord]:
        """Return records matching kind and city (case-insensitive)."""
        city_key = city.strip().lower()
        return [
            r for r in self._records if r.kind == kind.value and r.city.lower() == city_key
        ]

    def cities(self) -> list[str]:
        """Distinct cities with at least one record, sorted."""
        return sorted({r.city for r in self._records})


def load_fixture_catalog(path: Path | str | None = None) -> InMemoryRateCatalog:
    """Load a catalog from a JSON fixture.

    Args:
        path: Fixture file (default: bundled fixtures/rates.json). The file
            holds {"records": [...]} where each record has a "kind" tag.

    Returns:
        InMemoryRateCatalog with every record validated
    """
    fixture_path = Path(path) if path else FIXTURES_DIR / "rates.json"
    with open(fixture_path) as f:
        data = json.load(f)

    records = _records_adapter.validate_python(data.get("records", []))
    logger.info("Loaded %d rate records from %s", len(records), fixture_path)
    return InMemoryRateCatalog(records)


def meals_of_type(records: Iterable[RateRecord], meal_type: MealType) -> list[RateRecord]:
    """Keep meal records serving the given meal."""
    return [r for r in records if isinstance(r, MealRate) and r.meal_type == meal_type]


def vehicles_for_party(records: Iterable[RateRecord], party_size: int) -> list[RateRecord]:
    """Keep vehicles large enough for the party."""
    return [r for r in records if isinstance(r, TransportationRate) and r.fits_party(party_size)]


@dataclass
class DayRateSnapshot:
    """Catalog results cached for one day's city."""

    city: str
    by_kind: dict[RateKind, list[RateRecord]] = field(default_factory=dict)


class RateSnapshotCache:
    """Per-day catalog snapshots, re-queried only when the day's city changes."""

    def __init__(self, catalog: RateCatalog) -> None:
        self._catalog = catalog
        self._days: dict[int, DayRateSnapshot] = {}

    def get(self, day_index: int, city: str, kind: RateKind) -> list[RateRecord]:
        """Return cached records for a day, querying the catalog on a miss."""
        snapshot = self._days.get(day_index)
        if snapshot is None or snapshot.city != city:
            snapshot = DayRateSnapshot(city=city)
            self._days[day_index] = snapshot

        if kind not in snapshot.by_kind:
            snapshot.by_kind[kind] = list(self._catalog.fetch_rates(kind, city))
        return snapshot.by_kind[kind]

    def clear(self) -> None:
        """Drop all snapshots."""
        self._days.clear()
