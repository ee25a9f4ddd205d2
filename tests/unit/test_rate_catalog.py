"""Unit tests for the rate catalog and per-day snapshots."""

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from backend.app.models import (
    AccommodationRate,
    MealType,
    RateKind,
    RateRecord,
    TransportationRate,
)
from backend.app.rates.catalog import (
    InMemoryRateCatalog,
    RateSnapshotCache,
    load_fixture_catalog,
    meals_of_type,
    vehicles_for_party,
)


class TestFixtureCatalog:
    """Test the bundled fixture."""

    def test_cities(self, fixture_catalog: InMemoryRateCatalog) -> None:
        assert fixture_catalog.cities() == ["Aswan", "Cairo", "Luxor"]

    def test_fetch_by_kind_and_city(self, fixture_catalog: InMemoryRateCatalog) -> None:
        hotels = fixture_catalog.fetch_rates(RateKind.accommodation, "Cairo")

        assert [h.id for h in hotels] == ["acc-cai-001", "acc-cai-002"]
        assert all(isinstance(h, AccommodationRate) for h in hotels)

    def test_city_match_ignores_case_and_spaces(
        self, fixture_catalog: InMemoryRateCatalog
    ) -> None:
        assert len(fixture_catalog.fetch_rates(RateKind.service_fee, "  cairo ")) == 3

    def test_unknown_city_is_empty(self, fixture_catalog: InMemoryRateCatalog) -> None:
        assert fixture_catalog.fetch_rates(RateKind.guide, "Siwa") == []

    def test_custom_path(self, tmp_path: Path) -> None:
        path = tmp_path / "rates.json"
        path.write_text(
            json.dumps(
                {
                    "records": [
                        {
                            "kind": "guide",
                            "id": "g1",
                            "city": "Siwa",
                            "base_rate_eur": 40,
                            "base_rate_non_eur": 48,
                        }
                    ]
                }
            )
        )

        catalog = load_fixture_catalog(path)

        assert [r.id for r in catalog.fetch_rates(RateKind.guide, "Siwa")] == ["g1"]

    def test_invalid_record_rejected(self, tmp_path: Path) -> None:
        path = tmp_path / "rates.json"
        path.write_text(json.dumps({"records": [{"kind": "guide", "id": "g1", "city": "Siwa"}]}))

        with pytest.raises(ValidationError):
            load_fixture_catalog(path)


class TestFilters:
    """Test meal and vehicle filters."""

    def test_meals_of_type(self, fixture_catalog: InMemoryRateCatalog) -> None:
        meals = fixture_catalog.fetch_rates(RateKind.meal, "Cairo")

        assert [m.id for m in meals_of_type(meals, MealType.dinner)] == ["meal-cai-dinner-001"]

    def test_vehicles_for_party(self, fixture_catalog: InMemoryRateCatalog) -> None:
        vehicles = fixture_catalog.fetch_rates(RateKind.transportation, "Cairo")

        assert {v.id for v in vehicles_for_party(vehicles, 2)} == {
            "trn-cai-sedan",
            "trn-cai-van",
        }
        assert [v.id for v in vehicles_for_party(vehicles, 12)] == ["trn-cai-van"]
        assert vehicles_for_party(vehicles, 20) == []

    def test_vehicle_filter_ignores_other_kinds(self, van: TransportationRate) -> None:
        hotel = AccommodationRate(id="h", city="Cairo", price_tier_a=1, price_tier_b=1)

        assert vehicles_for_party([hotel, van], 4) == [van]


class _CountingCatalog:
    def __init__(self, records: list[RateRecord]) -> None:
        self._inner = InMemoryRateCatalog(records)
        self.calls = 0

    def fetch_rates(self, kind: RateKind, city: str) -> list[RateRecord]:
        self.calls += 1
        return self._inner.fetch_rates(kind, city)


class TestRateSnapshotCache:
    """Test per-day catalog snapshots."""

    def test_repeat_reads_hit_snapshot(self, van: TransportationRate) -> None:
        catalog = _CountingCatalog([van])
        cache = RateSnapshotCache(catalog)

        first = cache.get(0, "Cairo", RateKind.transportation)
        second = cache.get(0, "Cairo", RateKind.transportation)

        assert first == [van]
        assert second is first
        assert catalog.calls == 1

    def test_each_kind_queried_once(self, van: TransportationRate) -> None:
        catalog = _CountingCatalog([van])
        cache = RateSnapshotCache(catalog)

        cache.get(0, "Cairo", RateKind.transportation)
        cache.get(0, "Cairo", RateKind.guide)
        cache.get(0, "Cairo", RateKind.guide)

        assert catalog.calls == 2

    def test_city_change_requeries(self, van: TransportationRate) -> None:
        catalog = _CountingCatalog([van])
        cache = RateSnapshotCache(catalog)

        cache.get(0, "Cairo", RateKind.transportation)
        assert cache.get(0, "Luxor", RateKind.transportation) == []
        assert cache.get(0, "Cairo", RateKind.transportation) == [van]

        assert catalog.calls == 3

    def test_days_are_independent(self, van: TransportationRate) -> None:
        catalog = _CountingCatalog([van])
        cache = RateSnapshotCache(catalog)

        cache.get(0, "Cairo", RateKind.transportation)
        cache.get(1, "Cairo", RateKind.transportation)
        cache.clear()
        cache.get(0, "Cairo", RateKind.transportation)

        assert catalog.calls == 3
