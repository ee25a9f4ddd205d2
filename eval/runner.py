"""Eval runner - loads pricing scenarios and evaluates them against the engine."""

import sys
from pathlib import Path
from typing import Any

import yaml

from backend.app.models import (
    Activity,
    CostBreakdown,
    PriceTier,
    RateKind,
    SelectedService,
    Tour,
    TourDay,
)
from backend.app.models.rates import RateRecord
from backend.app.pricing.engine import compute_itinerary_cost
from backend.app.rates.catalog import FIXTURES_DIR, load_fixture_catalog

SCENARIOS_PATH = Path(__file__).parent / "scenarios.yaml"


def load_scenarios(path: Path = SCENARIOS_PATH) -> dict[str, Any]:
    """Load scenarios from YAML."""
    with open(path) as f:
        result: dict[str, Any] = yaml.safe_load(f)
        return result


def index_records(path: Path = FIXTURES_DIR / "rates.json") -> dict[str, RateRecord]:
    """Index fixture records by id."""
    catalog = load_fixture_catalog(path)
    index: dict[str, RateRecord] = {}
    for city in catalog.cities():
        for kind in RateKind:
            for record in catalog.fetch_rates(kind, city):
                index[record.id] = record
    return index


def _lookup(records: dict[str, RateRecord], record_id: str | None) -> RateRecord | None:
    if record_id is None:
        return None
    if record_id not in records:
        raise KeyError(f"Unknown rate record: {record_id}")
    return records[record_id]


def build_day_from_yaml(
    day_number: int, day_data: dict[str, Any], records: dict[str, RateRecord]
) -> TourDay:
    """Build a TourDay, resolving rate ids against the fixture."""
    activities = [
        Activity(
            order=i,
            entrances=[_lookup(records, e) for e in act.get("entrances", [])],
            transportation=_lookup(records, act.get("transportation")),
        )
        for i, act in enumerate(day_data.get("activities", []), start=1)
    ]
    services = [
        SelectedService(service=_lookup(records, s["id"]), quantity=s.get("quantity"))
        for s in day_data.get("services", [])
    ]
    return TourDay(
        day_number=day_number,
        city=day_data.get("city", ""),
        accommodation=_lookup(records, day_data.get("accommodation")),
        lunch=_lookup(records, day_data.get("lunch")),
        dinner=_lookup(records, day_data.get("dinner")),
        guide=_lookup(records, day_data.get("guide")),
        guide_required=day_data.get("guide_required", True),
        activities=activities,
        additional_services=services,
    )


def build_tour_from_yaml(tour_data: dict[str, Any], records: dict[str, RateRecord]) -> Tour:
    """Build a Tour from YAML data; duration follows the day list."""
    days = [
        build_day_from_yaml(n, day_data, records)
        for n, day_data in enumerate(tour_data.get("days", []), start=1)
    ]
    return Tour(
        code=tour_data.get("code", ""),
        name=tour_data["name"],
        duration_days=len(days),
        cities=tour_data["cities"],
        days=days,
    )


def evaluate_predicates(
    tour: Tour, breakdown: CostBreakdown, predicates: list[dict[str, str]]
) -> tuple[int, int]:
    """Evaluate predicates; return (passed, total)."""
    passed = 0
    total = len(predicates)
    env = {"tour": tour, "breakdown": breakdown, "len": len, "abs": abs, "round": round}

    for pred_data in predicates:
        predicate = pred_data["predicate"]
        description = pred_data.get("description", predicate)
        try:
            result = eval(predicate, {"__builtins__": {}}, env)
            if result:
                passed += 1
                print(f"  ✓ PASS: {description}")
            else:
                print(f"  ✗ FAIL: {description}")
        except (AttributeError, IndexError, KeyError, NameError, TypeError) as e:
            print(f"  ✗ ERROR: {description} - {e}")

    return passed, total


def main() -> int:
    """Run eval scenarios."""
    scenarios = load_scenarios()["scenarios"]
    records = index_records()

    total_passed = 0
    total_predicates = 0

    for scenario in scenarios:
        scenario_id = scenario["scenario_id"]
        description = scenario["description"]
        print(f"\n=== Scenario: {scenario_id} ===")
        print(f"Description: {description}")

        tour = build_tour_from_yaml(scenario["tour"], records)
        tier = PriceTier(scenario.get("tier", "tier_a"))
        breakdown = compute_itinerary_cost(tour, scenario["party_size"], tier)
        print(
            f"Grand total: {breakdown.totals.grand_total:.2f} "
            f"({breakdown.per_person:.2f} per person)"
        )

        predicates = scenario["must_satisfy"]
        passed, total = evaluate_predicates(tour, breakdown, predicates)
        total_passed += passed
        total_predicates += total

        print(f"Result: {passed}/{total} predicates passed")

    print("\n=== Summary ===")
    print(f"Total: {total_passed}/{total_predicates} predicates passed")

    if total_passed < total_predicates:
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
