"""Shared pytest fixtures for all test suites."""

from collections.abc import Callable, Generator

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from backend.app.db.models import Base
from backend.app.models import (
    AccommodationRate,
    Activity,
    EntranceFeeRate,
    GuideRate,
    MealRate,
    MealType,
    ServiceFeeRate,
    Tour,
    TourDay,
    TransportationRate,
)
from backend.app.models.common import AllocationKind
from backend.app.rates.catalog import InMemoryRateCatalog, load_fixture_catalog


@pytest.fixture
def sqlite_session() -> Generator[Session, None, None]:
    """In-memory SQLite session with all tables created.

    Usage:
        def test_something(sqlite_session):
            repo = SqlTourRepository(sqlite_session)
    """
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)

    with Session(engine, expire_on_commit=False) as session:
        yield session

    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def fixture_catalog() -> InMemoryRateCatalog:
    """Catalog loaded from the bundled rates fixture."""
    return load_fixture_catalog()


@pytest.fixture
def hotel() -> AccommodationRate:
    return AccommodationRate(
        id="acc-1", city="Cairo", property_name="Nile Hotel", price_tier_a=100, price_tier_b=120
    )


@pytest.fixture
def lunch() -> MealRate:
    return MealRate(
        id="lunch-1", city="Cairo", meal_type=MealType.lunch, price_tier_a=15, price_tier_b=18
    )


@pytest.fixture
def dinner() -> MealRate:
    return MealRate(
        id="dinner-1", city="Cairo", meal_type=MealType.dinner, price_tier_a=35, price_tier_b=40
    )


@pytest.fixture
def guide() -> GuideRate:
    return GuideRate(id="guide-1", city="Cairo", price_tier_a=50, price_tier_b=60)


@pytest.fixture
def entrance() -> EntranceFeeRate:
    return EntranceFeeRate(
        id="ent-1", city="Cairo", attraction_name="Pyramids", price_tier_a=13, price_tier_b=16
    )


@pytest.fixture
def van() -> TransportationRate:
    return TransportationRate(
        id="van-1",
        city="Cairo",
        vehicle_type="Van",
        capacity_min=3,
        capacity_max=14,
        price_tier_a=55,
        price_tier_b=65,
    )


@pytest.fixture
def water_service() -> ServiceFeeRate:
    return ServiceFeeRate(
        id="svc-water",
        city="Cairo",
        service_name="Water",
        allocation=AllocationKind.per_vehicle,
        price_tier_a=20,
        price_tier_b=22,
    )


@pytest.fixture
def porter_service() -> ServiceFeeRate:
    return ServiceFeeRate(
        id="svc-porter",
        city="Cairo",
        service_name="Porter",
        allocation=AllocationKind.per_person,
        price_tier_a=5,
        price_tier_b=6,
    )


@pytest.fixture
def full_day(
    hotel: AccommodationRate,
    lunch: MealRate,
    dinner: MealRate,
    guide: GuideRate,
    entrance: EntranceFeeRate,
    van: TransportationRate,
) -> TourDay:
    """Day 1 in Cairo with every slot and one activity filled."""
    return TourDay(
        day_number=1,
        city="Cairo",
        accommodation=hotel,
        lunch=lunch,
        dinner=dinner,
        guide=guide,
        activities=[Activity(order=1, entrances=[entrance], transportation=van)],
    )


@pytest.fixture
def full_tour(full_day: TourDay) -> Tour:
    """One-day tour whose tier A price for 10 travelers is 1235."""
    return Tour(
        code="TOUR-CAIRO-1D-0001",
        name="Cairo Highlights",
        duration_days=1,
        cities=["Cairo"],
        days=[full_day],
    )


@pytest.fixture
def tour_factory() -> Callable[..., Tour]:
    """Factory for tours of blank days.

    Usage:
        def test_something(tour_factory):
            tour = tour_factory(days=3, cities=["Cairo", "Luxor"])
    """

    def _make(days: int = 3, cities: list[str] | None = None, code: str = "") -> Tour:
        cities = cities or ["Cairo"]
        return Tour(
            code=code,
            name="Test Tour",
            duration_days=days,
            cities=cities,
            days=[TourDay(day_number=n, city=cities[0]) for n in range(1, days + 1)],
        )

    return _make
