"""Unit tests for tour repositories (SQL on in-memory SQLite, and in-memory)."""

from collections.abc import Callable

import pytest
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from backend.app.db.inmemory import InMemoryTourRepository
from backend.app.db.models import TourDayActivityRow, TourDayRow, TourPricingRow
from backend.app.db.repositories import TourSaveError
from backend.app.db.sql_repositories import SqlTourRepository
from backend.app.models import PriceTier, Tour
from backend.app.pricing.engine import compute_itinerary_cost

TourFactory = Callable[..., Tour]


class TestSqlTourRepository:
    """Test SqlTourRepository against SQLite."""

    def test_save_and_get_round_trip(self, sqlite_session: Session, full_tour: Tour) -> None:
        repo = SqlTourRepository(sqlite_session)
        breakdown = compute_itinerary_cost(full_tour, 10, PriceTier.tier_a)

        saved = repo.save_tour(full_tour, 10, PriceTier.tier_a, breakdown)

        assert saved.tour_code == "TOUR-CAIRO-1D-0001"
        assert saved.tour_name == "Cairo Highlights"

        stored = repo.get_tour("TOUR-CAIRO-1D-0001")
        assert stored is not None
        assert stored.tour_id == saved.tour_id
        assert stored.tour == full_tour
        assert stored.party_size == 10
        assert stored.tier == PriceTier.tier_a
        assert stored.breakdown == breakdown
        assert stored.breakdown is not None
        assert stored.breakdown.totals.grand_total == 1235

    def test_save_writes_child_rows(self, sqlite_session: Session, full_tour: Tour) -> None:
        repo = SqlTourRepository(sqlite_session)
        breakdown = compute_itinerary_cost(full_tour, 10, PriceTier.tier_a)

        repo.save_tour(full_tour, 10, PriceTier.tier_a, breakdown)

        assert sqlite_session.scalar(select(func.count()).select_from(TourDayRow)) == 1
        assert sqlite_session.scalar(select(func.count()).select_from(TourDayActivityRow)) == 1
        pricing = sqlite_session.scalars(select(TourPricingRow)).one()
        assert pricing.grand_total == 1235
        assert pricing.per_person_total == 123.5
        assert pricing.tier == "tier_a"

    def test_save_without_breakdown(
        self, sqlite_session: Session, tour_factory: TourFactory
    ) -> None:
        repo = SqlTourRepository(sqlite_session)
        tour = tour_factory(days=2, code="TOUR-DRAFT-2D-0001")

        repo.save_tour(tour, 4, PriceTier.tier_b, None)

        stored = repo.get_tour("TOUR-DRAFT-2D-0001")
        assert stored is not None
        assert stored.breakdown is None
        assert stored.party_size == 4
        assert stored.tier == PriceTier.tier_b
        assert [d.day_number for d in stored.tour.days] == [1, 2]

    def test_duplicate_code_rejected(self, sqlite_session: Session, full_tour: Tour) -> None:
        repo = SqlTourRepository(sqlite_session)
        repo.save_tour(full_tour, 10, PriceTier.tier_a, None)

        with pytest.raises(TourSaveError) as exc_info:
            repo.save_tour(full_tour, 10, PriceTier.tier_a, None)

        assert exc_info.value.duplicate is True
        # Session is usable after the rollback
        assert repo.get_tour(full_tour.code) is not None

    def test_empty_code_rejected(self, sqlite_session: Session, tour_factory: TourFactory) -> None:
        repo = SqlTourRepository(sqlite_session)

        with pytest.raises(TourSaveError) as exc_info:
            repo.save_tour(tour_factory(days=1), 2, PriceTier.tier_a, None)

        assert exc_info.value.duplicate is False

    def test_get_missing_returns_none(self, sqlite_session: Session) -> None:
        assert SqlTourRepository(sqlite_session).get_tour("NOPE") is None

    def test_list_newest_first_with_limit(
        self, sqlite_session: Session, full_tour: Tour, tour_factory: TourFactory
    ) -> None:
        repo = SqlTourRepository(sqlite_session)
        repo.save_tour(tour_factory(days=1, code="TOUR-A"), 2, PriceTier.tier_a, None)
        repo.save_tour(tour_factory(days=2, code="TOUR-B"), 2, PriceTier.tier_a, None)
        breakdown = compute_itinerary_cost(full_tour, 10, PriceTier.tier_a)
        repo.save_tour(full_tour, 10, PriceTier.tier_a, breakdown)

        summaries = repo.list_tours()

        assert [s.tour_code for s in summaries] == ["TOUR-CAIRO-1D-0001", "TOUR-B", "TOUR-A"]
        assert summaries[0].grand_total == 1235
        assert summaries[0].per_person == 123.5
        assert summaries[1].grand_total is None
        assert summaries[1].duration_days == 2

        assert len(repo.list_tours(limit=2)) == 2


class TestInMemoryTourRepository:
    """Test InMemoryTourRepository behaves like the SQL one."""

    def test_save_get_and_duplicate(self, full_tour: Tour) -> None:
        repo = InMemoryTourRepository()

        saved = repo.save_tour(full_tour, 10, PriceTier.tier_a, None)
        stored = repo.get_tour(full_tour.code)

        assert stored is not None
        assert stored.tour_id == saved.tour_id
        with pytest.raises(TourSaveError) as exc_info:
            repo.save_tour(full_tour, 10, PriceTier.tier_a, None)
        assert exc_info.value.duplicate is True

    def test_list_limit(self, tour_factory: TourFactory) -> None:
        repo = InMemoryTourRepository()
        for code in ("A", "B", "C"):
            repo.save_tour(tour_factory(days=1, code=code), 2, PriceTier.tier_a, None)

        assert len(repo.list_tours(limit=2)) == 2
        assert repo.get_tour("Z") is None
