"""Integration tests for the /rates endpoint."""

from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient

from backend.app.api.deps import get_rate_catalog
from backend.app.main import app
from backend.app.rates.catalog import InMemoryRateCatalog


@pytest.fixture
def client(fixture_catalog: InMemoryRateCatalog) -> Generator[TestClient, None, None]:
    app.dependency_overrides[get_rate_catalog] = lambda: fixture_catalog
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestListRates:
    """Test GET /rates."""

    def test_records_carry_kind_tag(self, client: TestClient) -> None:
        response = client.get("/rates", params={"kind": "accommodation", "city": "Luxor"})

        assert response.status_code == 200
        records = response.json()
        assert [r["id"] for r in records] == ["acc-lxr-001"]
        assert records[0]["kind"] == "accommodation"
        assert records[0]["price_tier_a"] == 140

    def test_meal_type_filter(self, client: TestClient) -> None:
        response = client.get(
            "/rates", params={"kind": "meal", "city": "cairo", "meal_type": "lunch"}
        )

        assert [r["id"] for r in response.json()] == ["meal-cai-lunch-001"]

    def test_vehicle_party_filter(self, client: TestClient) -> None:
        response = client.get(
            "/rates", params={"kind": "transportation", "city": "Cairo", "party_size": 10}
        )

        assert [r["id"] for r in response.json()] == ["trn-cai-van"]

    def test_unknown_city_is_empty(self, client: TestClient) -> None:
        response = client.get("/rates", params={"kind": "guide", "city": "Siwa"})

        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.parametrize(
        "params",
        [
            {"kind": "guide"},
            {"kind": "helicopter", "city": "Cairo"},
            {"kind": "transportation", "city": "Cairo", "party_size": 0},
        ],
    )
    def test_invalid_query_is_422(self, client: TestClient, params: dict[str, object]) -> None:
        assert client.get("/rates", params=params).status_code == 422
