"""Unit tests for setup validation and tour code generation."""

from datetime import datetime

import pytest

from backend.app.builder.state import TourSetupDraft
from backend.app.builder.validation import (
    SetupValidationError,
    collect_setup_violations,
    generate_tour_code,
    parse_cities,
    validate_setup,
)


def _valid_draft() -> TourSetupDraft:
    return TourSetupDraft(name="Nile Classic", duration_days=8, cities=["Cairo", "Luxor"])


class TestCollectSetupViolations:
    """Test setup field checks."""

    def test_valid_setup_has_no_violations(self) -> None:
        assert collect_setup_violations(_valid_draft(), party_size=2) == []

    def test_reports_every_violation(self) -> None:
        draft = TourSetupDraft(name="  ", duration_days=0, cities=[])

        violations = collect_setup_violations(draft, party_size=0)

        assert [v.field for v in violations] == ["name", "duration_days", "cities", "party_size"]
        assert [v.code for v in violations] == [
            "NAME_REQUIRED",
            "DURATION_TOO_SHORT",
            "CITIES_REQUIRED",
            "PARTY_SIZE_TOO_SMALL",
        ]

    def test_duration_upper_bound(self) -> None:
        draft = _valid_draft()
        draft.duration_days = 31

        violations = collect_setup_violations(draft, party_size=2)

        assert len(violations) == 1
        assert violations[0].code == "DURATION_TOO_LONG"
        assert "30" in violations[0].message

    def test_configurable_upper_bound(self) -> None:
        draft = _valid_draft()
        draft.duration_days = 12

        violations = collect_setup_violations(draft, party_size=2, max_duration_days=10)

        assert [v.code for v in violations] == ["DURATION_TOO_LONG"]

    def test_blank_city_entries_do_not_count(self) -> None:
        draft = _valid_draft()
        draft.cities = ["", "  "]

        assert [v.field for v in collect_setup_violations(draft, party_size=2)] == ["cities"]


class TestValidateSetup:
    """Test the raising wrapper."""

    def test_raises_with_all_fields(self) -> None:
        draft = TourSetupDraft(name="", duration_days=3, cities=[])

        with pytest.raises(SetupValidationError) as exc_info:
            validate_setup(draft, party_size=2)

        assert exc_info.value.fields == ["name", "cities"]
        assert isinstance(exc_info.value, ValueError)

    def test_passes_for_valid_setup(self) -> None:
        validate_setup(_valid_draft(), party_size=1)


class TestParseCities:
    """Test comma-separated city input."""

    def test_splits_and_strips(self) -> None:
        assert parse_cities(" Cairo, Luxor ,, Aswan ") == ["Cairo", "Luxor", "Aswan"]

    def test_empty(self) -> None:
        assert parse_cities("  ") == []


class TestGenerateTourCode:
    """Test tour code format."""

    def test_format(self) -> None:
        now = datetime.fromtimestamp(1_700_000_001.5)

        code = generate_tour_code("Nile Classic!", 8, now=now)

        assert code == "TOUR-NILECL-8D-1500"

    def test_prefix(self) -> None:
        now = datetime.fromtimestamp(1_700_000_000.5)

        code = generate_tour_code("Oasis", 3, prefix="EG", now=now)

        assert code.startswith("EG-OASIS-3D-")
        assert len(code.rsplit("-", 1)[1]) == 4
