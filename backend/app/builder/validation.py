"""Setup-stage validation and tour code generation."""

import re
from datetime import datetime

from backend.app.builder.state import TourSetupDraft
from backend.app.models.violations import FieldViolation


class SetupValidationError(ValueError):
    """Setup fields are invalid; carries every violation, not just the first."""

    def __init__(self, violations: list[FieldViolation]) -> None:
        self.violations = violations
        fields = ", ".join(v.field for v in violations)
        super().__init__(f"Invalid tour setup: {fields}")

    @property
    def fields(self) -> list[str]:
        return [v.field for v in self.violations]


def parse_cities(text: str) -> list[str]:
    """Split a comma-separated city list, dropping blanks."""
    return [city.strip() for city in text.split(",") if city.strip()]


def collect_setup_violations(
    draft: TourSetupDraft, party_size: int, max_duration_days: int = 30
) -> list[FieldViolation]:
    """Check every setup field and return all violations found.

    Args:
        draft: Setup form contents
        party_size: Number of travelers
        max_duration_days: Upper bound on tour length

    Returns:
        Violations in field order (empty when the setup is valid)
    """
    violations: list[FieldViolation] = []

    if not draft.name.strip():
        violations.append(
            FieldViolation(field="name", code="NAME_REQUIRED", message="Tour name is required")
        )

    if draft.duration_days < 1:
        violations.append(
            FieldViolation(
                field="duration_days",
                code="DURATION_TOO_SHORT",
                message="Duration must be at least 1 day",
            )
        )
    elif draft.duration_days > max_duration_days:
        violations.append(
            FieldViolation(
                field="duration_days",
                code="DURATION_TOO_LONG",
                message=f"Duration cannot exceed {max_duration_days} days",
            )
        )

    if not [c for c in draft.cities if c.strip()]:
        violations.append(
            FieldViolation(
                field="cities", code="CITIES_REQUIRED", message="At least one city is required"
            )
        )

    if party_size < 1:
        violations.append(
            FieldViolation(
                field="party_size",
                code="PARTY_SIZE_TOO_SMALL",
                message="At least 1 passenger is required",
            )
        )

    return violations


def validate_setup(draft: TourSetupDraft, party_size: int, max_duration_days: int = 30) -> None:
    """Raise SetupValidationError if any setup field is invalid."""
    violations = collect_setup_violations(draft, party_size, max_duration_days)
    if violations:
        raise SetupValidationError(violations)


def generate_tour_code(
    name: str, duration_days: int, *, prefix: str = "TOUR", now: datetime | None = None
) -> str:
    """Build a tour code like TOUR-NILECL-8D-1234.

    The name part keeps the first six alphanumerics; the suffix is the last
    four digits of the millisecond timestamp.
    """
    name_code = re.sub(r"[^A-Z0-9]", "", name.upper())[:6]
    millis = int((now or datetime.now()).timestamp() * 1000)
    return f"{prefix}-{name_code}-{duration_days}D-{str(millis)[-4:]}"
