"""Violation models - setup fields that block the move to planning."""

from pydantic import BaseModel


class FieldViolation(BaseModel):
    """A single invalid setup field.

    Every violated field is reported at once so a form can flag them all
    inline instead of one per submit.
    """

    field: str  # Setup field name, e.g. "duration_days"
    code: str  # Machine-usable short code, e.g. "DURATION_TOO_LONG"
    message: str  # Human-readable description
