"""SQLAlchemy ORM models for saved tours.

Selected rate records are stored as JSON value copies, so a saved tour keeps
the prices it was built with even if the catalog changes later.
"""

import uuid
from datetime import datetime
from typing import Any

from sqlalchemy import (
    JSON,
    Boolean,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    Text,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


class TourRow(Base):
    """Tour table - header fields of a saved tour."""

    __tablename__ = "tour"
    __table_args__ = (UniqueConstraint("tour_code", name="uq_tour_code"),)

    tour_id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    tour_code: Mapped[str] = mapped_column(Text, nullable=False)
    tour_name: Mapped[str] = mapped_column(Text, nullable=False)
    duration_days: Mapped[int] = mapped_column(Integer, nullable=False)
    cities: Mapped[list[str]] = mapped_column(JSON, nullable=False)
    tour_type: Mapped[str] = mapped_column(Text, nullable=False)
    is_template: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    # Pricing inputs chosen in the builder, kept even when no breakdown was saved
    party_size: Mapped[int] = mapped_column(Integer, nullable=False)
    price_tier: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=datetime.now, nullable=False
    )

    # Relationships
    days: Mapped[list["TourDayRow"]] = relationship(
        "TourDayRow",
        back_populates="tour",
        cascade="all, delete-orphan",
        order_by="TourDayRow.day_number",
    )
    pricing: Mapped[list["TourPricingRow"]] = relationship(
        "TourPricingRow", back_populates="tour", cascade="all, delete-orphan"
    )


class TourDayRow(Base):
    """Tour day table - one row per day with its slot selections."""

    __tablename__ = "tour_day"
    __table_args__ = (
        UniqueConstraint("tour_id", "day_number", name="uq_tour_day_number"),
        Index("idx_tour_day_tour", "tour_id"),
    )

    day_id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    tour_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("tour.tour_id", ondelete="CASCADE"), nullable=False
    )
    day_number: Mapped[int] = mapped_column(Integer, nullable=False)
    city: Mapped[str] = mapped_column(Text, nullable=False, default="")
    accommodation: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)
    breakfast_included: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    lunch: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)
    dinner: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)
    guide_required: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    guide: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)
    additional_services: Mapped[list[dict[str, Any]]] = mapped_column(
        JSON, nullable=False, default=list
    )
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Relationships
    tour: Mapped["TourRow"] = relationship("TourRow", back_populates="days")
    activities: Mapped[list["TourDayActivityRow"]] = relationship(
        "TourDayActivityRow",
        back_populates="day",
        cascade="all, delete-orphan",
        order_by="TourDayActivityRow.activity_order",
    )


class TourDayActivityRow(Base):
    """Tour day activity table - ordered activities of a day."""

    __tablename__ = "tour_day_activity"
    __table_args__ = (Index("idx_activity_day", "day_id", "activity_order"),)

    activity_id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    day_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("tour_day.day_id", ondelete="CASCADE"), nullable=False
    )
    activity_order: Mapped[int] = mapped_column(Integer, nullable=False)
    entrances: Mapped[list[dict[str, Any]]] = mapped_column(JSON, nullable=False, default=list)
    transportation: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)
    activity_notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Relationships
    day: Mapped["TourDayRow"] = relationship("TourDayRow", back_populates="activities")


class TourPricingRow(Base):
    """Tour pricing table - breakdown totals a tour was saved with."""

    __tablename__ = "tour_pricing"
    __table_args__ = (Index("idx_pricing_tour", "tour_id"),)

    pricing_id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    tour_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("tour.tour_id", ondelete="CASCADE"), nullable=False
    )
    party_size: Mapped[int] = mapped_column(Integer, nullable=False)
    tier: Mapped[str] = mapped_column(Text, nullable=False)
    total_accommodation: Mapped[float] = mapped_column(Float, nullable=False)
    total_meals: Mapped[float] = mapped_column(Float, nullable=False)
    total_guides: Mapped[float] = mapped_column(Float, nullable=False)
    total_transportation: Mapped[float] = mapped_column(Float, nullable=False)
    total_entrances: Mapped[float] = mapped_column(Float, nullable=False)
    total_additional_services: Mapped[float] = mapped_column(Float, nullable=False)
    grand_total: Mapped[float] = mapped_column(Float, nullable=False)
    per_person_total: Mapped[float] = mapped_column(Float, nullable=False)
    # Full per-day breakdown as computed at save time
    breakdown: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False)
    calculated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=datetime.now, nullable=False
    )

    # Relationships
    tour: Mapped["TourRow"] = relationship("TourRow", back_populates="pricing")
