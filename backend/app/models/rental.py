"""
Vidly Backend — Rental SQLAlchemy Model
========================================

What:  ORM model for the `rentals` table.
Who:   Written once by RentalService.create_rental; read by list/get.

Table Design Rationale:
    - customer / movie: JSON snapshots taken when the rental is created.
      They freeze the customer's name/phone and the movie's title/rate at
      that moment. No foreign keys: deleting the customer or movie later
      does not cascade and does not rewrite the snapshot.
    - date_out: set by the service at creation. UTCDateTime keeps it an
      aware UTC value on every backend.
    - date_returned / rental_fee: nullable; no route in this service sets
      them.
    - Index on date_out DESC: the list endpoint shows newest rentals first.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from sqlalchemy import JSON, Float, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base
from app.identifiers import new_object_id
from app.models.types import UTCDateTime


class Rental(Base):
    __tablename__ = "rentals"

    id: Mapped[str] = mapped_column(
        String(24),
        primary_key=True,
        default=new_object_id,
        comment="ObjectId hex string",
    )

    customer: Mapped[Dict[str, Any]] = mapped_column(
        JSON,
        nullable=False,
        comment="Embedded customer snapshot {_id, name, phone, isGold}",
    )

    movie: Mapped[Dict[str, Any]] = mapped_column(
        JSON,
        nullable=False,
        comment="Embedded movie snapshot {_id, title, dailyRentalRate}",
    )

    date_out: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    date_returned: Mapped[Optional[datetime]] = mapped_column(
        UTCDateTime(),
        nullable=True,
        default=None,
    )

    rental_fee: Mapped[Optional[float]] = mapped_column(
        Float,
        nullable=True,
        default=None,
    )

    __table_args__ = (
        Index("idx_rentals_date_out", date_out.desc()),
    )

    def __repr__(self) -> str:
        return f"<Rental(id={self.id}, date_out='{self.date_out}')>"
