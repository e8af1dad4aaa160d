"""
Vidly Backend — Movie SQLAlchemy Model
=======================================

What:  ORM model for the `movies` table.
Who:   Used by MovieService; RentalService reads and decrements stock.

Table Design Rationale:
    - genre: JSON document {"_id": ..., "name": ...} copied from the Genre
      row when the movie is written. There is deliberately no foreign key:
      renaming or deleting the genre later leaves this copy untouched.
    - number_in_stock: 0-255 on input; the rental path decrements it.
    - daily_rental_rate: 0-255 on input.
"""

from typing import Any, Dict

from sqlalchemy import JSON, Float, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base
from app.identifiers import new_object_id


class Movie(Base):
    """A rentable title with an embedded genre snapshot."""

    __tablename__ = "movies"

    id: Mapped[str] = mapped_column(
        String(24),
        primary_key=True,
        default=new_object_id,
        comment="ObjectId hex string",
    )

    title: Mapped[str] = mapped_column(String(255), nullable=False)

    # Snapshot, not a reference: see module docstring
    genre: Mapped[Dict[str, Any]] = mapped_column(
        JSON,
        nullable=False,
        comment="Embedded genre snapshot {_id, name}",
    )

    number_in_stock: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    daily_rental_rate: Mapped[float] = mapped_column(Float, nullable=False, default=0)

    __table_args__ = (
        Index("idx_movies_title", "title"),
    )

    def __repr__(self) -> str:
        return (
            f"<Movie(id={self.id}, title='{self.title}', "
            f"number_in_stock={self.number_in_stock})>"
        )
