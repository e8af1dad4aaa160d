"""
Vidly Backend — Genre SQLAlchemy Model
=======================================

What:  ORM model for the `genres` table.
Who:   Used by GenreService and, through snapshots, by MovieService.

Table Design Rationale:
    - String(24) primary key: ObjectId hex minted by the application
    - name: 3-50 characters (enforced by the request schema, bounded here)
    - Index on name: lists are always sorted by name
"""

from sqlalchemy import Index, String
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base
from app.identifiers import new_object_id


class Genre(Base):
    """A movie genre. Movies copy {_id, name} from here at write time."""

    __tablename__ = "genres"

    id: Mapped[str] = mapped_column(
        String(24),
        primary_key=True,
        default=new_object_id,
        comment="ObjectId hex string",
    )

    name: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        comment="Display name, 3-50 characters",
    )

    __table_args__ = (
        Index("idx_genres_name", "name"),
    )

    def __repr__(self) -> str:
        return f"<Genre(id={self.id}, name='{self.name}')>"
