"""
Vidly Backend — Customer SQLAlchemy Model
==========================================

What:  ORM model for the `customers` table.
Who:   Used by CustomerService; RentalService copies a snapshot of it.
"""

from sqlalchemy import Boolean, Index, String, text
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base
from app.identifiers import new_object_id


class Customer(Base):
    """A rental customer. Gold customers are flagged with `is_gold`."""

    __tablename__ = "customers"

    id: Mapped[str] = mapped_column(
        String(24),
        primary_key=True,
        default=new_object_id,
        comment="ObjectId hex string",
    )

    name: Mapped[str] = mapped_column(String(50), nullable=False)

    phone: Mapped[str] = mapped_column(String(50), nullable=False)

    is_gold: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=text("false"),
    )

    __table_args__ = (
        Index("idx_customers_name", "name"),
    )

    def __repr__(self) -> str:
        return f"<Customer(id={self.id}, name='{self.name}', is_gold={self.is_gold})>"
