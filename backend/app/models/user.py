"""
Vidly Backend — User SQLAlchemy Model
======================================

What:  ORM model for the `users` table, the identity source for auth tokens.

Security Notes:
    - password holds a bcrypt hash, never the plain text
    - email is unique; registration checks it first and the unique index
      backs that check up
"""

from sqlalchemy import Boolean, String, text
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base
from app.identifiers import new_object_id


class User(Base):
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(
        String(24),
        primary_key=True,
        default=new_object_id,
        comment="ObjectId hex string",
    )

    name: Mapped[str] = mapped_column(String(50), nullable=False)

    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)

    password: Mapped[str] = mapped_column(
        String(1024),
        nullable=False,
        comment="bcrypt hash",
    )

    is_admin: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=text("false"),
    )

    def __repr__(self) -> str:
        # Never include the password hash
        return f"<User(id={self.id}, email='{self.email}', is_admin={self.is_admin})>"
