"""Create genres, customers, movies, users and rentals tables

Revision ID: 001
Revises: None
Create Date: 2026-10-18 00:00:00.000000+00:00

What:  Initial schema for the rental store.
How:   String(24) ObjectId primary keys minted by the application; JSON
       columns hold the embedded snapshots (movie.genre, rental.customer,
       rental.movie). No foreign keys: snapshots are copies, and deleting a
       genre, customer or movie never cascades into them.

Rollback: downgrade() drops every table (destructive — all data lost).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _id_column() -> sa.Column:
    return sa.Column("id", sa.String(24), nullable=False, comment="ObjectId hex string")


def upgrade() -> None:
    op.create_table(
        "genres",
        _id_column(),
        sa.Column("name", sa.String(50), nullable=False, comment="Display name, 3-50 characters"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_genres_name", "genres", ["name"])

    op.create_table(
        "customers",
        _id_column(),
        sa.Column("name", sa.String(50), nullable=False),
        sa.Column("phone", sa.String(50), nullable=False),
        sa.Column("is_gold", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_customers_name", "customers", ["name"])

    op.create_table(
        "movies",
        _id_column(),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("genre", sa.JSON(), nullable=False, comment="Embedded genre snapshot {_id, name}"),
        sa.Column("number_in_stock", sa.Integer(), nullable=False),
        sa.Column("daily_rental_rate", sa.Float(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_movies_title", "movies", ["title"])

    op.create_table(
        "users",
        _id_column(),
        sa.Column("name", sa.String(50), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("password", sa.String(1024), nullable=False, comment="bcrypt hash"),
        sa.Column("is_admin", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email"),
    )

    op.create_table(
        "rentals",
        _id_column(),
        sa.Column(
            "customer",
            sa.JSON(),
            nullable=False,
            comment="Embedded customer snapshot {_id, name, phone, isGold}",
        ),
        sa.Column(
            "movie",
            sa.JSON(),
            nullable=False,
            comment="Embedded movie snapshot {_id, title, dailyRentalRate}",
        ),
        sa.Column("date_out", sa.DateTime(timezone=True), nullable=False),
        sa.Column("date_returned", sa.DateTime(timezone=True), nullable=True),
        sa.Column("rental_fee", sa.Float(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    # Rental history is listed newest first
    op.create_index("idx_rentals_date_out", "rentals", [sa.text("date_out DESC")])


def downgrade() -> None:
    """Drop every table. WARNING: destructive."""
    op.drop_index("idx_rentals_date_out", table_name="rentals")
    op.drop_table("rentals")
    op.drop_table("users")
    op.drop_index("idx_movies_title", table_name="movies")
    op.drop_table("movies")
    op.drop_index("idx_customers_name", table_name="customers")
    op.drop_table("customers")
    op.drop_index("idx_genres_name", table_name="genres")
    op.drop_table("genres")
