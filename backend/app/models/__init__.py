# Models package init
"""
Importing this package registers every table with `Base.metadata`,
which Alembic and the test suite rely on.
"""

from app.models.customer import Customer
from app.models.genre import Genre
from app.models.movie import Movie
from app.models.rental import Rental
from app.models.user import User

__all__ = ["Customer", "Genre", "Movie", "Rental", "User"]
