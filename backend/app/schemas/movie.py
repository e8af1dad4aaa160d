"""
Vidly Backend — Movie Schemas
==============================

What:  Request body and response shapes for /api/movies, plus the snapshot
       value type that rentals embed.

Input vs output:
    Clients send `genreId`; the service resolves it and the response carries
    the embedded `genre: {_id, name}` snapshot instead.
"""

from pydantic import Field

from app.schemas.common import CamelModel, EntityResponse, ObjectIdStr
from app.schemas.genre import GenreSnapshot


class MovieIn(CamelModel):
    """Body of POST /api/movies and PUT /api/movies/{id}."""
    title: str = Field(min_length=5, max_length=255)
    genre_id: ObjectIdStr
    number_in_stock: int = Field(ge=0, le=255)
    daily_rental_rate: float = Field(ge=0, le=255)


class MovieResponse(EntityResponse):
    title: str
    genre: GenreSnapshot
    number_in_stock: int
    daily_rental_rate: float


class MovieSnapshot(EntityResponse):
    """
    Copy of a movie stored inside a rental at creation time.

    Freezes the title and daily rate the customer rented at; later price
    changes do not alter existing rentals.
    """
    title: str
    daily_rental_rate: float
