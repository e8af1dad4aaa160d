"""
Vidly Backend — Genre Schemas
==============================

What:  Request body and response shapes for /api/genres, plus the snapshot
       value type that movies embed.
"""

from pydantic import Field

from app.schemas.common import CamelModel, EntityResponse


class GenreIn(CamelModel):
    """Body of POST /api/genres and PUT /api/genres/{id}."""
    name: str = Field(min_length=3, max_length=50)


class GenreResponse(EntityResponse):
    name: str


class GenreSnapshot(EntityResponse):
    """
    Copy of a genre stored inside a movie.

    Taken when the movie is created or updated and never refreshed: a genre
    renamed afterwards still shows its old name on existing movies.
    """
    name: str
