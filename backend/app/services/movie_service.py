"""
Vidly Backend — Movie Service
==============================

What:  Movie create/replace with genre resolution.
How:   The body names a genre by `genreId`. The genre is looked up and a
       fresh {_id, name} snapshot is embedded in the movie before it is
       flushed. An unknown genre is a 400, and nothing is written.

Flow (POST /api/movies):
    ┌───────────┐    ┌──────────────┐    ┌────────────────┐    ┌─────────┐
    │ MovieIn   │───▶│ find genre   │───▶│ embed snapshot │───▶│ flush   │
    │ (valid)   │    │ (400 if none)│    │ {_id, name}    │    │         │
    └───────────┘    └──────────────┘    └────────────────┘    └─────────┘
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import ValidationError
from app.models.genre import Genre
from app.models.movie import Movie
from app.schemas.genre import GenreSnapshot
from app.schemas.movie import MovieIn, MovieResponse, MovieSnapshot
from app.services.base import EntityService
from app.services.genre_service import genre_service

logger = logging.getLogger(__name__)


class MovieService(EntityService[Movie]):
    model = Movie
    resource = "movie"
    sort_clause = Movie.title.asc()

    def to_response(self, movie: Movie) -> MovieResponse:
        return MovieResponse(
            id=movie.id,
            title=movie.title,
            genre=GenreSnapshot.model_validate(movie.genre),
            number_in_stock=movie.number_in_stock,
            daily_rental_rate=movie.daily_rental_rate,
        )

    def snapshot(self, movie: Movie) -> MovieSnapshot:
        """The copy a rental embeds at creation time."""
        return MovieSnapshot(
            id=movie.id,
            title=movie.title,
            daily_rental_rate=movie.daily_rental_rate,
        )

    async def _resolve_genre(self, db: AsyncSession, genre_id: str) -> Genre:
        genre = await genre_service.find_by_id(db, genre_id)
        if genre is None:
            logger.warning("Movie write rejected: genre %s not found", genre_id)
            raise ValidationError(message="Invalid genre.", field="genreId")
        return genre

    async def create(self, db: AsyncSession, payload: MovieIn) -> MovieResponse:
        genre = await self._resolve_genre(db, payload.genre_id)
        movie = Movie(
            title=payload.title,
            genre=genre_service.snapshot(genre).model_dump(by_alias=True),
            number_in_stock=payload.number_in_stock,
            daily_rental_rate=payload.daily_rental_rate,
        )
        await self.save(db, movie)
        await self.commit(db)
        logger.info("Created movie %s (%s)", movie.id, movie.title)
        return self.to_response(movie)

    async def update(
        self, db: AsyncSession, movie_id: str, payload: MovieIn
    ) -> MovieResponse:
        """
        Replaces every mutable field, re-snapshotting the genre.

        The genre is resolved before the movie: a bad genreId yields 400 even
        when the movie id also does not exist.
        """
        genre = await self._resolve_genre(db, payload.genre_id)
        movie = await self.get_or_404(db, movie_id)
        movie.title = payload.title
        movie.genre = genre_service.snapshot(genre).model_dump(by_alias=True)
        movie.number_in_stock = payload.number_in_stock
        movie.daily_rental_rate = payload.daily_rental_rate
        await self.save(db, movie)
        await self.commit(db)
        return self.to_response(movie)


movie_service = MovieService()
