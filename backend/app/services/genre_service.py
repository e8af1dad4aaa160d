"""
Vidly Backend — Genre Service
==============================

What:  Create/replace rules for genres on top of the shared entity operations.
Who:   Called by routes/genres.py; MovieService uses `find_by_id` to resolve
       `genreId`.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.genre import Genre
from app.schemas.genre import GenreIn, GenreResponse, GenreSnapshot
from app.services.base import EntityService

logger = logging.getLogger(__name__)


class GenreService(EntityService[Genre]):
    model = Genre
    resource = "genre"
    sort_clause = Genre.name.asc()

    def to_response(self, genre: Genre) -> GenreResponse:
        return GenreResponse(id=genre.id, name=genre.name)

    def snapshot(self, genre: Genre) -> GenreSnapshot:
        """The {_id, name} copy a movie embeds."""
        return GenreSnapshot(id=genre.id, name=genre.name)

    async def create(self, db: AsyncSession, payload: GenreIn) -> GenreResponse:
        genre = await self.save(db, Genre(name=payload.name))
        await self.commit(db)
        logger.info("Created genre %s (%s)", genre.id, genre.name)
        return self.to_response(genre)

    async def update(
        self, db: AsyncSession, genre_id: str, payload: GenreIn
    ) -> GenreResponse:
        """
        Renames a genre.

        Movies keep the name they embedded when they were written; this does
        not cascade into them.
        """
        genre = await self.get_or_404(db, genre_id)
        genre.name = payload.name
        await self.save(db, genre)
        await self.commit(db)
        return self.to_response(genre)


genre_service = GenreService()
