"""
Vidly Backend — Entity Service Base
====================================

What:  Lookup, listing, persistence and removal shared by every entity
       service.
Why:   Genre, Customer, Movie, User and Rental handlers follow one pattern:
       exactly one store operation per call, None turned into NotFoundError,
       driver errors turned into DatabaseError.
How:   Subclasses set `model`, `resource` and `sort_clause`, and implement
       `to_response()` plus their own create/update rules.

Design Decision:
    Services are stateless: they receive the db session for each call.
    The session comes from the request's `Depends(get_db_session)`, so the
    store handle is injected rather than reached for globally.

    Write operations commit before returning (see commit()); the session
    dependency only rolls back and closes.
"""

import logging
from typing import Any, Generic, List, Optional, Type, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import Base
from app.exceptions import DatabaseError, NotFoundError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)


class EntityService(Generic[ModelT]):
    """
    Shared store operations for one entity type.

    Error Handling Strategy:
        NotFoundError and other application errors propagate as-is.
        SQLAlchemyError is logged with context and re-raised as DatabaseError
        so nothing about the schema or query reaches the client.
    """

    model: Type[ModelT]
    resource: str = "resource"
    # Column expression used by list(); e.g. Genre.name.asc()
    sort_clause: Any = None

    def to_response(self, entity: ModelT) -> Any:
        raise NotImplementedError

    # ── Lookups ───────────────────────────────────────────────────────────

    async def find_by_id(self, db: AsyncSession, entity_id: str) -> Optional[ModelT]:
        """Returns the row or None. Callers decide what absence means."""
        try:
            result = await db.execute(
                select(self.model).where(self.model.id == entity_id)
            )
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error fetching %s %s: %s", self.resource, entity_id, str(e))
            raise DatabaseError(
                message=f"Could not retrieve the {self.resource}. Please try again.",
                context={"resource_id": entity_id, "error_type": type(e).__name__},
            )

    async def get_or_404(self, db: AsyncSession, entity_id: str) -> ModelT:
        entity = await self.find_by_id(db, entity_id)
        if entity is None:
            raise NotFoundError(resource=self.resource, resource_id=entity_id)
        return entity

    # ── Read operations ───────────────────────────────────────────────────

    async def list(self, db: AsyncSession) -> List[Any]:
        """All rows, ordered by `sort_clause`."""
        try:
            query = select(self.model)
            if self.sort_clause is not None:
                query = query.order_by(self.sort_clause)
            result = await db.execute(query)
            rows = list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error("Database error listing %ss: %s", self.resource, str(e), exc_info=True)
            raise DatabaseError(
                message=f"Could not retrieve {self.resource}s. Please try again.",
                context={"error_type": type(e).__name__},
            )
        return [self.to_response(row) for row in rows]

    async def get(self, db: AsyncSession, entity_id: str) -> Any:
        return self.to_response(await self.get_or_404(db, entity_id))

    # ── Write operations ──────────────────────────────────────────────────

    async def save(self, db: AsyncSession, entity: ModelT) -> ModelT:
        """
        Adds (if new) and flushes the entity.

        Flush, not commit: a service that writes several rows flushes each
        one and then calls commit() once, so they land or roll back together.
        """
        try:
            db.add(entity)
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error saving %s: %s", self.resource, str(e), exc_info=True)
            raise DatabaseError(
                message=f"Could not save the {self.resource}. Please try again.",
                context={"error_type": type(e).__name__},
            )
        return entity

    async def commit(self, db: AsyncSession) -> None:
        """
        Commits the request's transaction.

        Every write operation ends here, before it returns. The teardown of a
        yield dependency may run only after the response has been sent, so
        committing there would let a client see 200 for a write that a
        follow-up read cannot find yet, or that never lands at all.
        """
        try:
            await db.commit()
        except SQLAlchemyError as e:
            logger.error("Database error committing %s: %s", self.resource, str(e), exc_info=True)
            await db.rollback()
            raise DatabaseError(
                message=f"Could not save the {self.resource}. Please try again.",
                context={"error_type": type(e).__name__},
            )

    async def delete(self, db: AsyncSession, entity_id: str) -> Any:
        """Removes the row and returns its last state."""
        entity = await self.get_or_404(db, entity_id)
        response = self.to_response(entity)
        try:
            await db.delete(entity)
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error deleting %s %s: %s", self.resource, entity_id, str(e))
            raise DatabaseError(
                message=f"Could not delete the {self.resource}. Please try again.",
                context={"resource_id": entity_id, "error_type": type(e).__name__},
            )
        await self.commit(db)
        logger.info("Deleted %s %s", self.resource, entity_id)
        return response
