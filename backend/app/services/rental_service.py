"""
Vidly Backend — Rental Service
===============================

What:  Creates rentals and serves rental history.
Why:   Renting is the one operation that touches two entities: it reads a
       customer and a movie, checks stock, writes a rental and decrements
       the movie's stock.

Orchestration Flow (POST /api/rentals):
    ┌──────────┐   ┌──────────┐   ┌──────────┐   ┌──────────┐   ┌───────────┐
    │ customer │──▶│  movie   │──▶│ in stock?│──▶│  insert  │──▶│ stock - 1 │
    │ exists?  │   │ exists?  │   │          │   │  rental  │   │           │
    └──────────┘   └──────────┘   └──────────┘   └──────────┘   └───────────┘
      400 if not     400 if not     400 if <= 0

Concurrency caveat:
    The stock check reads the value loaded with the movie; the decrement is
    a plain attribute write flushed afterwards. Two requests for the same
    movie with numberInStock == 1 can both pass the check and both succeed,
    leaving stock at -1. No row lock or compare-and-swap guards this.
    Once stock is at or below zero the check rejects every later request,
    so the overshoot is bounded by the number of requests that raced. Both
    writes share the request's transaction, so a failure while decrementing
    does roll back the rental insert.
"""

import logging
from datetime import datetime, timezone

from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import BusinessRuleError, ValidationError
from app.models.rental import Rental
from app.schemas.customer import CustomerSnapshot
from app.schemas.movie import MovieSnapshot
from app.schemas.rental import RentalIn, RentalResponse
from app.services.base import EntityService
from app.services.customer_service import customer_service
from app.services.movie_service import movie_service

logger = logging.getLogger(__name__)


class RentalService(EntityService[Rental]):
    model = Rental
    resource = "rental"
    # Newest first
    sort_clause = Rental.date_out.desc()

    def to_response(self, rental: Rental) -> RentalResponse:
        return RentalResponse(
            id=rental.id,
            customer=CustomerSnapshot.model_validate(rental.customer),
            movie=MovieSnapshot.model_validate(rental.movie),
            date_out=rental.date_out,
            date_returned=rental.date_returned,
            rental_fee=rental.rental_fee,
        )

    async def create_rental(self, db: AsyncSession, payload: RentalIn) -> RentalResponse:
        """
        Rents one copy of a movie to a customer.

        Raises:
            ValidationError:   customer or movie does not exist (400)
            BusinessRuleError: movie has no copies in stock (400)
        """
        customer = await customer_service.find_by_id(db, payload.customer_id)
        if customer is None:
            raise ValidationError(message="Invalid customer.", field="customerId")

        movie = await movie_service.find_by_id(db, payload.movie_id)
        if movie is None:
            raise ValidationError(message="Invalid movie.", field="movieId")

        # Also catches a count already driven negative (see module docstring)
        if movie.number_in_stock <= 0:
            logger.warning("Rental rejected: movie %s not in stock", movie.id)
            raise BusinessRuleError(
                message="Movie not in stock.",
                field="movieId",
                context={"movie_id": movie.id},
            )

        rental = Rental(
            customer=customer_service.snapshot(customer).model_dump(by_alias=True),
            movie=movie_service.snapshot(movie).model_dump(by_alias=True),
            date_out=datetime.now(timezone.utc),
        )
        await self.save(db, rental)

        movie.number_in_stock -= 1
        await movie_service.save(db, movie)
        await self.commit(db)

        logger.info(
            "Created rental %s: customer %s, movie %s (stock now %d)",
            rental.id,
            customer.id,
            movie.id,
            movie.number_in_stock,
        )
        return self.to_response(rental)


rental_service = RentalService()
