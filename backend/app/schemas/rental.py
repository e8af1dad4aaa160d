"""
Vidly Backend — Rental Schemas
===============================
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from app.schemas.common import CamelModel, EntityResponse, ObjectIdStr
from app.schemas.customer import CustomerSnapshot
from app.schemas.movie import MovieSnapshot


class RentalIn(CamelModel):
    """
    Body of POST /api/rentals.

    Both ids must be present and ObjectId-shaped; a blank string fails here
    with 400 before any lookup.
    """
    customer_id: ObjectIdStr
    movie_id: ObjectIdStr


class RentalResponse(EntityResponse):
    customer: CustomerSnapshot
    movie: MovieSnapshot
    date_out: datetime
    date_returned: Optional[datetime] = Field(default=None)
    rental_fee: Optional[float] = Field(default=None)
