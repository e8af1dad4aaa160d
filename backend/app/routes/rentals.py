"""
Vidly Backend — Rental Route Handlers
======================================

What:  /api/rentals list, detail and create. Rentals are never replaced or
       deleted through the API.

Access:
    GET            public
    POST           any authenticated user
"""

import logging
from typing import List

from fastapi import APIRouter, Body, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.dependencies import get_current_user, valid_object_id
from app.schemas.common import ErrorResponse
from app.schemas.rental import RentalIn, RentalResponse
from app.schemas.user import TokenClaims
from app.services.rental_service import rental_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/rentals", tags=["Rentals"])


@router.get("", response_model=List[RentalResponse], summary="List rentals, newest first")
async def list_rentals(db: AsyncSession = Depends(get_db_session)) -> List[RentalResponse]:
    return await rental_service.list(db)


@router.post(
    "",
    response_model=RentalResponse,
    responses={
        400: {"description": "Unknown customer/movie or movie not in stock", "model": ErrorResponse},
        401: {"model": ErrorResponse},
    },
    summary="Rent a movie to a customer",
)
async def create_rental(
    user: TokenClaims = Depends(get_current_user),
    payload: RentalIn = Body(...),
    db: AsyncSession = Depends(get_db_session),
) -> RentalResponse:
    """
    Rent one copy of a movie.

    Writes the rental with customer/movie snapshots and `dateOut` set to
    now, then decrements the movie's stock. Responds 200 with the rental.
    """
    return await rental_service.create_rental(db, payload)


@router.get(
    "/{entity_id}",
    response_model=RentalResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Get a rental by id",
)
async def get_rental(
    entity_id: str = Depends(valid_object_id),
    db: AsyncSession = Depends(get_db_session),
) -> RentalResponse:
    return await rental_service.get(db, entity_id)
