"""
Vidly Backend — Movie Route Handlers
=====================================

What:  /api/movies list, detail, create, replace and delete.

Request body takes `genreId`; responses carry the embedded genre snapshot.
An unknown genreId is a 400 (see MovieService).

Access:
    GET            public
    POST, PUT      any authenticated user
    DELETE         admin only
"""

import logging
from typing import List

from fastapi import APIRouter, Body, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.dependencies import get_current_user, require_admin, valid_object_id
from app.schemas.common import ErrorResponse
from app.schemas.movie import MovieIn, MovieResponse
from app.schemas.user import TokenClaims
from app.services.movie_service import movie_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/movies", tags=["Movies"])


@router.get("", response_model=List[MovieResponse], summary="List movies sorted by title")
async def list_movies(db: AsyncSession = Depends(get_db_session)) -> List[MovieResponse]:
    return await movie_service.list(db)


@router.post(
    "",
    response_model=MovieResponse,
    responses={400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}},
    summary="Create a movie",
)
async def create_movie(
    user: TokenClaims = Depends(get_current_user),
    payload: MovieIn = Body(...),
    db: AsyncSession = Depends(get_db_session),
) -> MovieResponse:
    return await movie_service.create(db, payload)


@router.put(
    "/{entity_id}",
    response_model=MovieResponse,
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
    summary="Replace a movie",
)
async def update_movie(
    user: TokenClaims = Depends(get_current_user),
    entity_id: str = Depends(valid_object_id),
    payload: MovieIn = Body(...),
    db: AsyncSession = Depends(get_db_session),
) -> MovieResponse:
    return await movie_service.update(db, entity_id, payload)


@router.delete(
    "/{entity_id}",
    response_model=MovieResponse,
    responses={
        401: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
    summary="Delete a movie (admin)",
)
async def delete_movie(
    admin: TokenClaims = Depends(require_admin),
    entity_id: str = Depends(valid_object_id),
    db: AsyncSession = Depends(get_db_session),
) -> MovieResponse:
    return await movie_service.delete(db, entity_id)


@router.get(
    "/{entity_id}",
    response_model=MovieResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Get a movie by id",
)
async def get_movie(
    entity_id: str = Depends(valid_object_id),
    db: AsyncSession = Depends(get_db_session),
) -> MovieResponse:
    return await movie_service.get(db, entity_id)
