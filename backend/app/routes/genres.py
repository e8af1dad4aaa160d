"""
Vidly Backend — Genre Route Handlers
=====================================

What:  /api/genres list, detail, create, replace and delete.
How:   Guards run as dependencies (token → admin → id shape), then a single
       GenreService call.

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
from app.schemas.genre import GenreIn, GenreResponse
from app.schemas.user import TokenClaims
from app.services.genre_service import genre_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/genres", tags=["Genres"])


@router.get("", response_model=List[GenreResponse], summary="List genres sorted by name")
async def list_genres(db: AsyncSession = Depends(get_db_session)) -> List[GenreResponse]:
    return await genre_service.list(db)


@router.post(
    "",
    response_model=GenreResponse,
    responses={400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}},
    summary="Create a genre",
)
async def create_genre(
    user: TokenClaims = Depends(get_current_user),
    payload: GenreIn = Body(...),
    db: AsyncSession = Depends(get_db_session),
) -> GenreResponse:
    return await genre_service.create(db, payload)


@router.put(
    "/{entity_id}",
    response_model=GenreResponse,
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
    summary="Rename a genre",
)
async def update_genre(
    user: TokenClaims = Depends(get_current_user),
    entity_id: str = Depends(valid_object_id),
    payload: GenreIn = Body(...),
    db: AsyncSession = Depends(get_db_session),
) -> GenreResponse:
    return await genre_service.update(db, entity_id, payload)


@router.delete(
    "/{entity_id}",
    response_model=GenreResponse,
    responses={
        401: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
    summary="Delete a genre (admin)",
)
async def delete_genre(
    admin: TokenClaims = Depends(require_admin),
    entity_id: str = Depends(valid_object_id),
    db: AsyncSession = Depends(get_db_session),
) -> GenreResponse:
    return await genre_service.delete(db, entity_id)


@router.get(
    "/{entity_id}",
    response_model=GenreResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Get a genre by id",
)
async def get_genre(
    entity_id: str = Depends(valid_object_id),
    db: AsyncSession = Depends(get_db_session),
) -> GenreResponse:
    return await genre_service.get(db, entity_id)
