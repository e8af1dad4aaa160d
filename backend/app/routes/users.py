"""
Vidly Backend — User Route Handlers
====================================

What:  Registration, the caller's own profile, and admin/self access to
       user records. There is no delete route.

Access:
    POST /api/users           public (registration); token returned in the
                              x-auth-token response header
    GET  /api/users/me        authenticated
    GET  /api/users           admin only
    GET  /api/users/{id}      the user themself or an admin
    PUT  /api/users/{id}      the user themself or an admin

`/me` is declared before `/{entity_id}` so it is not captured as an id.
"""

import logging
from typing import List

from fastapi import APIRouter, Body, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.database import get_db_session
from app.dependencies import get_current_user, require_admin, valid_object_id
from app.schemas.common import ErrorResponse
from app.schemas.user import TokenClaims, UserIn, UserResponse
from app.services.user_service import user_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/users", tags=["Users"])


@router.get(
    "/me",
    response_model=UserResponse,
    responses={401: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    summary="Get the authenticated user",
)
async def get_me(
    user: TokenClaims = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> UserResponse:
    return await user_service.get(db, user.id)


@router.get(
    "",
    response_model=List[UserResponse],
    responses={401: {"model": ErrorResponse}, 403: {"model": ErrorResponse}},
    summary="List users sorted by name (admin)",
)
async def list_users(
    admin: TokenClaims = Depends(require_admin),
    db: AsyncSession = Depends(get_db_session),
) -> List[UserResponse]:
    return await user_service.list(db)


@router.post(
    "",
    response_model=UserResponse,
    responses={400: {"description": "Invalid body or email already registered", "model": ErrorResponse}},
    summary="Register a new user",
)
async def register_user(
    response: Response,
    payload: UserIn = Body(...),
    db: AsyncSession = Depends(get_db_session),
) -> UserResponse:
    """
    Register a user and log them in.

    The signed token goes in the `x-auth-token` response header so the
    client can store it without a separate POST /api/auth round trip.
    """
    user, token = await user_service.register(db, payload)
    response.headers[settings.auth_header] = token
    return user


@router.put(
    "/{entity_id}",
    response_model=UserResponse,
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
    summary="Replace a user's name, email and password",
)
async def update_user(
    caller: TokenClaims = Depends(get_current_user),
    entity_id: str = Depends(valid_object_id),
    payload: UserIn = Body(...),
    db: AsyncSession = Depends(get_db_session),
) -> UserResponse:
    user_service.ensure_can_access(caller, entity_id)
    return await user_service.update(db, entity_id, payload)


@router.get(
    "/{entity_id}",
    response_model=UserResponse,
    responses={
        401: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
    summary="Get a user by id",
)
async def get_user(
    caller: TokenClaims = Depends(get_current_user),
    entity_id: str = Depends(valid_object_id),
    db: AsyncSession = Depends(get_db_session),
) -> UserResponse:
    user_service.ensure_can_access(caller, entity_id)
    return await user_service.get(db, entity_id)
