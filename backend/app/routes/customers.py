"""
Vidly Backend — Customer Route Handlers
========================================

What:  /api/customers list, detail, create, replace and delete.

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
from app.schemas.customer import CustomerIn, CustomerResponse
from app.schemas.user import TokenClaims
from app.services.customer_service import customer_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/customers", tags=["Customers"])


@router.get("", response_model=List[CustomerResponse], summary="List customers sorted by name")
async def list_customers(
    db: AsyncSession = Depends(get_db_session),
) -> List[CustomerResponse]:
    return await customer_service.list(db)


@router.post(
    "",
    response_model=CustomerResponse,
    responses={400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}},
    summary="Create a customer",
)
async def create_customer(
    user: TokenClaims = Depends(get_current_user),
    payload: CustomerIn = Body(...),
    db: AsyncSession = Depends(get_db_session),
) -> CustomerResponse:
    return await customer_service.create(db, payload)


@router.put(
    "/{entity_id}",
    response_model=CustomerResponse,
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
    summary="Replace a customer",
)
async def update_customer(
    user: TokenClaims = Depends(get_current_user),
    entity_id: str = Depends(valid_object_id),
    payload: CustomerIn = Body(...),
    db: AsyncSession = Depends(get_db_session),
) -> CustomerResponse:
    return await customer_service.update(db, entity_id, payload)


@router.delete(
    "/{entity_id}",
    response_model=CustomerResponse,
    responses={
        401: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
    summary="Delete a customer (admin)",
)
async def delete_customer(
    admin: TokenClaims = Depends(require_admin),
    entity_id: str = Depends(valid_object_id),
    db: AsyncSession = Depends(get_db_session),
) -> CustomerResponse:
    return await customer_service.delete(db, entity_id)


@router.get(
    "/{entity_id}",
    response_model=CustomerResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Get a customer by id",
)
async def get_customer(
    entity_id: str = Depends(valid_object_id),
    db: AsyncSession = Depends(get_db_session),
) -> CustomerResponse:
    return await customer_service.get(db, entity_id)
