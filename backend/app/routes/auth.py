"""
Vidly Backend — Login Route
============================

What:  POST /api/auth exchanges {email, password} for a signed token.
How:   The token is returned as the plain-text response body; clients send
       it back in the x-auth-token header.
"""

import logging

from fastapi import APIRouter, Body, Depends
from fastapi.responses import PlainTextResponse
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.schemas.common import ErrorResponse
from app.schemas.user import AuthRequest
from app.services.auth_service import auth_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.post(
    "",
    response_class=PlainTextResponse,
    responses={
        200: {"description": "Signed auth token", "content": {"text/plain": {}}},
        400: {"description": "Invalid email or password", "model": ErrorResponse},
    },
    summary="Log in",
)
async def login(
    payload: AuthRequest = Body(...),
    db: AsyncSession = Depends(get_db_session),
) -> PlainTextResponse:
    token = await auth_service.login(db, payload)
    return PlainTextResponse(token)
