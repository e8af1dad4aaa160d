"""
Vidly Backend — Auth Service
=============================

What:  Exchanges email + password for a signed auth token.
Who:   Called by POST /api/auth.

Both failure cases (unknown email, wrong password) return the same message
so the endpoint cannot be used to discover which emails are registered.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import ValidationError
from app.schemas.user import AuthRequest
from app.security import verify_password
from app.services.user_service import user_service

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password."


class AuthService:

    async def login(self, db: AsyncSession, payload: AuthRequest) -> str:
        user = await user_service.find_by_email(db, payload.email)
        if user is None or not verify_password(payload.password, user.password):
            logger.info("Failed login attempt")
            raise ValidationError(message=INVALID_CREDENTIALS)
        return user_service.token_for(user)


auth_service = AuthService()
