"""
Vidly Backend — User Service
=============================

What:  Registration, profile replacement and lookups for users.
Who:   Called by routes/users.py; AuthService uses `find_by_email`.

Security:
    - Passwords are hashed with bcrypt before they touch the session.
    - Responses are built from UserResponse, which has no password field.
    - `isAdmin` cannot be set through the API; admins are provisioned
      directly in the database.
"""

import logging
from typing import Optional, Tuple

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import DatabaseError, PermissionDeniedError, ValidationError
from app.models.user import User
from app.schemas.user import TokenClaims, UserIn, UserResponse
from app.security import generate_auth_token, hash_password
from app.services.base import EntityService

logger = logging.getLogger(__name__)


class UserService(EntityService[User]):
    model = User
    resource = "user"
    sort_clause = User.name.asc()

    def to_response(self, user: User) -> UserResponse:
        return UserResponse(
            id=user.id,
            name=user.name,
            email=user.email,
            is_admin=user.is_admin,
        )

    def token_for(self, user: User) -> str:
        return generate_auth_token(user.id, user.name, user.email, user.is_admin)

    async def find_by_email(self, db: AsyncSession, email: str) -> Optional[User]:
        try:
            result = await db.execute(select(User).where(User.email == email))
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error looking up user by email: %s", str(e))
            raise DatabaseError(
                message="Could not retrieve the user. Please try again.",
                context={"error_type": type(e).__name__},
            )

    async def register(
        self, db: AsyncSession, payload: UserIn
    ) -> Tuple[UserResponse, str]:
        """
        Creates a user and returns it together with a signed token.

        Raises:
            ValidationError: the email is already registered (400)
        """
        if await self.find_by_email(db, payload.email) is not None:
            raise ValidationError(message="User already registered.", field="email")

        user = User(
            name=payload.name,
            email=payload.email,
            password=hash_password(payload.password),
            is_admin=False,
        )
        await self.save(db, user)
        await self.commit(db)
        logger.info("Registered user %s", user.id)
        return self.to_response(user), self.token_for(user)

    def ensure_can_access(self, caller: TokenClaims, user_id: str) -> None:
        """Only the user themself or an admin may read or replace a profile."""
        if caller.id != user_id and not caller.is_admin:
            raise PermissionDeniedError(context={"user_id": caller.id, "target": user_id})

    async def update(
        self, db: AsyncSession, user_id: str, payload: UserIn
    ) -> UserResponse:
        """
        Replaces name, email and password.

        Raises:
            NotFoundError:   no such user (404)
            ValidationError: the new email belongs to another user (400)
        """
        user = await self.get_or_404(db, user_id)

        if payload.email != user.email:
            owner = await self.find_by_email(db, payload.email)
            if owner is not None and owner.id != user.id:
                raise ValidationError(message="User already registered.", field="email")

        user.name = payload.name
        user.email = payload.email
        user.password = hash_password(payload.password)
        await self.save(db, user)
        await self.commit(db)
        return self.to_response(user)


user_service = UserService()
