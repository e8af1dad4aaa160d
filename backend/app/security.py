"""
Vidly Backend — Token & Password Helpers
=========================================

What:  Signs/verifies auth tokens (PyJWT) and hashes/verifies passwords
       (passlib bcrypt).
Who:   UserService and AuthService issue tokens; the auth dependency
       decodes them.

Token format:
    HS256 JWT whose payload is {"_id", "name", "email", "isAdmin"}.
    Tokens carry no expiry; existing clients hold them until logout.
"""

import logging

import jwt
from passlib.hash import bcrypt
from pydantic import ValidationError as PydanticValidationError

from app.config import settings
from app.exceptions import InvalidTokenError
from app.schemas.user import TokenClaims

logger = logging.getLogger(__name__)


def hash_password(plain: str) -> str:
    """Returns a salted bcrypt hash of `plain`."""
    return bcrypt.hash(plain)


def verify_password(plain: str, hashed: str) -> bool:
    """
    Checks `plain` against a stored bcrypt hash.

    A malformed stored hash counts as a mismatch rather than an error, so a
    corrupted row surfaces as "invalid email or password".
    """
    try:
        return bcrypt.verify(plain, hashed)
    except ValueError:
        logger.warning("Stored password hash is not a valid bcrypt hash")
        return False


def generate_auth_token(user_id: str, name: str, email: str, is_admin: bool) -> str:
    """Signs a token for the given identity."""
    claims = TokenClaims(id=user_id, name=name, email=email, is_admin=is_admin)
    return jwt.encode(
        claims.model_dump(by_alias=True),
        settings.jwt_private_key,
        algorithm=settings.jwt_algorithm,
    )


def decode_auth_token(token: str) -> TokenClaims:
    """
    Verifies the signature and returns the claims.

    Raises:
        InvalidTokenError: bad signature, garbage input, or a payload
                           without an `_id` claim
    """
    try:
        payload = jwt.decode(
            token,
            settings.jwt_private_key,
            algorithms=[settings.jwt_algorithm],
        )
        return TokenClaims.model_validate(payload)
    except (jwt.InvalidTokenError, PydanticValidationError) as e:
        logger.debug("Rejected auth token: %s", type(e).__name__)
        raise InvalidTokenError(context={"reason": type(e).__name__})
