"""
Vidly Backend — Request Guard Dependencies
===========================================

What:  FastAPI dependencies that gate a request before its handler runs:
       authentication, admin authorization and path-id shape checking.
How:   Each dependency raises an application exception (see exceptions.py);
       the global handlers turn it into the response.

Ordering:
    FastAPI resolves a handler's dependencies in parameter order and only
    then validates the request body. Handlers therefore list the guards
    first, which is what makes a token-less request fail with 401 before
    its body is examined, and a malformed id fail with 404 before any query.
"""

from fastapi import Depends, Request

from app.config import settings
from app.exceptions import AuthenticationError, NotFoundError, PermissionDeniedError
from app.identifiers import is_valid_object_id
from app.schemas.user import TokenClaims
from app.security import decode_auth_token


async def get_current_user(request: Request) -> TokenClaims:
    """
    Decodes the x-auth-token header into claims.

    Raises:
        AuthenticationError: header missing or empty (401)
        InvalidTokenError:   header present but not a valid token (400)
    """
    token = request.headers.get(settings.auth_header)
    if not token:
        raise AuthenticationError()

    claims = decode_auth_token(token)
    request.state.user = claims
    return claims


async def require_admin(user: TokenClaims = Depends(get_current_user)) -> TokenClaims:
    """Lets the request through only when the token carries isAdmin."""
    if not user.is_admin:
        raise PermissionDeniedError(context={"user_id": user.id})
    return user


async def valid_object_id(entity_id: str) -> str:
    """
    Rejects a path id that is not a 24-hex ObjectId with 404.

    Runs before any lookup so malformed ids never reach the database.
    """
    if not is_valid_object_id(entity_id):
        raise NotFoundError(message="Invalid ID.", context={"resource_id": entity_id})
    return entity_id
