"""
Vidly Backend — User & Auth Schemas
====================================

What:  Registration/update bodies, the public user shape, the login body
       and the claims carried inside an auth token.

Security:
    UserResponse has no password field, so a hash can never be serialized
    into a response even by accident.
"""

from pydantic import EmailStr, Field, field_validator

from app.schemas.common import CamelModel, EntityResponse


def _check_email_length(value: str) -> str:
    if not 5 <= len(value) <= 255:
        raise ValueError("email must be between 5 and 255 characters")
    return value


class UserIn(CamelModel):
    """Body of POST /api/users (registration) and PUT /api/users/{id}."""
    name: str = Field(min_length=5, max_length=50)
    email: EmailStr
    password: str = Field(min_length=5, max_length=255)

    @field_validator("email")
    @classmethod
    def validate_email_length(cls, v: str) -> str:
        return _check_email_length(v)


class UserResponse(EntityResponse):
    name: str
    email: str
    is_admin: bool


class AuthRequest(CamelModel):
    """Body of POST /api/auth."""
    email: EmailStr
    password: str = Field(min_length=5, max_length=255)

    @field_validator("email")
    @classmethod
    def validate_email_length(cls, v: str) -> str:
        return _check_email_length(v)


class TokenClaims(CamelModel):
    """
    Decoded payload of an x-auth-token.

    Encoded on the wire as {"_id", "name", "email", "isAdmin"}.
    """
    id: str = Field(alias="_id")
    name: str = ""
    email: str = ""
    is_admin: bool = False
