"""
Vidly Backend — Shared Schema Building Blocks
==============================================

What:  Base model, id types and the error/health response shapes shared by
       every entity's schemas.

Wire format:
    Field names are snake_case in Python and camelCase on the wire
    (`number_in_stock` ↔ `numberInStock`); ids travel as `_id`. Request
    bodies accept either spelling so internal callers can use field names.
"""

from typing import Annotated, Optional

from pydantic import AfterValidator, BaseModel, Field
from pydantic.alias_generators import to_camel

from app.identifiers import is_valid_object_id


def _check_object_id(value: str) -> str:
    if not is_valid_object_id(value):
        raise ValueError("must be a valid ObjectId")
    return value


# A str that must look like a 24-hex ObjectId. Used for foreign ids in bodies
# (genreId, customerId, movieId); path ids are checked by a dependency instead
# because a malformed path id is a 404, not a 400.
ObjectIdStr = Annotated[str, AfterValidator(_check_object_id)]


class CamelModel(BaseModel):
    """Base for every request/response schema: camelCase aliases on the wire."""

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "from_attributes": True,
    }


class EntityResponse(CamelModel):
    """Base for persisted entities: adds the `_id` field."""

    id: str = Field(alias="_id", description="ObjectId hex string")


# ══════════════════════════════════════════════════════════════════════════
# Error / Health Response Models
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    What:  Standardized error response format for all API errors.

    Example:
        {
            "error": "validation_error",
            "message": "\"title\" String should have at least 5 characters",
            "details": {"field": "title", "errors": ["..."]},
            "request_id": "1f2e3d4c"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Returned by GET /health for monitoring and load balancer probes."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
