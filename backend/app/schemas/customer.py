"""
Vidly Backend — Customer Schemas
=================================
"""

from pydantic import Field

from app.schemas.common import CamelModel, EntityResponse


class CustomerIn(CamelModel):
    """Body of POST /api/customers and PUT /api/customers/{id}."""
    name: str = Field(min_length=5, max_length=50)
    phone: str = Field(min_length=5, max_length=50)
    is_gold: bool = False


class CustomerResponse(EntityResponse):
    name: str
    phone: str
    is_gold: bool


class CustomerSnapshot(EntityResponse):
    """
    Copy of a customer stored inside a rental at creation time.

    Later edits or deletion of the customer do not touch this copy.
    """
    name: str
    phone: str
    is_gold: bool = False
