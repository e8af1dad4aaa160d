"""
Vidly Backend — Customer Service
=================================
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.customer import Customer
from app.schemas.customer import CustomerIn, CustomerResponse, CustomerSnapshot
from app.services.base import EntityService

logger = logging.getLogger(__name__)


class CustomerService(EntityService[Customer]):
    model = Customer
    resource = "customer"
    sort_clause = Customer.name.asc()

    def to_response(self, customer: Customer) -> CustomerResponse:
        return CustomerResponse(
            id=customer.id,
            name=customer.name,
            phone=customer.phone,
            is_gold=customer.is_gold,
        )

    def snapshot(self, customer: Customer) -> CustomerSnapshot:
        """The copy a rental embeds at creation time."""
        return CustomerSnapshot(
            id=customer.id,
            name=customer.name,
            phone=customer.phone,
            is_gold=customer.is_gold,
        )

    async def create(self, db: AsyncSession, payload: CustomerIn) -> CustomerResponse:
        customer = Customer(
            name=payload.name,
            phone=payload.phone,
            is_gold=payload.is_gold,
        )
        await self.save(db, customer)
        await self.commit(db)
        logger.info("Created customer %s", customer.id)
        return self.to_response(customer)

    async def update(
        self, db: AsyncSession, customer_id: str, payload: CustomerIn
    ) -> CustomerResponse:
        customer = await self.get_or_404(db, customer_id)
        customer.name = payload.name
        customer.phone = payload.phone
        customer.is_gold = payload.is_gold
        await self.save(db, customer)
        await self.commit(db)
        return self.to_response(customer)


customer_service = CustomerService()
