"""
Database utilities for customer service
"""

from typing import List, Optional

import structlog

from crm.customer_service.models.customer import Customer
from crm.shared.utils.database import Database
from crm.shared.utils.timing import ServerTiming

logger = structlog.get_logger(__name__)


class CustomerDatabase(Database):
    """Customer table operations"""

    async def list_customers(self, timing: Optional[ServerTiming] = None) -> List[Customer]:
        """List all customers, in whatever order the store returns them"""
        async with self.connection(timing) as conn:
            async with self.query(timing):
                rows = await conn.fetch("SELECT id, name, email FROM customers")
        return [Customer(**dict(row)) for row in rows]

    async def get_customer(self, customer_id: int, timing: Optional[ServerTiming] = None) -> Optional[Customer]:
        """Get customer by ID"""
        async with self.connection(timing) as conn:
            async with self.query(timing):
                row = await conn.fetchrow(
                    "SELECT id, name, email FROM customers WHERE id = $1",
                    customer_id,
                )
        if row:
            return Customer(**dict(row))
        return None

    async def create_customer(self, name: str, email: str, timing: Optional[ServerTiming] = None) -> Customer:
        """Insert a customer and return it with its generated id"""
        async with self.connection(timing) as conn:
            async with self.query(timing):
                customer_id = await conn.fetchval(
                    "INSERT INTO customers (name, email) VALUES ($1, $2) RETURNING id",
                    name,
                    email,
                )

        logger.info("Customer created", customer_id=customer_id)
        return Customer(id=customer_id, name=name, email=email)

    async def delete_customer(self, customer_id: int, timing: Optional[ServerTiming] = None) -> int:
        """Delete customer by ID, returning the number of rows removed"""
        async with self.connection(timing) as conn:
            async with self.query(timing):
                status = await conn.execute("DELETE FROM customers WHERE id = $1", customer_id)

        # asyncpg returns the command tag, e.g. 'DELETE 1'
        deleted = int(status.split()[-1])
        if deleted:
            logger.info("Customer deleted", customer_id=customer_id)
        return deleted
