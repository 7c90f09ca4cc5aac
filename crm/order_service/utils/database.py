"""
Database utilities for order service
"""

from typing import List, Optional

import structlog

from crm.order_service.models.order import Order
from crm.shared.utils.database import Database
from crm.shared.utils.timing import ServerTiming

logger = structlog.get_logger(__name__)


class OrderDatabase(Database):
    """Order table operations"""

    async def list_orders(self, timing: Optional[ServerTiming] = None) -> List[Order]:
        """List all orders"""
        async with self.connection(timing) as conn:
            async with self.query(timing):
                rows = await conn.fetch("SELECT id, customer_id, product, quantity FROM orders")
        return [Order(**dict(row)) for row in rows]

    async def get_order(self, order_id: int, timing: Optional[ServerTiming] = None) -> Optional[Order]:
        """Get order by ID"""
        async with self.connection(timing) as conn:
            async with self.query(timing):
                row = await conn.fetchrow(
                    "SELECT id, customer_id, product, quantity FROM orders WHERE id = $1",
                    order_id,
                )
        if row:
            return Order(**dict(row))
        return None

    async def create_order(
        self,
        customer_id: int,
        product: str,
        quantity: int,
        timing: Optional[ServerTiming] = None,
    ) -> Order:
        """Insert an order and return it with its generated id"""
        async with self.connection(timing) as conn:
            async with self.query(timing):
                order_id = await conn.fetchval(
                    "INSERT INTO orders (customer_id, product, quantity) VALUES ($1, $2, $3) RETURNING id",
                    customer_id,
                    product,
                    quantity,
                )

        logger.info("Order created", order_id=order_id, customer_id=customer_id)
        return Order(id=order_id, customer_id=customer_id, product=product, quantity=quantity)
