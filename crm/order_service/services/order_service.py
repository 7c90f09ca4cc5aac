"""
Order creation pipeline

Validate locally, verify the customer remotely, then write locally. There is
no cross-service transaction: a customer deleted between the verification
call and the insert still ends up referenced by the new order.
"""

from typing import Optional, Protocol

import structlog

from crm.order_service.models.order import Order, OrderCreate
from crm.order_service.utils.validators import validate_order_create
from crm.shared.utils.errors import BadRequestError
from crm.shared.utils.timing import ServerTiming

logger = structlog.get_logger(__name__)


class CustomerVerifier(Protocol):
    """Remote existence check"""

    async def customer_exists(self, customer_id: int) -> bool:
        """Raise UpstreamUnavailableError when the answer cannot be known"""
        ...


class OrderStore(Protocol):
    """Local write"""

    async def create_order(
        self,
        customer_id: int,
        product: str,
        quantity: int,
        timing: Optional[ServerTiming] = None,
    ) -> Order:
        ...


class OrderCreator:
    """High-level order creation service"""

    def __init__(self, verifier: CustomerVerifier, store: OrderStore):
        self.verifier = verifier
        self.store = store

    async def create(self, data: OrderCreate, timing: Optional[ServerTiming] = None) -> Order:
        """
        Create an order for an existing customer.

        Raises:
            BadRequestError: invalid fields, or the customer service did not
                confirm the customer. Nothing is written.
            UpstreamUnavailableError: the customer service could not be
                reached. Nothing is written.
            StorageError: the insert failed.
        """
        errors = validate_order_create(data)
        if errors:
            logger.warning("Order creation validation failed", error=errors[0])
            raise BadRequestError(errors[0])

        timing = timing or ServerTiming()
        with timing.measure("verify"):
            exists = await self.verifier.customer_exists(data.customer_id)
        if not exists:
            raise BadRequestError("Customer not found")

        return await self.store.create_order(data.customer_id, data.product, data.quantity, timing)
