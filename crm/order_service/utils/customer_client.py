"""
Customer Service HTTP Client
Answers "does this customer exist?" for the order service.
"""

from typing import Optional

import httpx
import structlog

from crm.shared.config import UpstreamSettings
from crm.shared.utils.errors import UpstreamUnavailableError
from crm.shared.utils.http_client import UpstreamClient

logger = structlog.get_logger(__name__)


class CustomerServiceClient(UpstreamClient):
    """Verification calls against the customer service's get-by-id endpoint"""

    def __init__(self, settings: UpstreamSettings, transport: Optional[httpx.AsyncBaseTransport] = None):
        super().__init__(settings.customer_service_url, settings, transport=transport)

    async def customer_exists(self, customer_id: int) -> bool:
        """
        True only when the customer service answers 200.

        Any other status means the customer is treated as absent. A transport
        failure says nothing about existence and raises UpstreamUnavailableError.
        """
        try:
            response = await self.request("GET", f"/customers/{customer_id}")
        except httpx.RequestError as e:
            logger.warning(
                "Customer service unreachable",
                customer_id=customer_id,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise UpstreamUnavailableError("Customer service unavailable") from e

        if response.status_code != 200:
            logger.info(
                "Customer verification failed",
                customer_id=customer_id,
                status_code=response.status_code,
            )
            return False
        return True
