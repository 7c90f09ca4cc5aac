"""
Upstream HTTP client

Shared AsyncClient lifecycle for service-to-service calls:
- Single AsyncClient created at app startup, closed at shutdown
- Bounded connect/read/write/pool timeouts so a stalled peer cannot hang a handler
- Falls back to a per-request client when used before start()
"""

from typing import Optional

import httpx
import structlog

from crm.shared.config import UpstreamSettings

logger = structlog.get_logger(__name__)


class UpstreamClient:
    """
    HTTP client for one upstream service.

    Lifecycle:
        - Call start() during app startup (FastAPI lifespan)
        - Call stop() during app shutdown
    """

    MAX_CONNECTIONS = 100
    MAX_KEEPALIVE = 20
    KEEPALIVE_EXPIRY = 5.0

    def __init__(
        self,
        base_url: str,
        settings: UpstreamSettings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.settings = settings
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def timeout(self) -> httpx.Timeout:
        return httpx.Timeout(
            connect=self.settings.upstream_connect_timeout,
            read=self.settings.upstream_read_timeout,
            write=self.settings.upstream_read_timeout,
            pool=self.settings.upstream_connect_timeout,
        )

    def _build_client(self) -> httpx.AsyncClient:
        limits = httpx.Limits(
            max_connections=self.MAX_CONNECTIONS,
            max_keepalive_connections=self.MAX_KEEPALIVE,
            keepalive_expiry=self.KEEPALIVE_EXPIRY,
        )
        return httpx.AsyncClient(
            base_url=self.base_url,
            limits=limits,
            timeout=self.timeout,
            transport=self._transport,
        )

    async def start(self):
        """Initialize the shared HTTP client"""
        if self._client is not None:
            logger.warning("Upstream client already started", base_url=self.base_url)
            return

        self._client = self._build_client()
        logger.info(
            "Upstream client started",
            base_url=self.base_url,
            connect_timeout=self.settings.upstream_connect_timeout,
            read_timeout=self.settings.upstream_read_timeout,
        )

    async def stop(self):
        """Close the HTTP client and release resources"""
        if self._client:
            await self._client.aclose()
            self._client = None
            logger.info("Upstream client stopped", base_url=self.base_url)

    async def request(self, method: str, path: str, **kwargs) -> httpx.Response:
        """
        Send a request to base_url + path.

        Transport failures propagate as httpx.RequestError; callers decide
        how to classify them.
        """
        if self._client:
            return await self._client.request(method, path, **kwargs)

        logger.warning("Upstream client not initialized, using per-request client", base_url=self.base_url)
        async with self._build_client() as client:
            return await client.request(method, path, **kwargs)
