"""
Prefix routing and forwarding to the backend services
"""

from typing import List, Optional, Tuple

import httpx
import structlog
from fastapi.responses import Response

from crm.shared.utils.http_client import UpstreamClient
from crm.shared.utils.responses import JSON_MEDIA_TYPE, error_response

logger = structlog.get_logger(__name__)

# The only response header relayed from a backend besides the status
RELAYED_HEADER = "server-timing"


class ServiceRouter:
    """
    Ordered (prefix, upstream) table. First match wins.

    No load balancing, retries or circuit breaking: one upstream per prefix,
    one attempt per request.
    """

    def __init__(self, routes: List[Tuple[str, UpstreamClient]]):
        self.routes = routes

    @property
    def clients(self) -> List[UpstreamClient]:
        return [client for _, client in self.routes]

    def resolve(self, path: str) -> Optional[UpstreamClient]:
        for prefix, client in self.routes:
            if path.startswith(prefix):
                return client
        return None

    async def start(self):
        for client in self.clients:
            await client.start()

    async def stop(self):
        for client in self.clients:
            await client.stop()

    async def forward(self, method: str, path: str, body: bytes) -> Response:
        """
        Forward a request to the upstream owning path.

        Sends the incoming method and body with a fixed JSON content type.
        Relays status, body and Server-Timing; every other upstream header
        is dropped.
        """
        client = self.resolve(path)
        if client is None:
            return error_response(404, "Not found")

        try:
            upstream = await client.request(
                method,
                path,
                content=body,
                headers={"content-type": JSON_MEDIA_TYPE},
            )
        except httpx.RequestError as e:
            message = str(e) or type(e).__name__
            logger.warning(
                "Upstream unavailable",
                method=method,
                path=path,
                upstream=client.base_url,
                error=message,
            )
            return error_response(502, f"Upstream unavailable: {message}")

        headers = {}
        server_timing = upstream.headers.get(RELAYED_HEADER)
        if server_timing is not None:
            headers[RELAYED_HEADER] = server_timing

        return Response(
            content=upstream.content,
            status_code=upstream.status_code,
            headers=headers,
            media_type=JSON_MEDIA_TYPE,
        )
