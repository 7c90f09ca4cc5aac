"""
Catch-all forwarding route
"""

from starlette.requests import Request
from starlette.types import Receive, Scope, Send

from crm.gateway.utils.proxy import ServiceRouter


def get_service_router(request: Request) -> ServiceRouter:
    return request.app.state.service_router


def upstream_path(request: Request) -> str:
    """Path as the client sent it, still percent-encoded"""
    raw_path = request.scope.get("raw_path")
    if not raw_path:
        return request.url.path
    return raw_path.decode("latin-1").split("?", 1)[0]


class ProxyEndpoint:
    """
    Forward /customers* and /orders*; everything else is not found.

    A plain ASGI endpoint rather than a route function, so the route
    matches every method instead of a fixed list.
    """

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        request = Request(scope, receive)
        body = await request.body()
        response = await get_service_router(request).forward(request.method, upstream_path(request), body)
        await response(scope, receive, send)
