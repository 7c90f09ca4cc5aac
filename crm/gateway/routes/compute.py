"""
CPU-bound comparison endpoint
"""

from typing import Optional

from fastapi import APIRouter, Query, Request

from crm.gateway.utils.fibonacci import fibonacci, parse_n
from crm.shared.utils.responses import json_response
from crm.shared.utils.timing import ServerTiming

router = APIRouter()


@router.get("/compute")
def compute(request: Request, n: Optional[str] = Query(None, description="Fibonacci index")):
    """Compute fib(n) with 64-bit wraparound; runs in the threadpool"""
    n_value = parse_n(n, request.app.state.settings.compute_default_n)

    timing = ServerTiming()
    with timing.measure("compute"):
        result = fibonacci(n_value)
    compute_ms = timing.get("compute")

    response = json_response(
        200,
        {"n": n_value, "result": str(result), "compute_ms": round(compute_ms, 3)},
    )
    response.headers["server-timing"] = f"compute;dur={compute_ms:.3f}"
    return response
