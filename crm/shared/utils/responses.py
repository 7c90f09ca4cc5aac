"""
JSON response helpers

Every CRM response is application/json. Bodies are serialised here rather
than by FastAPI so that serialisation can be timed as the 'ser' stage.
"""

import json
from typing import Any, Optional

from fastapi.responses import Response

from crm.shared.utils.timing import ServerTiming

JSON_MEDIA_TYPE = "application/json"


def json_response(status_code: int, payload: Any, timing: Optional[ServerTiming] = None) -> Response:
    """Serialise payload and attach Server-Timing when a timing is given"""
    if timing is not None:
        with timing.measure("ser"):
            body = json.dumps(payload, separators=(",", ":"))
        headers = timing.headers()
    else:
        body = json.dumps(payload, separators=(",", ":"))
        headers = None

    return Response(
        content=body,
        status_code=status_code,
        media_type=JSON_MEDIA_TYPE,
        headers=headers,
    )


def error_response(status_code: int, message: str) -> Response:
    return json_response(status_code, {"error": message})


def empty_response(status_code: int = 204, timing: Optional[ServerTiming] = None) -> Response:
    """Body-less response, e.g. 204 after a delete"""
    return Response(
        status_code=status_code,
        media_type=JSON_MEDIA_TYPE,
        headers=timing.headers() if timing is not None else None,
    )
