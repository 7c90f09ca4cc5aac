"""
Health check routes
"""

from fastapi import APIRouter

from crm.shared.utils.responses import json_response

router = APIRouter()


@router.get("/healthz")
async def health_check():
    """Liveness probe; does not touch the store"""
    return json_response(200, {"status": "ok"})
