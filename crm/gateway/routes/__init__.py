"""
API routes for the gateway
"""

from . import compute, proxy

__all__ = ["compute", "proxy"]
