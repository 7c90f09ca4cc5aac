"""
API routes for order service
"""

from . import orders

__all__ = ["orders"]
