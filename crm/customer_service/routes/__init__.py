"""
API routes for customer service
"""

from . import customers

__all__ = ["customers"]
