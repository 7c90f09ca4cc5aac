"""
Business logic for order service
"""

from .order_service import CustomerVerifier, OrderCreator, OrderStore

__all__ = ["CustomerVerifier", "OrderCreator", "OrderStore"]
