"""
Data models for order service
"""

from .order import Order, OrderCreate

__all__ = [
    "Order",
    "OrderCreate",
]
