"""
Data models for customer service
"""

from .customer import Customer, CustomerCreate

__all__ = [
    "Customer",
    "CustomerCreate",
]
