"""
Validation utilities for order service
"""

from typing import List

from crm.order_service.models.order import OrderCreate
from crm.shared.utils.validators import MAX_TEXT_LENGTH

REQUIRED_FIELDS_MESSAGE = "customer_id, product, and quantity are required"


def validate_order_create(data: OrderCreate) -> List[str]:
    """
    Validate an order creation request locally, before any remote call
    Returns list of validation errors in field order
    """
    errors = []

    if data.customer_id is None:
        errors.append(REQUIRED_FIELDS_MESSAGE)
    elif data.customer_id <= 0:
        errors.append("customer_id must be positive")

    if not data.product:
        errors.append(REQUIRED_FIELDS_MESSAGE)
    elif len(data.product) > MAX_TEXT_LENGTH:
        errors.append(f"product must be {MAX_TEXT_LENGTH} characters or less")

    if data.quantity is None:
        errors.append(REQUIRED_FIELDS_MESSAGE)
    elif data.quantity <= 0:
        errors.append("quantity must be positive")

    return errors
