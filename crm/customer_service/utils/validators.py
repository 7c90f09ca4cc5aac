"""
Validation utilities for customer service
"""

from typing import List

from crm.customer_service.models.customer import CustomerCreate
from crm.shared.utils.validators import MAX_TEXT_LENGTH


def validate_customer_create(data: CustomerCreate) -> List[str]:
    """
    Validate a customer creation request
    Returns list of validation errors, most significant first
    """
    errors = []

    if not data.name or not data.email:
        errors.append("name and email are required")
        return errors

    if len(data.name) > MAX_TEXT_LENGTH:
        errors.append(f"name must be {MAX_TEXT_LENGTH} characters or less")

    if len(data.email) > MAX_TEXT_LENGTH or "@" not in data.email:
        errors.append("invalid email format")

    return errors
