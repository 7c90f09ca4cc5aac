"""
Order data models and schemas
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from crm.shared.utils.validators import INT64_MAX


class Order(BaseModel):
    """Order record as stored and returned"""

    id: int
    customer_id: int
    product: str
    quantity: int

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump()


class OrderCreate(BaseModel):
    """Schema for creating an order (API request body)"""

    model_config = ConfigDict(strict=True)

    customer_id: Optional[int] = Field(None, le=INT64_MAX, description="Referenced customer")
    product: Optional[str] = Field(None, description="Product name")
    quantity: Optional[int] = Field(None, le=INT64_MAX, description="Units ordered")
