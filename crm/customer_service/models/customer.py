"""
Customer data models and schemas
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class Customer(BaseModel):
    """Customer record as stored and returned"""

    id: int
    name: str
    email: str

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump()


class CustomerCreate(BaseModel):
    """Schema for creating a customer (API request body)

    Fields are optional here so that missing values are reported by the
    field validators with their own messages rather than as bad JSON.
    """

    model_config = ConfigDict(strict=True)

    name: Optional[str] = Field(None, description="Customer display name")
    email: Optional[str] = Field(None, description="Contact email address")
