"""
Pydantic schemas for admin plan management.
"""
from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class PlanCreate(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "key": "basic",
                "label": "Basic",
                "price": 5000,
                "max_posts": 10
            }
        },
    )

    key: str = Field(..., min_length=1, max_length=50, pattern="^[a-z0-9_-]+$")
    label: str = Field(..., min_length=1, max_length=100)
    price: Decimal = Field(..., ge=0)
    max_posts: Optional[int] = Field(None, ge=0, description="Posts per period (null = unlimited)")


class PlanUpdate(BaseModel):
    label: str = Field(..., min_length=1, max_length=100)
    price: Decimal = Field(..., ge=0)
    max_posts: Optional[int] = Field(None, ge=0)


class PlanResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    key: str
    label: str
    price: float
    max_posts: Optional[int] = None
    created_at: datetime
    updated_at: datetime
