"""
Pydantic schemas for subscription endpoints.
"""
from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class SubscribeRequest(BaseModel):
    """Request schema for starting a subscription."""
    model_config = ConfigDict(json_schema_extra={"example": {"plan": "basic"}})

    plan: str = Field(..., min_length=1, description="Plan key, e.g. 'free' or 'basic'")


class WebhookPayload(BaseModel):
    """PayChangu callback body. Only ``data.tx_ref`` and ``data.status`` are read."""
    data: Optional[Dict[str, Any]] = None


class SubscriptionStatusResponse(BaseModel):
    message: Optional[str] = None
    plan: Optional[str] = None
    status: Optional[str] = None
    periodStart: Optional[datetime] = None
    periodEnd: Optional[datetime] = None
    usedPosts: int = 0
    maxPosts: Optional[int] = Field(None, description="Posts allowed per period (null = unlimited)")
    freeAvailableAt: Optional[datetime] = None


class AdminSubscriptionResponse(BaseModel):
    id: int
    recruiter_id: int
    recruiterName: Optional[str] = None
    plan: str
    status: str
    current_period_start: datetime
    current_period_end: datetime
    created_at: datetime


class SuccessResponse(BaseModel):
    success: bool = True
