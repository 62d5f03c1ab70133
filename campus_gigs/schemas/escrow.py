"""
Pydantic schemas for escrow endpoints.
"""
from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class EscrowCreateRequest(BaseModel):
    """Request schema for holding funds against a gig."""
    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "gigId": 12,
                "amount": 10000,
                "paymentMethod": "mobile",
                "phone": "+265991234567"
            }
        },
    )

    gig_id: int = Field(..., alias="gigId", description="Gig the deposit is held for")
    amount: Decimal = Field(..., gt=0, description="Amount to hold, in MWK")
    payment_method: str = Field(..., alias="paymentMethod", pattern="^(card|mobile)$")
    phone: Optional[str] = Field(None, description="Payer phone, required for mobile money")


class EscrowCheckoutResponse(BaseModel):
    paymentPageUrl: str = Field(..., description="Hosted checkout URL")
    tx_ref: str = Field(..., description="Transaction reference for this deposit")


class EscrowReleaseRequest(BaseModel):
    tx_ref: Optional[str] = Field(None, description="Transaction reference of the deposit")


class EscrowReleaseResponse(BaseModel):
    success: bool
    message: str
    order_reference: str


class EscrowVerifyResponse(BaseModel):
    tx_ref: str
    provider_status: Optional[str] = None
    paid: bool


class EscrowResponse(BaseModel):
    """Schema for a single escrow record."""
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    gig_id: int
    payment_method: str
    tx_ref: str = Field(..., validation_alias="order_reference")
    trans_id: Optional[str] = None
    phone: Optional[str] = None
    amount: float
    paid: bool
    created_at: datetime
    paid_at: Optional[datetime] = None
