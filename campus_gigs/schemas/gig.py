"""
Pydantic schemas for gig posting and application review.
"""
from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class GigCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    payment_amount: Optional[Decimal] = Field(None, ge=0)
    status: str = Field("open", pattern="^(draft|open)$")


class GigResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    recruiter_id: int
    title: str
    description: Optional[str] = None
    payment_amount: Optional[float] = None
    status: str
    created_at: datetime


class CompletedCountResponse(BaseModel):
    count: int


class FeeBreakdownResponse(BaseModel):
    completedCount: int
    isFirstGig: bool
    isPowerUser: bool
    recruiterFeePercent: float
    studentFeePercent: float
    recruiterFeeAmount: float
    studentFeeAmount: float
    netToStudent: float

    @classmethod
    def from_breakdown(cls, fees) -> "FeeBreakdownResponse":
        return cls(
            completedCount=fees.completed_count,
            isFirstGig=fees.is_first_gig,
            isPowerUser=fees.is_power_user,
            recruiterFeePercent=fees.recruiter_fee_percent,
            studentFeePercent=fees.student_fee_percent,
            recruiterFeeAmount=fees.recruiter_fee_amount,
            studentFeeAmount=fees.student_fee_amount,
            netToStudent=fees.net_to_student,
        )


class ApplicationStatusUpdate(BaseModel):
    status: str = Field(..., min_length=1)


class ApplicationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    gig_id: int
    student_id: int
    status: str
    payment_amount: Optional[float] = None
    applied_at: datetime
    completed_at: Optional[datetime] = None
