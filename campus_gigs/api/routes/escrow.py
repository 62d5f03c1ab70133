"""
Escrow endpoints.

Recruiters hold funds for a gig through a PayChangu checkout, then confirm
(release) the deposit once the payment has gone through.
"""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from campus_gigs.core.auth_dependency import Capability, require_capability
from campus_gigs.db.models.user import User
from campus_gigs.db.session import get_db
from campus_gigs.schemas.escrow import (
    EscrowCheckoutResponse,
    EscrowCreateRequest,
    EscrowReleaseRequest,
    EscrowReleaseResponse,
    EscrowResponse,
    EscrowVerifyResponse,
)
from campus_gigs.services import escrow_service
from campus_gigs.services.paychangu_client import PayChanguClient, get_payment_gateway


router = APIRouter(prefix="/escrow", tags=["Escrow"])


@router.post("", response_model=EscrowCheckoutResponse)
def initiate_escrow(
    body: EscrowCreateRequest,
    user: User = Depends(require_capability(Capability.FUND_ESCROW)),
    db: Session = Depends(get_db),
    gateway: PayChanguClient = Depends(get_payment_gateway),
):
    """Hold funds (card or mobile money) for a gig."""
    return escrow_service.initiate_escrow(
        db,
        gateway,
        recruiter=user,
        gig_id=body.gig_id,
        amount=body.amount,
        payment_method=body.payment_method,
        phone=body.phone,
    )


@router.post("/noop", status_code=status.HTTP_200_OK)
def noop_callback():
    """Callback sink for PayChangu escrow notifications; state is settled by release/verify."""
    return Response(status_code=status.HTTP_200_OK)


@router.post("/release", response_model=EscrowReleaseResponse)
def release_escrow(
    body: EscrowReleaseRequest,
    user: User = Depends(require_capability(Capability.FUND_ESCROW)),
    db: Session = Depends(get_db),
):
    return escrow_service.release_escrow(db, user, body.tx_ref)


@router.post("/{tx_ref}/verify", response_model=EscrowVerifyResponse)
def verify_escrow(
    tx_ref: str,
    user: User = Depends(require_capability(Capability.FUND_ESCROW)),
    db: Session = Depends(get_db),
    gateway: PayChanguClient = Depends(get_payment_gateway),
):
    """Poll PayChangu for the deposit and release it if the charge succeeded."""
    return escrow_service.verify_and_release(db, gateway, user, tx_ref)


@router.get("/{tx_ref}", response_model=EscrowResponse)
def get_escrow(
    tx_ref: str,
    user: User = Depends(require_capability(Capability.VIEW_ESCROW)),
    db: Session = Depends(get_db),
):
    escrow = escrow_service.get_by_ref(db, tx_ref)
    return EscrowResponse.model_validate(escrow)
