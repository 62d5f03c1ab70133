"""
Escrow ledger.

An escrow row is inserted as pending before the payer is sent to checkout
and flips to paid exactly once. The transaction reference
(``order_reference``) is the idempotency key for every later update.
"""
import logging
from decimal import Decimal
from typing import Dict, Optional

from sqlalchemy import update
from sqlalchemy.orm import Session

from campus_gigs.core import config
from campus_gigs.core.auth_dependency import can_manage_gig
from campus_gigs.core.errors import AuthzError, NotFoundError, ValidationError
from campus_gigs.db.models.escrow import Escrow
from campus_gigs.db.models.gig import Gig
from campus_gigs.db.models.user import User
from campus_gigs.db.session import utcnow
from campus_gigs.services.paychangu_client import (
    ESCROW_PREFIX,
    PayChanguClient,
    generate_tx_ref,
)

logger = logging.getLogger(__name__)

PAYMENT_METHODS = ("card", "mobile")


def open_deposit(
    db: Session,
    gig_id: int,
    payment_method: str,
    tx_ref: str,
    phone: Optional[str],
    amount,
) -> Escrow:
    """
    Insert and commit a pending escrow row.

    The phone number is only kept for mobile-money deposits.
    """
    escrow = Escrow(
        gig_id=gig_id,
        payment_method=payment_method,
        order_reference=tx_ref,
        trans_id=None,
        phone=phone if payment_method == "mobile" else None,
        amount=amount,
        paid=False,
    )
    db.add(escrow)
    db.commit()
    db.refresh(escrow)

    logger.info(f"Escrow deposit opened: tx_ref={tx_ref}, gig_id={gig_id}, amount={amount}, method={payment_method}")
    return escrow


def get_by_ref(db: Session, tx_ref: str) -> Escrow:
    escrow = db.query(Escrow).filter(Escrow.order_reference == tx_ref).first()
    if not escrow:
        raise NotFoundError("Escrow not found")
    return escrow


def latest_for_gig(db: Session, gig_id: int) -> Optional[Escrow]:
    return (
        db.query(Escrow)
        .filter(Escrow.gig_id == gig_id)
        .order_by(Escrow.created_at.desc(), Escrow.id.desc())
        .first()
    )


def mark_paid(db: Session, tx_ref: str) -> bool:
    """
    Mark an escrow as paid.

    A single conditional UPDATE performs the transition, so concurrent
    confirmations for the same reference cannot both succeed.

    Returns:
        True if this call performed the transition, False if the escrow
        was already paid (``paid_at`` is left untouched)

    Raises:
        NotFoundError: no escrow matches tx_ref
    """
    result = db.execute(
        update(Escrow)
        .where(Escrow.order_reference == tx_ref, Escrow.paid.is_(False))
        .values(paid=True, paid_at=utcnow())
        .execution_options(synchronize_session=False)
    )
    db.commit()

    if result.rowcount:
        logger.info(f"Escrow marked paid: tx_ref={tx_ref}")
        return True

    if not db.query(Escrow.id).filter(Escrow.order_reference == tx_ref).first():
        raise NotFoundError("Escrow record not found")

    logger.info(f"Escrow already paid, confirmation ignored: tx_ref={tx_ref}")
    return False


def _owned_gig(db: Session, user: User, gig_id: int) -> Gig:
    gig = db.query(Gig).filter(Gig.id == gig_id).first()
    if not gig:
        raise NotFoundError("Gig not found")
    if not can_manage_gig(user, gig):
        raise AuthzError("You can only manage escrow for your own gigs")
    return gig


def initiate_escrow(
    db: Session,
    gateway: PayChanguClient,
    recruiter: User,
    gig_id: int,
    amount,
    payment_method: str,
    phone: Optional[str] = None,
) -> Dict[str, str]:
    """
    Hold funds for a gig through a hosted checkout.

    The pending row is committed before the provider is called. If the
    provider call fails, the row stays pending without a checkout and the
    GatewayError propagates to the caller.

    Returns:
        {"paymentPageUrl": ..., "tx_ref": ...}
    """
    if payment_method not in PAYMENT_METHODS:
        raise ValidationError(f"paymentMethod must be one of: {', '.join(PAYMENT_METHODS)}")
    if payment_method == "mobile" and not phone:
        raise ValidationError("phone is required for mobile money deposits")
    if Decimal(str(amount)) <= 0:
        raise ValidationError("amount must be greater than zero")

    _owned_gig(db, recruiter, gig_id)

    tx_ref = generate_tx_ref(ESCROW_PREFIX)
    open_deposit(db, gig_id, payment_method, tx_ref, phone, amount)

    checkout_url = gateway.initiate_checkout(
        amount=amount,
        currency=config.PAYCHANGU_CURRENCY,
        tx_ref=tx_ref,
        callback_url=config.ESCROW_CALLBACK_URL,
        return_url=config.ESCROW_RETURN_URL,
        metadata={"gigId": gig_id},
        title="Escrow Deposit",
    )

    return {"paymentPageUrl": checkout_url, "tx_ref": tx_ref}


def release_escrow(db: Session, user: User, tx_ref: str) -> Dict:
    """Confirm an escrow as paid on behalf of the gig's recruiter (or an admin)."""
    if not tx_ref:
        raise ValidationError("tx_ref is required")

    escrow = get_by_ref(db, tx_ref)
    _owned_gig(db, user, escrow.gig_id)

    updated = mark_paid(db, tx_ref)
    return {
        "success": True,
        "message": "Escrow released successfully" if updated else "Escrow already released",
        "order_reference": tx_ref,
    }


def verify_and_release(db: Session, gateway: PayChanguClient, user: User, tx_ref: str) -> Dict:
    """
    Poll the provider for a deposit and mark it paid if the charge succeeded.

    Returns:
        {"tx_ref", "provider_status", "paid"}
    """
    escrow = get_by_ref(db, tx_ref)
    _owned_gig(db, user, escrow.gig_id)

    data = gateway.verify_transaction(tx_ref)
    provider_status = data.get("status")

    if provider_status == "success":
        if data.get("reference") and not escrow.trans_id:
            escrow.trans_id = str(data["reference"])
            db.commit()
        mark_paid(db, tx_ref)

    db.refresh(escrow)
    return {"tx_ref": tx_ref, "provider_status": provider_status, "paid": bool(escrow.paid)}
