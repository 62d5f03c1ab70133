"""
Subscription endpoints for recruiters and the PayChangu webhook.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from campus_gigs.core.auth_dependency import Capability, require_capability
from campus_gigs.core.errors import ValidationError
from campus_gigs.db.models.user import User
from campus_gigs.db.session import get_db
from campus_gigs.schemas.subscription import (
    SubscribeRequest,
    SubscriptionStatusResponse,
    WebhookPayload,
)
from campus_gigs.services import subscription_service
from campus_gigs.services.paychangu_client import PayChanguClient, get_payment_gateway


router = APIRouter(prefix="/subscriptions", tags=["Subscriptions"])


@router.post("")
def initiate_subscription(
    body: SubscribeRequest,
    user: User = Depends(require_capability(Capability.SUBSCRIBE)),
    db: Session = Depends(get_db),
    gateway: PayChanguClient = Depends(get_payment_gateway),
):
    """
    Start a subscription.

    Returns ``{free, message, periodStart, periodEnd}`` for the free plan,
    otherwise ``{paymentPageUrl, tx_ref}`` to redirect the payer to.
    """
    return subscription_service.initiate_subscription(db, gateway, user.id, body.plan)


@router.post("/webhook")
def subscription_webhook(body: WebhookPayload, db: Session = Depends(get_db)):
    """
    PayChangu payment callback.

    Only a body without ``data.tx_ref`` is rejected. Unknown references are
    acknowledged so the provider does not keep retrying them.
    """
    data = body.data or {}
    tx_ref = data.get("tx_ref")
    if not tx_ref:
        raise ValidationError("tx_ref is required")

    status = subscription_service.provider_status(data)
    subscription_service.apply_webhook_result(
        db, str(tx_ref), success=status == "success", payload=data
    )
    return {"received": True}


@router.get("/status", response_model=SubscriptionStatusResponse)
def subscription_status(
    user: User = Depends(require_capability(Capability.SUBSCRIBE)),
    db: Session = Depends(get_db),
):
    return subscription_service.get_current_status(db, user.id)
