"""
Subscription ledger.

Each billing period is its own row. A recruiter's *current* subscription is
resolved as the row with the greatest ``(created_at, id)``; insertion order
is never relied on. State machine per recruiter:

    no-subscription -> pending   (paid plan chosen, checkout started)
    no-subscription -> active    (free plan)
    pending         -> active | past_due   (provider webhook)
    active          -> canceled  (admin)
    any             -> active    (admin reactivation)
"""
import calendar
import logging
from datetime import datetime
from typing import Dict, List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session

from campus_gigs.core import config
from campus_gigs.core.errors import NotFoundError, ValidationError
from campus_gigs.db.models.gig import Gig
from campus_gigs.db.models.subscription import Subscription
from campus_gigs.db.models.user import User
from campus_gigs.db.models.webhook_event import WebhookEvent
from campus_gigs.db.session import utcnow
from campus_gigs.services.paychangu_client import (
    FREE_SUBSCRIPTION_PREFIX,
    SUBSCRIPTION_PREFIX,
    PayChanguClient,
    generate_tx_ref,
)
from campus_gigs.services.plan_registry import FREE_PLAN_KEY, load_plans

logger = logging.getLogger(__name__)

STATUS_PENDING = "pending"
STATUS_ACTIVE = "active"
STATUS_PAST_DUE = "past_due"
STATUS_CANCELED = "canceled"


def add_one_month(moment: datetime) -> datetime:
    """Same day next month, clamped to the last day of a shorter month."""
    year = moment.year + moment.month // 12
    month = moment.month % 12 + 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def subtract_one_month(moment: datetime) -> datetime:
    year = moment.year - (1 if moment.month == 1 else 0)
    month = 12 if moment.month == 1 else moment.month - 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def billing_period(start: Optional[datetime] = None) -> Tuple[datetime, datetime]:
    start = start or utcnow()
    return start, add_one_month(start)


def get_current_subscription(db: Session, recruiter_id: int) -> Optional[Subscription]:
    return (
        db.query(Subscription)
        .filter(Subscription.recruiter_id == recruiter_id)
        .order_by(Subscription.created_at.desc(), Subscription.id.desc())
        .first()
    )


def get_latest_free_subscription(db: Session, recruiter_id: int) -> Optional[Subscription]:
    return (
        db.query(Subscription)
        .filter(
            Subscription.recruiter_id == recruiter_id,
            Subscription.plan == FREE_PLAN_KEY,
        )
        .order_by(Subscription.created_at.desc(), Subscription.id.desc())
        .first()
    )


def count_gigs_in_window(db: Session, recruiter_id: int, start: datetime, end: datetime) -> int:
    """Gigs created by a recruiter with ``start <= created_at <= end``."""
    return db.query(func.count(Gig.id)).filter(
        Gig.recruiter_id == recruiter_id,
        Gig.created_at >= start,
        Gig.created_at <= end,
    ).scalar() or 0


def start_free_period(db: Session, recruiter_id: int) -> Dict[str, datetime]:
    """Activate a zero-cost, one-month free period. No payment is involved."""
    period_start, period_end = billing_period()
    subscription = Subscription(
        recruiter_id=recruiter_id,
        plan=FREE_PLAN_KEY,
        order_reference=generate_tx_ref(FREE_SUBSCRIPTION_PREFIX),
        status=STATUS_ACTIVE,
        current_period_start=period_start,
        current_period_end=period_end,
    )
    db.add(subscription)
    db.commit()

    logger.info(f"Free subscription activated: recruiter_id={recruiter_id}, period_end={period_end.isoformat()}")
    return {"periodStart": period_start, "periodEnd": period_end}


def start_paid_period(
    db: Session,
    gateway: PayChanguClient,
    recruiter_id: int,
    plan_key: str,
    amount,
) -> Dict[str, str]:
    """
    Record a pending period for a paid plan and start the provider checkout.

    The pending row is committed first; a gateway failure leaves it pending
    with no checkout attached.

    Returns:
        {"tx_ref": ..., "checkout_url": ...}
    """
    period_start, period_end = billing_period()
    tx_ref = generate_tx_ref(SUBSCRIPTION_PREFIX)

    db.add(Subscription(
        recruiter_id=recruiter_id,
        plan=plan_key,
        order_reference=tx_ref,
        status=STATUS_PENDING,
        current_period_start=period_start,
        current_period_end=period_end,
    ))
    db.commit()
    logger.info(f"Paid subscription pending: recruiter_id={recruiter_id}, plan={plan_key}, tx_ref={tx_ref}")

    checkout_url = gateway.initiate_checkout(
        amount=amount,
        currency=config.PAYCHANGU_CURRENCY,
        tx_ref=tx_ref,
        callback_url=config.SUBSCRIPTION_CALLBACK_URL,
        return_url=config.SUBSCRIPTION_RETURN_URL,
        metadata={"recruiterId": recruiter_id, "plan": plan_key},
        title=f"Subscription: {plan_key.capitalize()}",
    )
    return {"tx_ref": tx_ref, "checkout_url": checkout_url}


def initiate_subscription(db: Session, gateway: PayChanguClient, recruiter_id: int, plan_key: str) -> Dict:
    """Start a subscription on ``plan_key``; free plans skip checkout."""
    plans = load_plans(db)
    if not plan_key or plan_key not in plans:
        raise ValidationError("Invalid plan.")

    if plan_key == FREE_PLAN_KEY:
        period = start_free_period(db, recruiter_id)
        return {
            "free": True,
            "message": "Free plan activated—no payment required.",
            **period,
        }

    result = start_paid_period(db, gateway, recruiter_id, plan_key, plans[plan_key].price)
    return {"paymentPageUrl": result["checkout_url"], "tx_ref": result["tx_ref"]}


def provider_status(payload: Optional[dict]) -> Optional[str]:
    """The provider's ``status`` string, or None when absent or not a string."""
    raw = payload.get("status") if payload else None
    return raw if isinstance(raw, str) else None


def apply_webhook_result(db: Session, tx_ref: str, success: bool, payload: Optional[dict] = None) -> bool:
    """
    Apply a provider payment result to the matching subscription.

    Unknown references are ignored so provider replays never fail; nothing
    is written for them. Matching deliveries are appended to the webhook
    event log before the status is overwritten.

    Returns:
        True if a subscription row was updated
    """
    subscription = db.query(Subscription).filter(Subscription.order_reference == tx_ref).first()
    if not subscription:
        logger.warning(f"Webhook for unknown tx_ref ignored: tx_ref={tx_ref}")
        return False

    new_status = STATUS_ACTIVE if success else STATUS_PAST_DUE
    previous_status = subscription.status

    db.add(WebhookEvent(
        tx_ref=tx_ref,
        status=provider_status(payload),
        payload=payload,
    ))
    subscription.status = new_status
    subscription.updated_at = utcnow()
    db.commit()

    if previous_status == STATUS_ACTIVE and new_status == STATUS_PAST_DUE:
        logger.warning(f"Webhook downgraded active subscription: tx_ref={tx_ref}")
    logger.info(f"Subscription webhook applied: tx_ref={tx_ref}, {previous_status} -> {new_status}")
    return True


def get_current_status(db: Session, recruiter_id: int) -> Dict:
    """
    Summarise the recruiter's current period and post usage.

    Read-only: a recruiter with no subscription gets a synthetic
    "not subscribed yet" answer and no row is created.
    """
    plans = load_plans(db)
    subscription = get_current_subscription(db, recruiter_id)

    if not subscription:
        return {
            "message": "No subscription found. You can start with the free plan.",
            "plan": None,
            "status": None,
            "periodStart": None,
            "periodEnd": None,
            "usedPosts": 0,
            "maxPosts": plans[FREE_PLAN_KEY].max_posts,
            "freeAvailableAt": add_one_month(utcnow()),
        }

    used = count_gigs_in_window(
        db, recruiter_id, subscription.current_period_start, subscription.current_period_end
    )

    terms = plans.get(subscription.plan)
    if terms is None:
        logger.warning(
            f"Subscription references a deleted plan: subscription_id={subscription.id}, plan={subscription.plan}"
        )

    last_free = get_latest_free_subscription(db, recruiter_id)

    return {
        "plan": subscription.plan,
        "status": subscription.status,
        "periodStart": subscription.current_period_start,
        "periodEnd": subscription.current_period_end,
        "usedPosts": used,
        "maxPosts": terms.max_posts if terms else None,
        "freeAvailableAt": last_free.current_period_end if last_free else None,
    }


def _set_status(db: Session, subscription_id: int, status: str) -> None:
    subscription = db.query(Subscription).filter(Subscription.id == subscription_id).first()
    if not subscription:
        raise NotFoundError("Subscription not found")

    previous_status = subscription.status
    subscription.status = status
    subscription.updated_at = utcnow()
    db.commit()

    logger.info(f"Subscription status set by admin: id={subscription_id}, {previous_status} -> {status}")


def cancel(db: Session, subscription_id: int) -> Dict[str, bool]:
    _set_status(db, subscription_id, STATUS_CANCELED)
    return {"success": True}


def reactivate(db: Session, subscription_id: int) -> Dict[str, bool]:
    # Admin override: no check of the prior status or the billing period
    _set_status(db, subscription_id, STATUS_ACTIVE)
    return {"success": True}


def list_subscriptions(db: Session) -> List[Dict]:
    rows = (
        db.query(Subscription, User.name)
        .join(User, User.id == Subscription.recruiter_id)
        .order_by(Subscription.created_at.desc(), Subscription.id.desc())
        .all()
    )
    return [
        {
            "id": sub.id,
            "recruiter_id": sub.recruiter_id,
            "recruiterName": name,
            "plan": sub.plan,
            "status": sub.status,
            "current_period_start": sub.current_period_start,
            "current_period_end": sub.current_period_end,
            "created_at": sub.created_at,
        }
        for sub, name in rows
    ]
