"""
Gig-posting quota gate.

Decides whether a recruiter may create another gig in the current billing
period:

1. Resolve the current subscription (none means the free plan).
2. A paid plan whose status is not "active" is denied (402).
3. Unbounded plans are always allowed.
4. Otherwise gigs created inside the period are counted and compared with
   the plan's max_posts (403 once the limit is reached).

The check itself takes no lock. Callers that insert a gig afterwards must
serialize per recruiter themselves (see gig_service.create_gig).
"""
import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.orm import Session

from campus_gigs.core.errors import AuthzError, PaymentRequiredError
from campus_gigs.db.session import utcnow
from campus_gigs.services.plan_registry import FREE_PLAN_KEY, load_plans
from campus_gigs.services.subscription_service import (
    STATUS_ACTIVE,
    count_gigs_in_window,
    get_current_subscription,
    subtract_one_month,
)

logger = logging.getLogger(__name__)

REASON_NOT_ACTIVE = "Your subscription is not active."
REASON_PLAN_UNAVAILABLE = "Your subscription plan is no longer available."


@dataclass(frozen=True)
class QuotaDecision:
    allowed: bool
    plan: str
    used: Optional[int] = None
    max_posts: Optional[int] = None
    reason: Optional[str] = None
    status_code: int = 200

    def raise_for_denial(self) -> None:
        """Raise the mapped AppError if the post was denied."""
        if self.allowed:
            return
        if self.status_code == 402:
            raise PaymentRequiredError(self.reason)
        raise AuthzError(self.reason)


def authorize_gig_post(db: Session, recruiter_id: int) -> QuotaDecision:
    """
    Check whether the recruiter may create one more gig.

    Args:
        db: Database session
        recruiter_id: Recruiter user ID

    Returns:
        QuotaDecision; ``allowed`` is False with a reason when denied
    """
    subscription = get_current_subscription(db, recruiter_id)
    plan_key = subscription.plan if subscription else FREE_PLAN_KEY

    if plan_key != FREE_PLAN_KEY and subscription.status != STATUS_ACTIVE:
        logger.warning(
            f"Gig post denied, subscription not active: recruiter_id={recruiter_id}, "
            f"plan={plan_key}, status={subscription.status}"
        )
        return QuotaDecision(allowed=False, plan=plan_key, reason=REASON_NOT_ACTIVE, status_code=402)

    terms = load_plans(db).get(plan_key)
    if terms is None:
        logger.warning(f"Gig post denied, plan missing from registry: recruiter_id={recruiter_id}, plan={plan_key}")
        return QuotaDecision(allowed=False, plan=plan_key, reason=REASON_PLAN_UNAVAILABLE, status_code=403)

    if terms.unbounded:
        return QuotaDecision(allowed=True, plan=plan_key)

    if subscription:
        window_start = subscription.current_period_start
        window_end = subscription.current_period_end
    else:
        # Never subscribed: count the trailing month
        window_end = utcnow()
        window_start = subtract_one_month(window_end)

    used = count_gigs_in_window(db, recruiter_id, window_start, window_end)

    if used >= terms.max_posts:
        logger.warning(
            f"Gig post denied, quota reached: recruiter_id={recruiter_id}, plan={plan_key}, "
            f"used={used}, limit={terms.max_posts}"
        )
        return QuotaDecision(
            allowed=False,
            plan=plan_key,
            used=used,
            max_posts=terms.max_posts,
            reason=f"Monthly post limit of {terms.max_posts} reached.",
            status_code=403,
        )

    logger.debug(f"Gig post allowed: recruiter_id={recruiter_id}, plan={plan_key}, used={used}/{terms.max_posts}")
    return QuotaDecision(allowed=True, plan=plan_key, used=used, max_posts=terms.max_posts)
