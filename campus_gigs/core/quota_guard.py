"""
Quota enforcement dependency for gig posting.

Routes that create gigs depend on ``require_gig_quota`` so a recruiter over
the plan limit is rejected before the request body is processed.
"""
from fastapi import Depends
from sqlalchemy.orm import Session

from campus_gigs.core.auth_dependency import Capability, require_capability
from campus_gigs.db.models.user import User
from campus_gigs.db.session import get_db
from campus_gigs.services.quota_service import authorize_gig_post


def require_gig_quota(
    user: User = Depends(require_capability(Capability.POST_GIGS)),
    db: Session = Depends(get_db),
) -> User:
    """
    Raises:
        PaymentRequiredError 402: paid subscription not active
        AuthzError 403: monthly post limit reached
    """
    decision = authorize_gig_post(db, user.id)
    decision.raise_for_denial()
    return user
