"""
Authentication and declarative authorization.

Each route states the capability it needs with ``require_capability``;
the role -> capability table below is the only place roles are compared.
"""
import enum
import logging
from typing import Dict, FrozenSet, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from campus_gigs.core.errors import AuthenticationError, AuthzError
from campus_gigs.core.security import decode_access_token
from campus_gigs.db.models.user import User
from campus_gigs.db.session import get_db

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


class Capability(str, enum.Enum):
    FUND_ESCROW = "fund_escrow"
    VIEW_ESCROW = "view_escrow"
    SUBSCRIBE = "subscribe"
    POST_GIGS = "post_gigs"
    REVIEW_APPLICATIONS = "review_applications"
    VIEW_APPLICATIONS = "view_applications"
    MANAGE_SUBSCRIPTIONS = "manage_subscriptions"
    MANAGE_PLANS = "manage_plans"
    MANAGE_GIGS = "manage_gigs"


ROLE_CAPABILITIES: Dict[str, FrozenSet[Capability]] = {
    "recruiter": frozenset({
        Capability.FUND_ESCROW,
        Capability.VIEW_ESCROW,
        Capability.SUBSCRIBE,
        Capability.POST_GIGS,
        Capability.REVIEW_APPLICATIONS,
    }),
    "student": frozenset({
        Capability.VIEW_ESCROW,
        Capability.VIEW_APPLICATIONS,
    }),
    "admin": frozenset({
        Capability.VIEW_ESCROW,
        Capability.MANAGE_SUBSCRIPTIONS,
        Capability.MANAGE_PLANS,
        Capability.MANAGE_GIGS,
        Capability.REVIEW_APPLICATIONS,
    }),
}


def has_capability(user: User, capability: Capability) -> bool:
    return capability in ROLE_CAPABILITIES.get(user.role, frozenset())


def can_manage_gig(user: User, gig) -> bool:
    """The gig's own recruiter, or a role allowed to act on any gig."""
    return gig.recruiter_id == user.id or has_capability(user, Capability.MANAGE_GIGS)


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> User:
    """Resolve the User behind the bearer token."""
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("No token provided")

    payload = decode_access_token(credentials.credentials)

    try:
        user_id = int(payload["sub"])
    except (TypeError, ValueError):
        raise AuthenticationError("Invalid or expired token")

    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise AuthenticationError("Invalid or expired token")
    return user


def require_capability(capability: Capability):
    """
    Dependency factory guarding a route with a capability.

    Returns:
        Dependency resolving to the authenticated User

    Raises:
        AuthzError (403) when the user's role lacks the capability
    """
    def checker(user: User = Depends(get_current_user)) -> User:
        if not has_capability(user, capability):
            logger.warning(f"Capability denied: user_id={user.id}, role={user.role}, capability={capability.value}")
            raise AuthzError("You do not have permission to perform this action")
        return user

    return checker
