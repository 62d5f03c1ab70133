from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from campus_gigs.core.auth_dependency import Capability, require_capability
from campus_gigs.db.session import get_db
from campus_gigs.schemas.subscription import AdminSubscriptionResponse, SuccessResponse
from campus_gigs.services import subscription_service

router = APIRouter(
    prefix="/admin/subscriptions",
    tags=["Admin Subscriptions"],
    dependencies=[Depends(require_capability(Capability.MANAGE_SUBSCRIPTIONS))],
)


@router.get("", response_model=List[AdminSubscriptionResponse])
def list_subscriptions(db: Session = Depends(get_db)):
    return subscription_service.list_subscriptions(db)


@router.post("/{subscription_id}/cancel", response_model=SuccessResponse)
def cancel_subscription(subscription_id: int, db: Session = Depends(get_db)):
    return subscription_service.cancel(db, subscription_id)


@router.post("/{subscription_id}/reactivate", response_model=SuccessResponse)
def reactivate_subscription(subscription_id: int, db: Session = Depends(get_db)):
    """Force a subscription back to active, whatever its current status."""
    return subscription_service.reactivate(db, subscription_id)
