"""
Gig posting (quota-gated) and application review endpoints.
"""
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from campus_gigs.core.auth_dependency import Capability, get_current_user, require_capability
from campus_gigs.core.quota_guard import require_gig_quota
from campus_gigs.db.models.user import User
from campus_gigs.db.session import get_db
from campus_gigs.schemas.gig import (
    ApplicationResponse,
    ApplicationStatusUpdate,
    CompletedCountResponse,
    FeeBreakdownResponse,
    GigCreate,
    GigResponse,
)
from campus_gigs.services import gig_service


router = APIRouter(tags=["Gigs"])


@router.post("/recruiter/gigs", status_code=status.HTTP_201_CREATED, response_model=GigResponse)
def create_gig(
    body: GigCreate,
    user: User = Depends(require_gig_quota),
    db: Session = Depends(get_db),
):
    """Publish a gig; rejected with 402/403 once the plan's monthly quota is used up."""
    gig = gig_service.create_gig(
        db,
        user,
        title=body.title,
        description=body.description,
        payment_amount=body.payment_amount,
        status=body.status,
    )
    return GigResponse.model_validate(gig)


@router.get("/recruiter/gigs", response_model=List[GigResponse])
def list_gigs(
    user: User = Depends(require_capability(Capability.POST_GIGS)),
    db: Session = Depends(get_db),
):
    return [GigResponse.model_validate(g) for g in gig_service.list_recruiter_gigs(db, user.id)]


@router.get("/recruiter/gigs/count", response_model=CompletedCountResponse)
def count_completed_applications(
    user: User = Depends(require_capability(Capability.POST_GIGS)),
    db: Session = Depends(get_db),
):
    return {"count": gig_service.count_completed_applications(db, user.id)}


@router.get("/gig_applications/{application_id}")
def get_application(
    application_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Application detail with fee breakdown and latest escrow state."""
    detail = gig_service.get_application_detail(db, user, application_id)
    detail["fees"] = FeeBreakdownResponse.from_breakdown(detail["fees"])
    return detail


@router.patch("/gig_applications/{application_id}/status", response_model=ApplicationResponse)
def update_application_status(
    application_id: int,
    body: ApplicationStatusUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    application = gig_service.update_application_status(db, user, application_id, body.status)
    return ApplicationResponse.model_validate(application)
