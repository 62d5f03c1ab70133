"""
Gig posting and application completion.

Gig creation is the write guarded by the quota gate; application detail is
where the fee calculator is applied.
"""
import logging
from typing import Dict, List

from sqlalchemy import func
from sqlalchemy.orm import Session

from campus_gigs.core.auth_dependency import Capability, can_manage_gig, has_capability
from campus_gigs.core.errors import AuthzError, NotFoundError
from campus_gigs.db.models.gig import Gig
from campus_gigs.db.models.gig_application import GigApplication
from campus_gigs.db.models.user import User
from campus_gigs.db.session import utcnow
from campus_gigs.services import escrow_service
from campus_gigs.services.fee_calculator import compute_fees
from campus_gigs.services.quota_service import authorize_gig_post

logger = logging.getLogger(__name__)

COMPLETED = "Completed"
RECRUITER_STATUSES = ("Shortlisted", "Accepted", "Rejected", COMPLETED)
STUDENT_STATUSES = ("draft",)


def create_gig(db: Session, recruiter: User, title: str, description: str = None,
               payment_amount=None, status: str = "open") -> Gig:
    """
    Create a gig if the recruiter's plan still has room this period.

    The recruiter's user row is locked (SELECT ... FOR UPDATE) for the whole
    check-then-insert so concurrent posts by the same recruiter cannot both
    slip under the limit. Backends without row locks (SQLite) ignore the
    lock clause.

    Raises:
        PaymentRequiredError: paid plan is not active
        AuthzError: monthly post limit reached
    """
    db.query(User).filter(User.id == recruiter.id).with_for_update().one()

    try:
        decision = authorize_gig_post(db, recruiter.id)
        decision.raise_for_denial()

        gig = Gig(
            recruiter_id=recruiter.id,
            title=title,
            description=description,
            payment_amount=payment_amount,
            status=status,
        )
        db.add(gig)
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(gig)
    logger.info(f"Gig created: gig_id={gig.id}, recruiter_id={recruiter.id}, plan={decision.plan}")
    return gig


def list_recruiter_gigs(db: Session, recruiter_id: int) -> List[Gig]:
    return (
        db.query(Gig)
        .filter(Gig.recruiter_id == recruiter_id)
        .order_by(Gig.created_at.desc(), Gig.id.desc())
        .all()
    )


def count_completed_applications(db: Session, recruiter_id: int) -> int:
    """Completed applications across all of a recruiter's gigs."""
    return db.query(func.count(GigApplication.id)).join(
        Gig, Gig.id == GigApplication.gig_id
    ).filter(
        Gig.recruiter_id == recruiter_id,
        GigApplication.status == COMPLETED,
    ).scalar() or 0


def _accessible_application(db: Session, user: User, application_id: int):
    row = (
        db.query(GigApplication, Gig)
        .join(Gig, Gig.id == GigApplication.gig_id)
        .filter(GigApplication.id == application_id)
        .first()
    )
    if not row:
        raise NotFoundError("Application not found or access denied")

    application, gig = row
    if _is_applicant(user, application) or _is_reviewer(user, gig):
        return application, gig
    raise NotFoundError("Application not found or access denied")


def _is_applicant(user: User, application: GigApplication) -> bool:
    return has_capability(user, Capability.VIEW_APPLICATIONS) and application.student_id == user.id


def _is_reviewer(user: User, gig: Gig) -> bool:
    return has_capability(user, Capability.REVIEW_APPLICATIONS) and can_manage_gig(user, gig)


def get_application_detail(db: Session, user: User, application_id: int) -> Dict:
    """Application with its gig, fee breakdown and latest escrow."""
    application, gig = _accessible_application(db, user, application_id)
    student = db.query(User).filter(User.id == application.student_id).first()

    gross = application.payment_amount if application.payment_amount is not None else gig.payment_amount
    completed_count = count_completed_applications(db, gig.recruiter_id)
    fees = compute_fees(gross or 0, completed_count)

    escrow = escrow_service.latest_for_gig(db, gig.id)

    return {
        "id": application.id,
        "gig_id": application.gig_id,
        "student_id": application.student_id,
        "status": application.status,
        "applied_at": application.applied_at,
        "completed_at": application.completed_at,
        "payment_amount": gross,
        "gig": {
            "title": gig.title,
            "budget": gig.payment_amount,
        },
        "student": {
            "name": student.name if student else None,
            "email": student.email if student else None,
        },
        "fees": fees,
        "escrow": {
            "tx_ref": escrow.order_reference if escrow else None,
            "paid": bool(escrow.paid) if escrow else False,
            "paid_at": escrow.paid_at if escrow else None,
        },
    }


def update_application_status(db: Session, user: User, application_id: int, status: str) -> GigApplication:
    """
    Move an application to a new status.

    Applicants may only save their own application as a draft; reviewers
    (the gig's recruiter, or an admin) may shortlist, accept, reject or
    complete it.
    """
    application, gig = _accessible_application(db, user, application_id)

    applicant_allowed = status in STUDENT_STATUSES and _is_applicant(user, application)
    reviewer_allowed = status in RECRUITER_STATUSES and _is_reviewer(user, gig)
    if not applicant_allowed and not reviewer_allowed:
        raise AuthzError("Not allowed to set this status")

    application.status = status
    if status == COMPLETED and application.completed_at is None:
        application.completed_at = utcnow()
    db.commit()
    db.refresh(application)

    logger.info(f"Application status updated: application_id={application_id}, status={status}, by user_id={user.id}")
    return application
