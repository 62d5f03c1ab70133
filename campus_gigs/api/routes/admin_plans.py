from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from campus_gigs.core.auth_dependency import Capability, require_capability
from campus_gigs.db.session import get_db
from campus_gigs.schemas.plan import PlanCreate, PlanResponse, PlanUpdate
from campus_gigs.schemas.subscription import SuccessResponse
from campus_gigs.services import plan_registry

router = APIRouter(
    prefix="/admin/plans",
    tags=["Admin Plans"],
    dependencies=[Depends(require_capability(Capability.MANAGE_PLANS))],
)


@router.get("", response_model=List[PlanResponse])
def list_plans(db: Session = Depends(get_db)):
    return plan_registry.list_plans(db)


@router.post("", status_code=status.HTTP_201_CREATED, response_model=PlanResponse)
def create_plan(body: PlanCreate, db: Session = Depends(get_db)):
    return plan_registry.create_plan(db, body.key, body.label, body.price, body.max_posts)


@router.put("/{plan_id}", response_model=PlanResponse)
def update_plan(plan_id: int, body: PlanUpdate, db: Session = Depends(get_db)):
    return plan_registry.update_plan(db, plan_id, body.label, body.price, body.max_posts)


@router.delete("/{plan_id}", response_model=SuccessResponse)
def delete_plan(plan_id: int, db: Session = Depends(get_db)):
    plan_registry.delete_plan(db, plan_id)
    return {"success": True}
