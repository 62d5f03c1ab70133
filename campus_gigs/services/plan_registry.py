"""
Plan registry.

Pricing/quota tiers live in the ``plans`` table and are edited by admins at
any time, so every lookup reads storage; nothing is cached between requests.
"""
import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from campus_gigs.core.errors import ConflictError, NotFoundError, ValidationError
from campus_gigs.db.models.plan import Plan

logger = logging.getLogger(__name__)

FREE_PLAN_KEY = "free"

# Used when the plans table has no "free" row
FREE_PLAN_FALLBACK_MAX_POSTS: Optional[int] = None

DEFAULT_PLANS = [
    {"key": "free", "label": "Free", "price": Decimal("0"), "max_posts": 3},
    {"key": "basic", "label": "Basic", "price": Decimal("5000"), "max_posts": 10},
    {"key": "pro", "label": "Pro", "price": Decimal("15000"), "max_posts": None},
]


@dataclass(frozen=True)
class PlanTerms:
    price: Decimal
    max_posts: Optional[int]  # None = unbounded

    @property
    def unbounded(self) -> bool:
        return self.max_posts is None


def load_plans(db: Session) -> Dict[str, PlanTerms]:
    """
    Load every plan into a ``{key: PlanTerms}`` lookup.

    The "free" key is always present; if admins removed it, a zero-price
    plan with unbounded posts stands in.
    """
    plans = {
        plan.key: PlanTerms(price=Decimal(plan.price or 0), max_posts=plan.max_posts)
        for plan in db.query(Plan).all()
    }
    if FREE_PLAN_KEY not in plans:
        plans[FREE_PLAN_KEY] = PlanTerms(price=Decimal("0"), max_posts=FREE_PLAN_FALLBACK_MAX_POSTS)
    return plans


def get_plan_terms(db: Session, key: str) -> Optional[PlanTerms]:
    """Terms for one plan key, or None if the key is unknown."""
    return load_plans(db).get(key)


def _validate_plan_fields(price, max_posts) -> None:
    if price is not None and Decimal(price) < 0:
        raise ValidationError("price must not be negative")
    if max_posts is not None and max_posts < 0:
        raise ValidationError("max_posts must not be negative")


def list_plans(db: Session) -> List[Plan]:
    return db.query(Plan).order_by(Plan.id).all()


def create_plan(db: Session, key: str, label: str, price, max_posts: Optional[int]) -> Plan:
    """
    Create a plan.

    Raises:
        ConflictError: a plan with the same key already exists
    """
    _validate_plan_fields(price, max_posts)

    if db.query(Plan).filter(Plan.key == key).first():
        raise ConflictError(f"Plan '{key}' already exists")

    plan = Plan(key=key, label=label, price=price, max_posts=max_posts)
    db.add(plan)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError(f"Plan '{key}' already exists")
    db.refresh(plan)

    logger.info(f"Plan created: key={plan.key}, price={plan.price}, max_posts={plan.max_posts}")
    return plan


def update_plan(db: Session, plan_id: int, label: str, price, max_posts: Optional[int]) -> Plan:
    """Replace a plan's label, price and quota. The key is immutable."""
    _validate_plan_fields(price, max_posts)

    plan = db.query(Plan).filter(Plan.id == plan_id).first()
    if not plan:
        raise NotFoundError("Plan not found")

    plan.label = label
    plan.price = price
    plan.max_posts = max_posts
    db.commit()
    db.refresh(plan)

    logger.info(f"Plan updated: key={plan.key}, price={plan.price}, max_posts={plan.max_posts}")
    return plan


def delete_plan(db: Session, plan_id: int) -> None:
    # Subscriptions that still reference the key become unresolvable
    plan = db.query(Plan).filter(Plan.id == plan_id).first()
    if not plan:
        raise NotFoundError("Plan not found")

    key = plan.key
    db.delete(plan)
    db.commit()
    logger.warning(f"Plan deleted: key={key}")


def seed_default_plans(db: Session) -> int:
    """Insert the default tiers into an empty plans table. Returns rows inserted."""
    if db.query(Plan).count():
        return 0

    for data in DEFAULT_PLANS:
        db.add(Plan(**data))
    db.commit()

    logger.info(f"Seeded {len(DEFAULT_PLANS)} default plans")
    return len(DEFAULT_PLANS)
