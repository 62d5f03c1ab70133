import logging

from campus_gigs.core import config
from campus_gigs.db.base import Base
from campus_gigs.db.session import engine, SessionLocal
import campus_gigs.db.models  # noqa: F401  registers every table on Base.metadata
from campus_gigs.services.plan_registry import seed_default_plans

logger = logging.getLogger(__name__)


def init_db() -> None:
    """Create missing tables and seed the default plans into an empty registry."""
    Base.metadata.create_all(bind=engine)

    if not config.SEED_DEFAULT_PLANS:
        return

    db = SessionLocal()
    try:
        seed_default_plans(db)
    finally:
        db.close()
