from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Index
from campus_gigs.db.base import Base
from campus_gigs.db.session import utcnow


class Subscription(Base):
    """
    One billing period of a recruiter's subscription.

    Rows are appended per period; the recruiter's current subscription is
    the row with the greatest (created_at, id).
    """
    __tablename__ = "subscriptions"

    id = Column(Integer, primary_key=True, index=True)
    recruiter_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    plan = Column(String(50), nullable=False)  # plan key, not a FK: plans may be deleted
    order_reference = Column(String, unique=True, nullable=False, index=True)
    status = Column(String, nullable=False, default="pending")  # pending | active | past_due | canceled

    current_period_start = Column(DateTime, nullable=False)
    current_period_end = Column(DateTime, nullable=False)

    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    __table_args__ = (
        Index("idx_subscriptions_recruiter_created", "recruiter_id", "created_at"),
    )
