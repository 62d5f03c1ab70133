from sqlalchemy import Column, Integer, String, Numeric, DateTime
from campus_gigs.db.base import Base
from campus_gigs.db.session import utcnow


class Plan(Base):
    """
    Pricing/quota tier.

    ``max_posts`` is the number of gigs a recruiter may create per billing
    period; NULL means unbounded.
    """
    __tablename__ = "plans"

    id = Column(Integer, primary_key=True, index=True)
    key = Column(String(50), unique=True, nullable=False, index=True)
    label = Column(String, nullable=False)
    price = Column(Numeric(12, 2), nullable=False, default=0)
    max_posts = Column(Integer, nullable=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    def __repr__(self):
        return f"<Plan(key='{self.key}', price={self.price}, max_posts={self.max_posts})>"
