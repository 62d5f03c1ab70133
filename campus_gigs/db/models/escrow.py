from sqlalchemy import Column, Integer, String, Numeric, Boolean, DateTime, ForeignKey
from campus_gigs.db.base import Base
from campus_gigs.db.session import utcnow


class Escrow(Base):
    """Funds held against a gig, keyed by the checkout transaction reference."""
    __tablename__ = "escrows"

    id = Column(Integer, primary_key=True, index=True)
    gig_id = Column(Integer, ForeignKey("gigs.id"), nullable=False, index=True)
    payment_method = Column(String, nullable=False)  # card | mobile
    order_reference = Column(String, unique=True, nullable=False, index=True)
    trans_id = Column(String, nullable=True)
    phone = Column(String, nullable=True)
    amount = Column(Numeric(12, 2), nullable=False)
    paid = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, default=utcnow, nullable=False, index=True)
    paid_at = Column(DateTime, nullable=True)
