from sqlalchemy import Column, Integer, String, Text, Numeric, DateTime, ForeignKey, Index
from campus_gigs.db.base import Base
from campus_gigs.db.session import utcnow


class Gig(Base):
    __tablename__ = "gigs"

    id = Column(Integer, primary_key=True, index=True)
    recruiter_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    payment_amount = Column(Numeric(12, 2), nullable=True)
    status = Column(String, nullable=False, default="open")  # draft | open | closed
    created_at = Column(DateTime, default=utcnow, nullable=False)

    # Quota windows count gigs per recruiter by creation time
    __table_args__ = (
        Index("idx_gigs_recruiter_created", "recruiter_id", "created_at"),
    )
