from sqlalchemy import Column, Integer, String, Numeric, DateTime, ForeignKey
from campus_gigs.db.base import Base
from campus_gigs.db.session import utcnow


class GigApplication(Base):
    __tablename__ = "gig_applications"

    id = Column(Integer, primary_key=True, index=True)
    gig_id = Column(Integer, ForeignKey("gigs.id"), nullable=False, index=True)
    student_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    status = Column(String, nullable=False, default="Applied")  # draft | Applied | Shortlisted | Accepted | Rejected | Completed
    payment_amount = Column(Numeric(12, 2), nullable=True)
    applied_at = Column(DateTime, default=utcnow, nullable=False)
    completed_at = Column(DateTime, nullable=True)
