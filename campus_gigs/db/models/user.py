from sqlalchemy import Column, Integer, String, DateTime
from campus_gigs.db.base import Base
from campus_gigs.db.session import utcnow


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    role = Column(String, nullable=False, default="student")  # student | recruiter | admin
    created_at = Column(DateTime, default=utcnow, nullable=False)
