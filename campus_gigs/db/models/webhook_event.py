from sqlalchemy import Column, Integer, String, DateTime, JSON
from campus_gigs.db.base import Base
from campus_gigs.db.session import utcnow


class WebhookEvent(Base):
    """
    Append-only log of provider webhook deliveries that matched a ledger row.

    Status updates overwrite the subscription row; this table keeps the
    history of what the provider actually sent.
    """
    __tablename__ = "webhook_events"

    id = Column(Integer, primary_key=True, index=True)
    provider = Column(String, nullable=False, default="paychangu")
    tx_ref = Column(String, nullable=False, index=True)
    status = Column(String, nullable=True)
    payload = Column(JSON, nullable=True)
    received_at = Column(DateTime, default=utcnow, nullable=False)
