"""
Database models module.

This module imports all database models to ensure they are registered with SQLAlchemy's Base.metadata
before table creation.
"""
from campus_gigs.db.models.user import User
from campus_gigs.db.models.plan import Plan
from campus_gigs.db.models.subscription import Subscription
from campus_gigs.db.models.gig import Gig
from campus_gigs.db.models.gig_application import GigApplication
from campus_gigs.db.models.escrow import Escrow
from campus_gigs.db.models.webhook_event import WebhookEvent

__all__ = [
    "User",
    "Plan",
    "Subscription",
    "Gig",
    "GigApplication",
    "Escrow",
    "WebhookEvent",
]
