"""
Health check endpoint for deployment monitoring.
"""
from datetime import datetime, timezone

from fastapi import APIRouter

from campus_gigs.db.session import check_database

router = APIRouter(prefix="/health", tags=["Health"])


@router.get("")
def health_check():
    """
    Returns 200 with ``status: degraded`` when the database is unreachable,
    so the load balancer can tell a sick pod from a dead one.
    """
    db_ok = check_database()
    return {
        "server": "up",
        "status": "healthy" if db_ok else "degraded",
        "database": "connected" if db_ok else "error",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
