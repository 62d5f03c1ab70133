import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from campus_gigs.api.routes import (
    admin_plans,
    admin_subscriptions,
    escrow,
    gigs,
    health,
    subscriptions,
)
from campus_gigs.core import config
from campus_gigs.core.errors import register_error_handlers
from campus_gigs.core.logging_config import setup_logging
from campus_gigs.db.init_db import init_db
from campus_gigs.db.session import check_database, dispose_engine

logger = logging.getLogger(__name__)


# ============================================
# ✅ APP LIFECYCLE
# ============================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(config.LOG_LEVEL)

    if config.SECRET_KEY == "dev-secret-key-change-me":
        logger.warning("SECRET_KEY is not set - using the development default")
    if not config.PAYCHANGU_SECRET_KEY:
        logger.warning("PAYCHANGU_SECRET_KEY not configured - checkout will fail")

    init_db()
    if not check_database():
        raise RuntimeError("Database is unreachable")
    logger.info("Campus Gigs API started")

    yield

    dispose_engine()


# ============================================
# ✅ FASTAPI APP INIT
# ============================================

app = FastAPI(title="Campus Gigs API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
    allow_headers=["Authorization", "Content-Type"],
)

register_error_handlers(app)


# ============================================
# ✅ REGISTER ALL ROUTERS
# ============================================

app.include_router(health.router)
app.include_router(escrow.router)
app.include_router(subscriptions.router)
app.include_router(gigs.router)
app.include_router(admin_subscriptions.router)
app.include_router(admin_plans.router)


@app.get("/")
def root():
    return {"status": "Campus Gigs API running"}
