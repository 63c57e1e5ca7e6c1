import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.attendees.routers import router as attendees_router
from src.config.database import upgrade_database
from src.config.logging import setup_logging
from src.config.sentry import init_sentry
from src.config.settings import settings
from src.routers.healthz.router import router as healthz_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.RUN_MIGRATIONS_ON_STARTUP:
        logger.info("Running database migrations")
        await upgrade_database()
    yield


setup_logging()

if init_sentry():
    logger.info(f"Sentry enabled for {settings.ENVIRONMENT}")

app = FastAPI(
    title="Wedding RSVP API",
    description="API for wedding RSVPs, QR invitations and venue check-in",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,  # type: ignore[arg-type]
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(healthz_router, prefix="/healthz", tags=["Healthz"])
app.include_router(attendees_router, tags=["Attendees"])


@app.get("/", tags=["Root"])
async def root():
    return {"message": "Welcome to the Wedding RSVP API"}
