"""FastAPI application — main entry point."""

import structlog
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from users_api.config import Settings, get_settings
from users_api.infrastructure.database import engine, Base
from users_api.core.logging import configure_logging
from users_api.core.middleware import setup_middleware
from users_api.core.exceptions import register_exception_handlers
from users_api.infrastructure.mailer import SmtpNotifier

# Import all models so SQLAlchemy knows about them
from users_api.domain.models.user import User  # noqa: F401

from users_api.interfaces.api.users import router as users_router

settings = get_settings()

configure_logging(settings)
logger = structlog.get_logger(__name__)


def log_startup_warnings(settings: Settings) -> None:
    """Warn once about configuration that disables part of the API."""
    if not settings.ADMIN_API_KEY:
        logger.warning("ADMIN_API_KEY not set, account deletion endpoint is disabled")
    if not SmtpNotifier(settings).is_configured:
        logger.warning("SMTP credentials not configured, verification emails will fail")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan — startup and shutdown events."""
    logger.info("Starting Users API...", env=settings.ENVIRONMENT)

    # Create DB tables (dev only — use migrations in production)
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables created/verified")

    log_startup_warnings(settings)

    yield

    engine.dispose()
    logger.info("Users API stopped")


app = FastAPI(
    title="Users API",
    description="Account management — signup, login, email verification and subscriptions",
    version="1.0.0",
    lifespan=lifespan,
)

setup_middleware(app)
register_exception_handlers(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(users_router)


@app.get("/")
def root():
    return {
        "name": "Users API",
        "version": "1.0.0",
        "status": "running",
        "docs": "/docs",
    }


@app.get("/health")
def health():
    return {"status": "healthy"}
