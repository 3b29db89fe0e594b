"""FastAPI application — main entry point."""

import structlog
from contextlib import asynccontextmanager
from datetime import timedelta

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from roktodao.application.services.admin_auth_service import AdminAuthService
from roktodao.config import get_settings
from roktodao.infrastructure.database import engine, Base, SessionLocal
from roktodao.infrastructure.mailer import SmtpMailer
from roktodao.infrastructure.repositories.admin_user_repository import SQLAlchemyAdminUserRepository
from roktodao.infrastructure.sms_providers import build_sms_providers
from roktodao.core.logging import configure_logging
from roktodao.core.middleware import setup_middleware
from roktodao.core.exceptions import register_exception_handlers

# Import all models so SQLAlchemy knows about them
from roktodao.domain.models.admin_user import AdminRole, AdminUser  # noqa: F401
from roktodao.domain.models.donor import Donor  # noqa: F401
from roktodao.domain.models.notification_attempt import NotificationAttempt  # noqa: F401
from roktodao.domain.models.one_time_code import OneTimeCode  # noqa: F401
from roktodao.domain.models.site_settings import SiteSettings  # noqa: F401

from roktodao.interfaces.api.auth import router as auth_router
from roktodao.interfaces.api.notifications import router as notifications_router
from roktodao.interfaces.api.otp import router as otp_router

settings = get_settings()

configure_logging()
logger = structlog.get_logger(__name__)


def bootstrap_admin() -> None:
    """Create the configured admin account if it does not exist yet."""
    if not settings.ADMIN_PASSWORD:
        return

    db = SessionLocal()
    try:
        auth = AdminAuthService(
            SQLAlchemyAdminUserRepository(db),
            token_lifetime=timedelta(minutes=settings.JWT_EXPIRATION_MINUTES),
        )
        auth.ensure_account(settings.ADMIN_EMAIL, settings.ADMIN_PASSWORD, role=AdminRole.ADMIN)
    finally:
        db.close()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan — startup and shutdown events."""
    logger.info("Starting RoktoDao notification backend...", env=settings.ENVIRONMENT)

    # Create DB tables (dev only)
    Base.metadata.create_all(bind=engine)
    bootstrap_admin()

    app.state.sms_providers = build_sms_providers(settings)
    app.state.mailer = SmtpMailer.from_settings(settings)

    configured = [p.name for p in app.state.sms_providers if p.is_configured]
    if not configured:
        logger.warning("No SMS provider is configured; every send will fail")
    logger.info("SMS providers ready", configured=configured)

    yield

    logger.info("RoktoDao notification backend stopped")


app = FastAPI(
    title="RoktoDao — Notification Backend",
    description="SMS dispatch with provider fallback, OTP issuance and admin notifications",
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

app.include_router(auth_router)
app.include_router(notifications_router)
app.include_router(otp_router)


@app.get("/")
def root():
    return {
        "name": "RoktoDao Notification Backend",
        "version": "1.0.0",
        "status": "running",
        "docs": "/docs",
    }


@app.get("/health")
def health():
    return {"status": "healthy"}
