"""Dependency injection and application lifespan management."""

from __future__ import annotations

import os
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

import structlog
from fastapi import Request

from gumboard.adapters.auth.magic_link_console import ConsoleMagicLinkSender
from gumboard.adapters.auth.postgres import PostgresAuthRepository
from gumboard.adapters.db.app_db import AppDatabase
from gumboard.adapters.notifications.email import EmailConfig, EmailNotifier
from gumboard.adapters.notifications.resend import ResendConfig, ResendNotifier
from gumboard.core.auth.delivery import MagicLinkSender
from gumboard.core.auth.service import AuthService
from gumboard.core.auth.session import SessionResolver
from gumboard.core.authz.gate import AuthorizationGate
from gumboard.services.organization import OrganizationService

if TYPE_CHECKING:
    from fastapi import FastAPI

logger = structlog.get_logger()

DEV_AUTH_SECRET = "gumboard-dev-secret-change-me"


class Settings:
    """Application settings loaded from environment."""

    def __init__(self) -> None:
        """Load settings from environment variables."""
        self.database_url = os.getenv("DATABASE_URL", "postgresql://localhost:5432/gumboard")
        self.app_database_url = os.getenv("APP_DATABASE_URL", self.database_url)
        self.auto_create_schema = os.getenv("AUTO_CREATE_SCHEMA", "false").lower() == "true"

        # Auth
        self.auth_url = os.getenv("AUTH_URL", "http://localhost:3000").rstrip("/")
        self.auth_secret = os.getenv("AUTH_SECRET", DEV_AUTH_SECRET)
        self.session_max_age_days = int(os.getenv("SESSION_MAX_AGE_DAYS", "30"))
        self.verification_token_max_age_hours = int(
            os.getenv("VERIFICATION_TOKEN_MAX_AGE_HOURS", "24")
        )

        # Magic-link delivery
        self.magic_link_delivery = os.getenv("MAGIC_LINK_DELIVERY", "auto").lower()
        self.email_from = os.getenv("EMAIL_FROM", "noreply@gumboard.local")
        self.resend_api_key = os.getenv("AUTH_RESEND_KEY", "")
        self.smtp_host = os.getenv("SMTP_HOST", "")
        self.smtp_port = int(os.getenv("SMTP_PORT", "587"))
        self.smtp_user = os.getenv("SMTP_USER") or None
        self.smtp_password = os.getenv("SMTP_PASSWORD") or None
        self.smtp_use_tls = os.getenv("SMTP_USE_TLS", "true").lower() == "true"

    @property
    def secure_cookies(self) -> bool:
        """Session cookies carry the Secure flag when served over https."""
        return self.auth_url.startswith("https://")


settings = Settings()


def build_magic_link_sender(config: Settings) -> MagicLinkSender:
    """Pick the magic-link transport.

    ``auto`` prefers Resend when an API key is set, then SMTP when a host
    is set, and falls back to printing links to the console.
    """
    mode = config.magic_link_delivery
    if mode == "auto":
        if config.resend_api_key:
            mode = "resend"
        elif config.smtp_host:
            mode = "smtp"
        else:
            mode = "console"

    if mode == "resend":
        logger.info("magic_link_delivery_configured", transport="resend")
        return ResendNotifier(
            ResendConfig(api_key=config.resend_api_key, from_email=config.email_from)
        )

    if mode == "smtp":
        logger.info("magic_link_delivery_configured", transport="smtp")
        return EmailNotifier(
            EmailConfig(
                smtp_host=config.smtp_host,
                smtp_port=config.smtp_port,
                smtp_user=config.smtp_user,
                smtp_password=config.smtp_password,
                from_email=config.email_from,
                use_tls=config.smtp_use_tls,
            )
        )

    if mode != "console":
        raise ValueError(f"Unknown MAGIC_LINK_DELIVERY: {config.magic_link_delivery}")

    logger.info("magic_link_delivery_configured", transport="console")
    return ConsoleMagicLinkSender()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan - setup and teardown.

    This context manager handles:
    - Database connection pool setup
    - Optional schema creation
    - Magic-link transport selection
    """
    if settings.auth_secret == DEV_AUTH_SECRET:
        logger.warning("auth_secret_not_configured")

    app_db = AppDatabase(settings.app_database_url)
    await app_db.connect()

    if settings.auto_create_schema:
        await app_db.apply_schema()

    # Store in app state
    app.state.settings = settings
    app.state.app_db = app_db
    app.state.magic_link_sender = build_magic_link_sender(settings)

    yield

    await app_db.close()


def get_settings(request: Request) -> Settings:
    """Get settings from app state."""
    app_settings: Settings = getattr(request.app.state, "settings", settings)
    return app_settings


def get_app_db(request: Request) -> AppDatabase:
    """Get the application database from app state."""
    app_db: AppDatabase = request.app.state.app_db
    return app_db


def get_magic_link_sender(request: Request) -> MagicLinkSender:
    """Get the magic-link transport from app state."""
    sender: MagicLinkSender = request.app.state.magic_link_sender
    return sender


def get_base_url(request: Request) -> str:
    """Get the public base URL used for links and redirects."""
    return get_settings(request).auth_url


def get_auth_repository(request: Request) -> PostgresAuthRepository:
    """Get the auth repository bound to the app database."""
    return PostgresAuthRepository(get_app_db(request))


def get_auth_service(request: Request) -> AuthService:
    """Get auth service from request context."""
    config = get_settings(request)
    return AuthService(
        repo=get_auth_repository(request),
        sender=get_magic_link_sender(request),
        secret=config.auth_secret,
        from_email=config.email_from,
        token_max_age_hours=config.verification_token_max_age_hours,
        session_max_age_days=config.session_max_age_days,
    )


def get_session_resolver(request: Request) -> SessionResolver:
    """Get the session resolver from request context."""
    return SessionResolver(
        repo=get_auth_repository(request),
        secret=get_settings(request).auth_secret,
    )


def get_authorization_gate(request: Request) -> AuthorizationGate:
    """Get the authorization gate from request context."""
    return AuthorizationGate(get_auth_repository(request))


def get_organization_service(request: Request) -> OrganizationService:
    """Get the organization service from request context."""
    return OrganizationService(get_app_db(request))
