"""
FastAPI dependencies - Dependency injection factories.

This module provides Depends() factories for injecting
domain collaborators and infrastructure adapters into routes.
"""

import logging
from functools import lru_cache

from fastapi import Depends, Request
from psycopg_pool import ConnectionPool

from src.adapters.mail import ConsoleMailSender, MailgunMailSender
from src.adapters.repository.postgres import PostgresAccountRepository
from src.config.settings import Settings, get_settings
from src.domain.composer import VerificationEmailComposer
from src.domain.ports import AccountRepository, MailSender

logger = logging.getLogger(__name__)


def get_pool(request: Request) -> ConnectionPool:
    """
    Get connection pool from app state.

    The pool is created during app lifespan startup and stored in app.state.
    """
    return request.app.state.pool


def get_account_repository(pool: ConnectionPool = Depends(get_pool)) -> AccountRepository:
    """Create read-only account repository with connection pool from app state."""
    return PostgresAccountRepository(pool)


def build_mail_sender(settings: Settings) -> MailSender:
    """
    Create the mail sender selected by MAIL_BACKEND.

    Raises:
        ValueError: If the mailgun backend is selected without credentials
    """
    if settings.mail_backend == "mailgun":
        return MailgunMailSender(
            settings.mail_credentials(),
            timeout_seconds=settings.mail_timeout_seconds,
        )
    logger.warning("Using console mail sender - verification emails are only logged")
    return ConsoleMailSender()


@lru_cache
def get_mail_sender() -> MailSender:
    """Get configured mail sender (process-wide singleton)."""
    return build_mail_sender(get_settings())


def close_mail_sender() -> None:
    """
    Release the process-wide mail sender, if one was built.

    Senders holding a connection (MailgunMailSender) expose close();
    the cache is cleared so a later startup builds a fresh sender.
    """
    if get_mail_sender.cache_info().currsize:
        close = getattr(get_mail_sender(), "close", None)
        if close is not None:
            close()
    get_mail_sender.cache_clear()


def get_composer() -> VerificationEmailComposer:
    """Create the verification email composer from settings."""
    settings = get_settings()
    return VerificationEmailComposer(
        app_name=settings.app_name,
        sender=settings.mail_sender_address,
    )
