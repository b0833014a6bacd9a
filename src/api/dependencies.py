"""
FastAPI dependencies - Dependency injection factories.

This module provides Depends() factories for injecting
domain services and infrastructure adapters into routes, plus the
builders used at startup to construct the external collaborators once.
"""

import logging

from fastapi import Request
from psycopg_pool import ConnectionPool

from src.adapters.address.smarty import SmartyAddressVerifier
from src.adapters.email.console import ConsoleEmailSender
from src.adapters.email.sparkpost import SparkPostEmailSender
from src.adapters.newsletter.buttondown import ButtondownSubscriber
from src.adapters.repository.postgres import PostgresAttendeeRepository
from src.config.settings import Settings, get_settings
from src.domain.ports import AddressVerifier, EmailSender, NewsletterSubscriber
from src.domain.registration import RegistrationService

logger = logging.getLogger(__name__)


def build_address_verifier(settings: Settings) -> AddressVerifier:
    """Create the Smarty address verifier."""
    return SmartyAddressVerifier(
        auth_id=settings.smarty_auth_id,
        auth_token=settings.smarty_auth_token,
        base_url=settings.smarty_base_url,
        timeout=settings.http_timeout_seconds,
    )


def build_email_sender(settings: Settings) -> EmailSender:
    """
    Create the email sender.

    Falls back to the console sender when no SparkPost key is configured.
    """
    if not settings.sparkpost_api_key:
        logger.warning("SPARKPOST_API_KEY not set, confirmation emails will be logged only")
        return ConsoleEmailSender()
    return SparkPostEmailSender(
        api_key=settings.sparkpost_api_key,
        from_name=settings.email_from_name,
        from_address=settings.email_from_address,
        base_url=settings.sparkpost_base_url,
        timeout=settings.http_timeout_seconds,
    )


def build_newsletter_subscriber(settings: Settings) -> NewsletterSubscriber:
    """Create the Buttondown newsletter subscriber."""
    return ButtondownSubscriber(
        api_key=settings.buttondown_api_key,
        base_url=settings.buttondown_base_url,
        timeout=settings.http_timeout_seconds,
    )


def get_pool(request: Request) -> ConnectionPool:
    """
    Get connection pool from app state.

    The pool is created during app lifespan startup and stored in app.state.
    """
    return request.app.state.pool


def get_repository(request: Request) -> PostgresAttendeeRepository:
    """Create repository with connection pool from app state."""
    pool = get_pool(request)
    return PostgresAttendeeRepository(pool)


def get_registration_service(request: Request) -> RegistrationService:
    """
    Create registration service with injected dependencies.

    Wires the repository together with the collaborators built at startup.
    """
    settings = get_settings()
    state = request.app.state
    return RegistrationService(
        repository=get_repository(request),
        address_verifier=state.address_verifier,
        email_sender=state.email_sender,
        newsletter=state.newsletter,
        event_name=settings.event_name,
        newsletter_tag=settings.newsletter_tag,
    )
