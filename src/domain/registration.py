"""
Registration domain service - Attendee registration workflow.

This module contains the core business logic for registering an attendee.
Each step is a hard sequence point: a failing step stops every later one.

Workflow
========

1. Validate    first name, last name and email present; address and
               country both present or both absent
2. Deduplicate reject emails already in the attendee store
3. Verify      only when an address was supplied
4. Persist     create exactly one attendee record
5. Notify      send exactly one confirmation email
6. Subscribe   newsletter opt-in, best-effort only

Note: steps 2 and 4 are not one transaction. The attendee store rejects a
second record for the same email, so a concurrent duplicate surfaces as a
store failure rather than AlreadyRegistered.
"""

import logging
from dataclasses import dataclass

from .confirmation import build_confirmation_email
from .exceptions import AlreadyRegistered, MissingRequiredFields, PartialAddress
from .ports import (
    AddressCandidate,
    AddressPrecision,
    AddressVerificationResult,
    AddressVerifier,
    AttendeeRecord,
    AttendeeRepository,
    EmailSender,
    NewsletterSubscriber,
    RegistrationRequest,
    VerificationStatus,
)

logger = logging.getLogger(__name__)

DELIVERABLE_PRECISIONS = frozenset({AddressPrecision.PREMISE.value, AddressPrecision.DELIVERY_POINT.value})


@dataclass(frozen=True)
class RegistrationOutcome:
    """Result of a successful registration."""

    address_supplied: bool
    address_verified: bool | None = None


def resolve_address(freeform: str, country: str, candidate: AddressCandidate) -> AddressVerificationResult:
    """
    Reduce a provider candidate to the address we persist.

    A candidate counts as verified only when its status is Verified and its
    precision reaches a premise or delivery point. Verified addresses are
    rebuilt from the provider's non-empty address lines; anything else keeps
    what the attendee typed, followed by the country.
    """
    verified = (
        candidate.verification_status == VerificationStatus.VERIFIED
        and candidate.address_precision in DELIVERABLE_PRECISIONS
    )
    if verified:
        address = ", ".join(line for line in candidate.address_lines if line)
    else:
        address = f"{freeform}, {country}"
    return AddressVerificationResult(address=address, address_verified=verified)


@dataclass
class RegistrationService:
    """
    Domain service for attendee registration.

    Orchestrates validation, deduplication, address verification,
    persistence, confirmation email and newsletter subscription.
    """

    repository: AttendeeRepository
    address_verifier: AddressVerifier
    email_sender: EmailSender
    newsletter: NewsletterSubscriber
    event_name: str = "You Got This 2020: From Home"
    newsletter_tag: str = "home-2020"

    def register(self, request: RegistrationRequest) -> RegistrationOutcome:
        """
        Register a new attendee.

        Args:
            request: Attendee details from the registration form

        Returns:
            RegistrationOutcome describing the address handling

        Raises:
            MissingRequiredFields: If first name, last name or email is empty
            PartialAddress: If only one of address and country was given
            AlreadyRegistered: If the email is already registered
            CollaboratorError: If verification, persistence or email fails
        """
        first_name = self._clean(request.first_name)
        last_name = self._clean(request.last_name)
        email = self._clean(request.email)
        address = self._clean(request.address)
        country = self._clean(request.country)

        if not first_name or not last_name or not email:
            raise MissingRequiredFields()
        if bool(address) != bool(country):
            raise PartialAddress()

        email = self._normalize_email(email)

        if self.repository.email_exists(email):
            raise AlreadyRegistered()

        verification = None
        if address and country:
            candidate = self.address_verifier.verify(address, country)
            verification = resolve_address(address, country, candidate)

        record = AttendeeRecord(
            first_name=first_name,
            last_name=last_name,
            email=email,
            address=verification.address if verification else None,
            address_verified=verification.address_verified if verification else None,
        )
        self.repository.create(record)
        logger.info("Attendee registered: %s", email)

        # The record stays in place if this fails; there is no compensation.
        self.email_sender.send(email, build_confirmation_email(self.event_name, verification))

        if request.newsletter:
            self._subscribe(email)

        if verification is None:
            return RegistrationOutcome(address_supplied=False)
        return RegistrationOutcome(address_supplied=True, address_verified=verification.address_verified)

    def _subscribe(self, email: str) -> None:
        """Subscribe to the newsletter, logging and swallowing any failure."""
        try:
            self.newsletter.subscribe(email, self.newsletter_tag)
        except Exception:
            logger.warning("Newsletter subscription failed for %s", email, exc_info=True)

    def _clean(self, value: str | None) -> str | None:
        """Strip surrounding whitespace, mapping blank values to None."""
        if value is None:
            return None
        return value.strip() or None

    def _normalize_email(self, email: str) -> str:
        """
        Normalize email address for consistent storage and lookup.

        Applies: strip whitespace + lowercase
        """
        return email.strip().lower()
