"""
Domain layer - Pure business logic with zero framework imports.

This package contains the core business logic for the event registration
workflow. It defines its own port interfaces for infrastructure
abstraction, ensuring true hexagonal architecture decoupling.
"""

from .confirmation import build_confirmation_email
from .exceptions import (
    AddressVerificationError,
    AlreadyRegistered,
    AttendeeStoreError,
    CollaboratorError,
    EmailDeliveryError,
    MissingRequiredFields,
    NewsletterSubscriptionError,
    PartialAddress,
    RegistrationError,
    RegistrationRejected,
)
from .ports import (
    AddressCandidate,
    AddressPrecision,
    AddressVerificationResult,
    AddressVerifier,
    AttendeeRecord,
    AttendeeRepository,
    ConfirmationEmail,
    EmailSender,
    NewsletterSubscriber,
    RegistrationRequest,
    VerificationStatus,
)
from .registration import RegistrationOutcome, RegistrationService, resolve_address

__all__ = [
    "AddressCandidate",
    "AddressPrecision",
    "AddressVerificationError",
    "AddressVerificationResult",
    "AddressVerifier",
    "AlreadyRegistered",
    "AttendeeRecord",
    "AttendeeRepository",
    "AttendeeStoreError",
    "CollaboratorError",
    "ConfirmationEmail",
    "EmailDeliveryError",
    "EmailSender",
    "MissingRequiredFields",
    "NewsletterSubscriber",
    "NewsletterSubscriptionError",
    "PartialAddress",
    "RegistrationError",
    "RegistrationOutcome",
    "RegistrationRejected",
    "RegistrationRequest",
    "RegistrationService",
    "VerificationStatus",
    "build_confirmation_email",
    "resolve_address",
]
