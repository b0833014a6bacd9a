"""
Domain exceptions - Semantic error types for registration.

This module defines domain-specific exceptions that communicate
business rule violations without leaking infrastructure details.

Two families exist:
- RegistrationRejected: the attendee can correct the problem, the message
  is safe to show them as-is.
- CollaboratorError: an external service failed, callers only ever see a
  generic message.
"""


class RegistrationError(Exception):
    """Base class for registration domain errors."""

    pass


class RegistrationRejected(RegistrationError):
    """Registration refused for a reason the attendee may be told about."""

    message = "Registration rejected."

    def __init__(self, detail: str | None = None) -> None:
        super().__init__(detail or self.message)


class MissingRequiredFields(RegistrationRejected):
    """First name, last name or email is missing."""

    message = "You must provide your first name, last name and email."


class PartialAddress(RegistrationRejected):
    """Exactly one of address and country was supplied."""

    message = "If you want to receive stickers, you must fill in both address fields."


class AlreadyRegistered(RegistrationRejected):
    """An attendee with this email already exists."""

    message = "You have already registered."


class CollaboratorError(RegistrationError):
    """Base class for failures of an external collaborator."""

    pass


class AddressVerificationError(CollaboratorError):
    """Address verification provider failed or returned no candidate."""

    pass


class AttendeeStoreError(CollaboratorError):
    """Attendee store could not be queried or written."""

    pass


class EmailDeliveryError(CollaboratorError):
    """Confirmation email could not be handed to the provider."""

    pass


class NewsletterSubscriptionError(CollaboratorError):
    """Newsletter provider refused or failed the subscription."""

    pass
