"""
Port interfaces - Protocol definitions for infrastructure abstraction.

This module defines the interfaces (ports) that the domain requires
from infrastructure, and the value types that travel across them.
Adapters implement these protocols.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol


class VerificationStatus(str, Enum):
    """
    Verification status reported by the address provider.

    Only VERIFIED counts towards a verified address, and only when
    paired with a deliverable AddressPrecision.
    """

    VERIFIED = "Verified"
    PARTIAL = "Partial"
    AMBIGUOUS = "Ambiguous"
    NONE = "None"


class AddressPrecision(str, Enum):
    """Level of detail the provider matched an address to."""

    NONE = "None"
    ADMINISTRATIVE_AREA = "AdministrativeArea"
    LOCALITY = "Locality"
    THOROUGHFARE = "Thoroughfare"
    PREMISE = "Premise"
    DELIVERY_POINT = "DeliveryPoint"


@dataclass(frozen=True)
class RegistrationRequest:
    """Attendee details as submitted by the registration form."""

    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    newsletter: bool = False
    address: str | None = None
    country: str | None = None


@dataclass(frozen=True)
class AttendeeRecord:
    """Persisted attendee. Created once per email, never mutated."""

    first_name: str
    last_name: str
    email: str
    address: str | None = None
    address_verified: bool | None = None


@dataclass(frozen=True)
class AddressCandidate:
    """
    Best match returned by the address verification provider.

    address_lines holds the provider's address1..address12 fields in order,
    empty strings included.
    """

    verification_status: str
    address_precision: str
    address_lines: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class AddressVerificationResult:
    """Address to persist and whether the provider vouched for it."""

    address: str
    address_verified: bool


@dataclass(frozen=True)
class ConfirmationEmail:
    """Rendered confirmation email."""

    subject: str
    html: str


class AttendeeRepository(Protocol):
    """Port interface for attendee persistence."""

    def email_exists(self, email: str) -> bool:
        """
        Check whether an attendee with this email is already stored.

        Args:
            email: Normalized email address

        Returns:
            True if a record exists, False otherwise
        """
        ...

    def create(self, record: AttendeeRecord) -> None:
        """
        Store a new attendee record.

        Raises:
            AttendeeStoreError: If the record could not be written
        """
        ...


class AddressVerifier(Protocol):
    """Port interface for postal address verification."""

    def verify(self, freeform: str, country: str) -> AddressCandidate:
        """
        Look up a freeform address in the given country.

        Raises:
            AddressVerificationError: If the provider fails or has no match
        """
        ...


class EmailSender(Protocol):
    """Port interface for email delivery."""

    def send(self, recipient: str, message: ConfirmationEmail) -> None:
        """
        Send an HTML email to a single recipient.

        Raises:
            EmailDeliveryError: If the provider rejects the message
        """
        ...


class NewsletterSubscriber(Protocol):
    """Port interface for newsletter subscription."""

    def subscribe(self, email: str, tag: str) -> None:
        """
        Subscribe an email address under the given tag.

        Raises:
            NewsletterSubscriptionError: If the provider refuses the subscriber
        """
        ...
