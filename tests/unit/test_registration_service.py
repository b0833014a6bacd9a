"""
Unit tests for RegistrationService domain logic.

Tests domain logic with mocked ports to verify:
- Required field and partial address validation
- Deduplication short-circuit
- Address verification and resolution
- Persistence, confirmation email and newsletter ordering
- Exception handling and best-effort newsletter
"""

from unittest.mock import Mock, call

import pytest

from src.domain.exceptions import (
    AddressVerificationError,
    AlreadyRegistered,
    AttendeeStoreError,
    EmailDeliveryError,
    MissingRequiredFields,
    NewsletterSubscriptionError,
    PartialAddress,
)
from src.domain.ports import AddressCandidate, AttendeeRecord, RegistrationRequest
from src.domain.registration import RegistrationOutcome, RegistrationService, resolve_address


def make_service(
    exists: bool = False,
    candidate: AddressCandidate | None = None,
) -> tuple[RegistrationService, Mock]:
    """Create a service whose ports all hang off one parent Mock."""
    ports = Mock()
    ports.repository.email_exists.return_value = exists
    ports.verifier.verify.return_value = candidate or AddressCandidate("None", "None", [])
    service = RegistrationService(
        repository=ports.repository,
        address_verifier=ports.verifier,
        email_sender=ports.sender,
        newsletter=ports.newsletter,
        event_name="Test Conf",
        newsletter_tag="test-tag",
    )
    return service, ports


def verified_candidate(*lines: str) -> AddressCandidate:
    padded = list(lines) + [""] * (12 - len(lines))
    return AddressCandidate("Verified", "Premise", padded)


ADA = RegistrationRequest(
    first_name="Ada",
    last_name="Lovelace",
    email="ada@example.com",
    newsletter=True,
)


class TestRequiredFields:
    """Tests for required field validation."""

    @pytest.mark.parametrize(
        "overrides",
        [
            {"first_name": None},
            {"last_name": None},
            {"email": None},
            {"first_name": ""},
            {"last_name": ""},
            {"email": ""},
            {"email": "   "},
        ],
    )
    def test_missing_field_rejected(self, overrides: dict) -> None:
        """Any missing or blank required field raises MissingRequiredFields."""
        service, ports = make_service()
        fields = {"first_name": "Ada", "last_name": "Lovelace", "email": "ada@example.com", **overrides}

        with pytest.raises(MissingRequiredFields):
            service.register(RegistrationRequest(**fields))

        assert ports.mock_calls == []

    def test_message_is_user_facing(self) -> None:
        """MissingRequiredFields carries the message shown to the attendee."""
        service, _ = make_service()

        with pytest.raises(MissingRequiredFields) as exc_info:
            service.register(RegistrationRequest(first_name="Ada"))

        assert str(exc_info.value) == "You must provide your first name, last name and email."


class TestPartialAddress:
    """Tests for the both-or-neither address rule."""

    @pytest.mark.parametrize(
        "address,country",
        [("1 Main St", None), (None, "United Kingdom"), ("1 Main St", ""), ("  ", "United Kingdom")],
    )
    def test_partial_address_rejected(self, address: str | None, country: str | None) -> None:
        """Exactly one of address and country raises PartialAddress, no calls made."""
        service, ports = make_service()
        request = RegistrationRequest(
            first_name="Ada",
            last_name="Lovelace",
            email="ada@example.com",
            address=address,
            country=country,
        )

        with pytest.raises(PartialAddress):
            service.register(request)

        assert ports.mock_calls == []

    def test_missing_fields_checked_before_partial_address(self) -> None:
        """A request missing names and with a partial address reports the names."""
        service, _ = make_service()

        with pytest.raises(MissingRequiredFields):
            service.register(RegistrationRequest(email="ada@example.com", country="France"))


class TestDeduplication:
    """Tests for the duplicate email check."""

    def test_existing_email_rejected(self) -> None:
        """Registered email raises AlreadyRegistered."""
        service, _ = make_service(exists=True)

        with pytest.raises(AlreadyRegistered) as exc_info:
            service.register(ADA)

        assert str(exc_info.value) == "You have already registered."

    def test_no_side_effects_after_duplicate(self) -> None:
        """No verify, create, email or subscribe call after a duplicate."""
        service, ports = make_service(exists=True)
        request = RegistrationRequest(
            first_name="Ada",
            last_name="Lovelace",
            email="ada@example.com",
            newsletter=True,
            address="1 Main St",
            country="United Kingdom",
        )

        with pytest.raises(AlreadyRegistered):
            service.register(request)

        ports.verifier.verify.assert_not_called()
        ports.repository.create.assert_not_called()
        ports.sender.send.assert_not_called()
        ports.newsletter.subscribe.assert_not_called()

    def test_lookup_uses_normalized_email(self) -> None:
        """Duplicate check queries the stripped, lowercased email."""
        service, ports = make_service()
        request = RegistrationRequest(first_name="Ada", last_name="Lovelace", email="  Ada@Example.COM ")

        service.register(request)

        ports.repository.email_exists.assert_called_once_with("ada@example.com")

    def test_second_identical_submission_is_duplicate(self) -> None:
        """Same payload twice: success, then AlreadyRegistered."""
        stored: set[str] = set()
        repo = Mock()
        repo.email_exists.side_effect = lambda email: email in stored
        repo.create.side_effect = lambda record: stored.add(record.email)
        service = RegistrationService(
            repository=repo,
            address_verifier=Mock(),
            email_sender=Mock(),
            newsletter=Mock(),
        )

        assert service.register(ADA) == RegistrationOutcome(address_supplied=False)
        with pytest.raises(AlreadyRegistered):
            service.register(ADA)

        assert repo.create.call_count == 1


class TestResolveAddress:
    """Tests for reducing a provider candidate to a persisted address."""

    def test_verified_premise_joins_lines(self) -> None:
        """Verified/Premise joins non-empty lines in order."""
        candidate = verified_candidate("1 Main St", "London", "UK")

        result = resolve_address("1 main street", "United Kingdom", candidate)

        assert result.address_verified is True
        assert result.address == "1 Main St, London, UK"

    def test_verified_delivery_point_is_verified(self) -> None:
        """Verified/DeliveryPoint counts as verified."""
        candidate = AddressCandidate("Verified", "DeliveryPoint", ["Flat 2", "", "1 Main St"])

        result = resolve_address("flat 2 1 main st", "United Kingdom", candidate)

        assert result.address_verified is True
        assert result.address == "Flat 2, 1 Main St"

    @pytest.mark.parametrize(
        "status,precision",
        [
            ("None", "None"),
            ("Partial", "Premise"),
            ("Ambiguous", "DeliveryPoint"),
            ("Verified", "Thoroughfare"),
            ("Verified", "Locality"),
        ],
    )
    def test_unverified_falls_back_to_freeform(self, status: str, precision: str) -> None:
        """Anything short of Verified + Premise/DeliveryPoint keeps the typed address."""
        candidate = AddressCandidate(status, precision, ["1 Main St", "London", "UK"])

        result = resolve_address("1 Main St", "United Kingdom", candidate)

        assert result.address_verified is False
        assert result.address == "1 Main St, United Kingdom"


class TestRegistrationFlow:
    """Tests for registration flow orchestration."""

    def test_scenario_without_address(self) -> None:
        """No address: record without address, base email, subscription, address false."""
        service, ports = make_service()

        outcome = service.register(ADA)

        assert outcome == RegistrationOutcome(address_supplied=False, address_verified=None)
        ports.verifier.verify.assert_not_called()
        ports.repository.create.assert_called_once_with(
            AttendeeRecord(first_name="Ada", last_name="Lovelace", email="ada@example.com")
        )
        recipient, message = ports.sender.send.call_args[0]
        assert recipient == "ada@example.com"
        assert "stickers" not in message.html
        ports.newsletter.subscribe.assert_called_once_with("ada@example.com", "test-tag")

    def test_scenario_with_verified_address(self) -> None:
        """Verified address is persisted joined and reported as verified."""
        service, ports = make_service(candidate=verified_candidate("1 Main St", "London", "UK"))
        request = RegistrationRequest(
            first_name="Ada",
            last_name="Lovelace",
            email="ada@example.com",
            address="1 Main St",
            country="United Kingdom",
        )

        outcome = service.register(request)

        assert outcome == RegistrationOutcome(address_supplied=True, address_verified=True)
        ports.verifier.verify.assert_called_once_with("1 Main St", "United Kingdom")
        ports.repository.create.assert_called_once_with(
            AttendeeRecord(
                first_name="Ada",
                last_name="Lovelace",
                email="ada@example.com",
                address="1 Main St, London, UK",
                address_verified=True,
            )
        )
        message = ports.sender.send.call_args[0][1]
        assert "successfully verified your address" in message.html

    def test_unverified_address_persisted_with_country(self) -> None:
        """Unverified address is persisted as freeform + country."""
        service, ports = make_service(candidate=AddressCandidate("None", "None", [""] * 12))
        request = RegistrationRequest(
            first_name="Ada",
            last_name="Lovelace",
            email="ada@example.com",
            address="1 Main St",
            country="United Kingdom",
        )

        outcome = service.register(request)

        assert outcome == RegistrationOutcome(address_supplied=True, address_verified=False)
        record = ports.repository.create.call_args[0][0]
        assert record.address == "1 Main St, United Kingdom"
        assert record.address_verified is False
        message = ports.sender.send.call_args[0][1]
        assert "1 Main St, United Kingdom" in message.html

    def test_steps_run_in_order(self) -> None:
        """Check, verify, create, send and subscribe run in that order."""
        service, ports = make_service(candidate=verified_candidate("1 Main St"))
        request = RegistrationRequest(
            first_name="Ada",
            last_name="Lovelace",
            email="ada@example.com",
            newsletter=True,
            address="1 Main St",
            country="United Kingdom",
        )

        service.register(request)

        names = [c[0] for c in ports.mock_calls]
        assert names == [
            "repository.email_exists",
            "verifier.verify",
            "repository.create",
            "sender.send",
            "newsletter.subscribe",
        ]

    def test_no_subscription_without_opt_in(self) -> None:
        """Newsletter is left alone when the attendee did not opt in."""
        service, ports = make_service()
        request = RegistrationRequest(first_name="Ada", last_name="Lovelace", email="ada@example.com")

        service.register(request)

        ports.newsletter.subscribe.assert_not_called()

    def test_names_are_stripped(self) -> None:
        """Surrounding whitespace is removed before persisting."""
        service, ports = make_service()
        request = RegistrationRequest(first_name=" Ada ", last_name="Lovelace\n", email="ada@example.com")

        service.register(request)

        record = ports.repository.create.call_args[0][0]
        assert record.first_name == "Ada"
        assert record.last_name == "Lovelace"


class TestCollaboratorFailures:
    """Tests for collaborator failure propagation."""

    def test_verification_failure_stops_before_create(self) -> None:
        """Provider failure propagates and no record is created."""
        service, ports = make_service()
        ports.verifier.verify.side_effect = AddressVerificationError("boom")
        request = RegistrationRequest(
            first_name="Ada",
            last_name="Lovelace",
            email="ada@example.com",
            address="1 Main St",
            country="United Kingdom",
        )

        with pytest.raises(AddressVerificationError):
            service.register(request)

        ports.repository.create.assert_not_called()
        ports.sender.send.assert_not_called()

    def test_store_failure_stops_before_email(self) -> None:
        """Persistence failure propagates and no email is sent."""
        service, ports = make_service()
        ports.repository.create.side_effect = AttendeeStoreError("down")

        with pytest.raises(AttendeeStoreError):
            service.register(ADA)

        ports.sender.send.assert_not_called()
        ports.newsletter.subscribe.assert_not_called()

    def test_email_failure_propagates_after_create(self) -> None:
        """Email failure propagates; the record was already created."""
        service, ports = make_service()
        ports.sender.send.side_effect = EmailDeliveryError("rejected")

        with pytest.raises(EmailDeliveryError):
            service.register(ADA)

        ports.repository.create.assert_called_once()
        ports.newsletter.subscribe.assert_not_called()

    def test_newsletter_failure_is_swallowed(self, caplog: pytest.LogCaptureFixture) -> None:
        """Newsletter failure is logged and the registration still succeeds."""
        service, ports = make_service()
        ports.newsletter.subscribe.side_effect = NewsletterSubscriptionError("nope")

        outcome = service.register(ADA)

        assert outcome == RegistrationOutcome(address_supplied=False)
        assert "Newsletter subscription failed" in caplog.text

    def test_unexpected_newsletter_error_is_swallowed(self) -> None:
        """Any exception from the newsletter port is swallowed."""
        service, ports = make_service()
        ports.newsletter.subscribe.side_effect = RuntimeError("unexpected")

        service.register(ADA)

        assert ports.newsletter.subscribe.call_args == call("ada@example.com", "test-tag")
