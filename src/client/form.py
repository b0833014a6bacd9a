"""
Registration form client.

Mirrors the browser registration form: validates the attendee's input
before anything is sent, posts a single request to the registration
endpoint and keeps the submitted/success/error state the form renders.
"""

import logging
import threading
from dataclasses import dataclass
from typing import Any

import requests

from src.domain.exceptions import PartialAddress

logger = logging.getLogger(__name__)

MISSING_FIELDS_ERROR = (
    "You must fill in all required fields - at minimum your first name, last name and email address."
)
PARTIAL_ADDRESS_ERROR = PartialAddress.message
TRANSPORT_ERROR = "There was an error registering. If this problem persists please email us."


class SubmissionInProgress(Exception):
    """A submission from this form is already in flight."""

    pass


@dataclass
class FormInput:
    """Values entered in the registration form."""

    first_name: str = ""
    last_name: str = ""
    email: str = ""
    newsletter: bool = False
    address: str = ""
    country: str = ""


@dataclass
class FormState:
    """What the form currently shows."""

    submitted: bool = False
    success: bool = False
    error: str | None = None
    response: dict[str, Any] | None = None


def build_payload(form: FormInput) -> dict[str, Any]:
    """
    Validate the form and build the request payload.

    Raises:
        ValueError: With the message to show when validation fails
    """
    if not form.first_name or not form.last_name or not form.email:
        raise ValueError(MISSING_FIELDS_ERROR)

    partial_address = bool(form.address or form.country)
    full_address = bool(form.address and form.country)
    if partial_address and not full_address:
        raise ValueError(PARTIAL_ADDRESS_ERROR)

    payload: dict[str, Any] = {
        "first_name": form.first_name,
        "last_name": form.last_name,
        "email": form.email,
        "newsletter": form.newsletter,
    }
    if full_address:
        payload["address"] = form.address
        payload["country"] = form.country
    return payload


class RegistrationForm:
    """
    Client for the registration endpoint.

    Allows one submission in flight at a time per instance.
    """

    def __init__(self, endpoint: str, session: requests.Session | None = None, timeout: float = 10) -> None:
        self.endpoint = endpoint
        self.timeout = timeout
        self.state = FormState()
        self._session = session or requests.Session()
        self._in_flight = threading.Lock()

    def submit(self, form: FormInput) -> FormState:
        """
        Validate and submit the form.

        Returns:
            The updated form state

        Raises:
            SubmissionInProgress: If another submit on this form has not finished
        """
        if not self._in_flight.acquire(blocking=False):
            raise SubmissionInProgress()
        try:
            return self._submit(form)
        finally:
            self._in_flight.release()

    def _submit(self, form: FormInput) -> FormState:
        self.state = FormState(submitted=True)

        try:
            payload = build_payload(form)
        except ValueError as exc:
            self._fail(str(exc))
            return self.state

        try:
            response = self._session.post(self.endpoint, json=payload, timeout=self.timeout)
            data = response.json()
        except (requests.RequestException, ValueError):
            logger.warning("Registration request to %s failed", self.endpoint, exc_info=True)
            self._fail(TRANSPORT_ERROR)
            return self.state

        if not isinstance(data, dict):
            self._fail(TRANSPORT_ERROR)
        elif data.get("error"):
            self._fail(data["error"])
        else:
            self.state.response = data
            self.state.success = True
        return self.state

    def _fail(self, message: str) -> None:
        self.state.error = message
        self.state.submitted = False
