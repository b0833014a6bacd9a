"""Smarty International Street address verification."""

import logging

import requests

from src.domain.exceptions import AddressVerificationError
from src.domain.ports import AddressCandidate

logger = logging.getLogger(__name__)

# Smarty returns the formatted address split over address1..address12.
ADDRESS_LINE_COUNT = 12


class SmartyAddressVerifier:
    """
    Implements AddressVerifier protocol via Smarty's International Street API.

    Only the first candidate is considered.
    """

    def __init__(
        self,
        auth_id: str,
        auth_token: str,
        base_url: str = "https://international-street.api.smarty.com",
        timeout: float = 10,
    ) -> None:
        """Configure the Smarty verifier."""
        self._auth_id = auth_id
        self._auth_token = auth_token
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def verify(self, freeform: str, country: str) -> AddressCandidate:
        """
        Look up a freeform address.

        Args:
            freeform: Address as typed by the attendee
            country: Country name or ISO code

        Returns:
            AddressCandidate built from the first Smarty candidate

        Raises:
            AddressVerificationError: On HTTP failure or when Smarty returns
                no candidate
        """
        params = {
            "auth-id": self._auth_id,
            "auth-token": self._auth_token,
            "country": country,
            "freeform": freeform,
        }

        try:
            response = requests.get(f"{self.base_url}/verify", params=params, timeout=self.timeout)
            response.raise_for_status()
            candidates = response.json()
        except (requests.RequestException, ValueError) as err:
            raise AddressVerificationError("Address verification request failed") from err

        if not candidates:
            raise AddressVerificationError("Address verification returned no candidate")

        candidate = candidates[0]
        analysis = candidate.get("analysis") or {}
        logger.info(
            "Address verification for %s: status=%s precision=%s",
            country,
            analysis.get("verification_status"),
            analysis.get("address_precision"),
        )
        return AddressCandidate(
            verification_status=analysis.get("verification_status", "None"),
            address_precision=analysis.get("address_precision", "None"),
            address_lines=[candidate.get(f"address{i}", "") for i in range(1, ADDRESS_LINE_COUNT + 1)],
        )
