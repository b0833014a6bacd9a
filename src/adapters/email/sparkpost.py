"""SparkPost transactional email integration."""

import logging

import requests

from src.domain.exceptions import EmailDeliveryError
from src.domain.ports import ConfirmationEmail

logger = logging.getLogger(__name__)


class SparkPostEmailSender:
    """
    Implements EmailSender protocol via the SparkPost Transmissions API.

    One transmission is created per confirmation email, with a single
    recipient.
    """

    def __init__(
        self,
        api_key: str,
        from_name: str,
        from_address: str,
        base_url: str = "https://api.sparkpost.com/api/v1",
        timeout: float = 10,
    ) -> None:
        """Configure the SparkPost sender."""
        self._api_key = api_key
        self.from_name = from_name
        self.from_address = from_address
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def send(self, recipient: str, message: ConfirmationEmail) -> None:
        """
        Create a transmission for a single recipient.

        Args:
            recipient: Recipient email address
            message: Rendered confirmation email

        Raises:
            EmailDeliveryError: If SparkPost rejects the transmission
        """
        payload = {
            "content": {
                "from": {"name": self.from_name, "email": self.from_address},
                "subject": message.subject,
                "html": message.html,
            },
            "recipients": [{"address": recipient}],
        }

        try:
            response = requests.post(
                f"{self.base_url}/transmissions",
                json=payload,
                headers={"Authorization": self._api_key},
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.RequestException as err:
            raise EmailDeliveryError(f"Failed to send confirmation email to {recipient}") from err

        logger.info("Confirmation email sent to %s", recipient)
