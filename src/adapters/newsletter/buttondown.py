"""Buttondown newsletter integration."""

import logging

import requests

from src.domain.exceptions import NewsletterSubscriptionError

logger = logging.getLogger(__name__)


class ButtondownSubscriber:
    """Implements NewsletterSubscriber protocol via the Buttondown API."""

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.buttondown.email/v1",
        timeout: float = 10,
    ) -> None:
        """Configure the Buttondown subscriber."""
        self._api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def subscribe(self, email: str, tag: str) -> None:
        """
        Create a Buttondown subscriber carrying a single tag.

        Raises:
            NewsletterSubscriptionError: If Buttondown refuses the subscriber
        """
        try:
            response = requests.post(
                f"{self.base_url}/subscribers",
                json={"email": email, "tags": [tag]},
                headers={"Authorization": f"Token {self._api_key}"},
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.RequestException as err:
            raise NewsletterSubscriptionError(f"Failed to subscribe {email}") from err

        logger.info("Subscribed %s to newsletter tag %s", email, tag)
