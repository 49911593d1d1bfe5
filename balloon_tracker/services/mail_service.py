"""Service for sending the report through the Mailgun HTTP API."""
import logging
from typing import List, Optional

import requests

from balloon_tracker.config import MAIL_SENDER_NAME

logger = logging.getLogger(__name__)


class MailService:
    """Sends HTML email via Mailgun. Failures are logged, never raised."""

    def __init__(
        self,
        api_key: str,
        domain: str,
        api_base: str = "https://api.mailgun.net",
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self.api_key = api_key
        self.domain = domain
        self.api_base = api_base.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    @property
    def messages_url(self) -> str:
        return f"{self.api_base}/v3/{self.domain}/messages"

    @property
    def sender(self) -> str:
        return f"{MAIL_SENDER_NAME} <noreply@{self.domain}>"

    def build_payload(self, recipients: List[str], subject: str, html: str) -> dict:
        """Form fields for the Mailgun messages endpoint."""
        return {
            "from": self.sender,
            "to": recipients,
            "subject": subject,
            "html": html,
        }

    def send(self, recipients: List[str], subject: str, html: str) -> bool:
        """
        Send one email.

        Returns:
            True if Mailgun accepted the message, False otherwise
        """
        if not recipients:
            logger.error("No notification recipients configured, email not sent")
            return False

        try:
            response = self.session.post(
                self.messages_url,
                auth=("api", self.api_key),
                data=self.build_payload(recipients, subject, html),
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.RequestException as e:
            logger.error(f"Error sending email: {e}")
            return False

        logger.info(f"Email sent: {response.text.strip()}")
        return True
