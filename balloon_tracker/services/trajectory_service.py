"""Service for fetching balloon trajectory forecasts."""
import logging
from typing import Optional

import requests
import urllib3
from urllib3.exceptions import InsecureRequestWarning

from balloon_tracker.models.forecast import TrajectoryPoint
from balloon_tracker.utils.trajectory_parser import extract_last_row

logger = logging.getLogger(__name__)


class TrajectoryService:
    """Fetches trajectory listings and extracts the predicted landing point."""

    def __init__(
        self,
        verify_tls: bool = False,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the HTTP session.

        Args:
            verify_tls: Validate the server certificate
            timeout: Request timeout in seconds (None waits indefinitely)
            session: Session to use instead of a fresh one
        """
        self.verify_tls = verify_tls
        self.timeout = timeout
        self.session = session or requests.Session()

        if not verify_tls:
            logger.warning("TLS certificate verification is DISABLED for trajectory requests")
            urllib3.disable_warnings(InsecureRequestWarning)

    def fetch(self, url: str) -> str:
        """
        Download a trajectory page.

        Raises:
            requests.RequestException: on connection errors or non-2xx responses
        """
        response = self.session.get(url, verify=self.verify_tls, timeout=self.timeout)
        response.raise_for_status()
        return response.text

    def fetch_point(self, url: str) -> TrajectoryPoint:
        """Download a trajectory page and parse its landing point."""
        return extract_last_row(self.fetch(url))
