"""Service for checking whether a coordinate is over water."""
import logging
from typing import Optional

import requests

from balloon_tracker.config import WATER_API_URL

logger = logging.getLogger(__name__)


class WaterService:
    """
    Client for the isitwater API (RapidAPI).

    Lookups fail open: when the API cannot be reached or answers with an error,
    the point is treated as land so that it still shows up for review.
    """

    def __init__(
        self,
        api_host: str,
        api_key: str,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({
            "x-rapidapi-host": api_host,
            "x-rapidapi-key": api_key,
        })

    def is_water(self, latitude: float, longitude: float) -> bool:
        """Return True if the point is over water, False for land or on error."""
        try:
            response = self.session.get(
                WATER_API_URL,
                params={"latitude": latitude, "longitude": longitude},
                timeout=self.timeout,
            )
            response.raise_for_status()
            water = bool(response.json().get("water", False))
        except (requests.RequestException, ValueError, AttributeError) as e:
            logger.error(f"Error fetching water status for ({latitude}, {longitude}): {e}")
            return False

        logger.info(f"isitwater response for ({latitude}, {longitude}): {'Water' if water else 'Land'}")
        return water
