"""Service for building the daily trajectory forecast requests."""
from datetime import datetime, timedelta, timezone
from typing import List, Optional

import requests

from balloon_tracker.config import FORECAST_WINDOWS, LAUNCH_HOUR_UTC, TRAJECTORY_URL
from balloon_tracker.models.forecast import ForecastEndpoint


class EndpointService:
    """Builds forecast descriptors and request URLs for one run."""

    def __init__(
        self,
        launch_lat: float,
        launch_lon: float,
        balloon_ceiling: int,
        now: Optional[datetime] = None,
    ):
        """
        Initialize for a run.

        Args:
            launch_lat: Launch site latitude
            launch_lon: Launch site longitude
            balloon_ceiling: Burst/float altitude passed as TOP
            now: Reference time, defaults to the current UTC time
        """
        self.launch_lat = launch_lat
        self.launch_lon = launch_lon
        self.balloon_ceiling = balloon_ceiling
        self.now = now or datetime.now(timezone.utc)

    def get_launch_time(self) -> str:
        """Launch time parameter: today's date at the fixed launch hour (YYYYMMDDHH)."""
        return f"{self.now:%Y%m%d}{LAUNCH_HOUR_UTC:02d}"

    def get_endpoints(self) -> List[ForecastEndpoint]:
        """Forecast windows for today, +24h and +48h."""
        endpoints = []
        for offset_hours, label in FORECAST_WINDOWS:
            target = self.now + timedelta(hours=offset_hours)
            endpoints.append(ForecastEndpoint(
                offset_hours=offset_hours,
                forecast_code=LAUNCH_HOUR_UTC + offset_hours,
                label=f"{label} ({target:%Y-%m-%d})",
            ))
        return endpoints

    def get_params(self, endpoint: ForecastEndpoint) -> list:
        """Query parameters for one forecast window, in the order the form posts them."""
        return [
            ("TIME", self.get_launch_time()),
            ("FCST", str(endpoint.forecast_code)),
            ("POINT", "none"),
            ("LAT", str(self.launch_lat)),
            ("LON", str(self.launch_lon)),
            ("TOP", str(self.balloon_ceiling)),
            ("OUTPUT", "list"),
            ("Submit", "Submit"),
            (".cgifields", "POINT"),
            (".cgifields", "FCST"),
            (".cgifields", "CALCDROP"),
            (".cgifields", "TIME"),
            (".cgifields", "OUTPUT"),
        ]

    def get_url(self, endpoint: ForecastEndpoint) -> str:
        """Full request URL for one forecast window."""
        request = requests.Request("GET", TRAJECTORY_URL, params=self.get_params(endpoint))
        return request.prepare().url
