"""Configuration for the balloon landing tracker."""
from typing import List, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings

# Trajectory service (University of Wyoming balloon trajectory CGI)
TRAJECTORY_URL = "https://weather.uwyo.edu/cgi-bin/balloon_traj"
LAUNCH_HOUR_UTC = 6  # Trajectories are always requested for a 06:00 UTC launch

# Forecast windows: (offset in hours, label prefix)
# The service code is LAUNCH_HOUR_UTC + offset (6, 30, 54)
FORECAST_WINDOWS = [
    (0, "Today forecast"),
    (24, "24 hours forecast"),
    (48, "48 hours forecast"),
]

# Water classification (isitwater via RapidAPI)
WATER_API_URL = "https://isitwater-com.p.rapidapi.com/"

# Map links
OSM_MAP_URL = "https://www.openstreetmap.org/"
MAPBOX_STATIC_URL = "https://api.mapbox.com/styles/v1/mapbox/streets-v12/static"

# Email
MAIL_SENDER_NAME = "Weather Balloon Tracker"
SUBJECT_MATCHING = "Balloon Prediction - Matching Results"
SUBJECT_SUMMARY = "Balloon Predictions Summary"


class Settings(BaseSettings):
    """Runtime settings, read from the environment and an optional .env file."""

    # Launch site and balloon
    launch_lat: float
    launch_lon: float
    balloon_ceiling: int

    # Recovery base and match radius (km)
    base_lat: float
    base_lon: float
    max_distance: float

    # Notification
    notification_emails: str = ""
    mailgun_api_key: str = ""
    mailgun_domain: str = ""
    mailgun_api_base: str = "https://api.mailgun.net"

    # Third-party APIs
    rapidapi_host: str = "isitwater-com.p.rapidapi.com"
    rapidapi_key: str = ""
    mapboxapi_key: str = ""
    mapbox_image_width: int = 600
    mapbox_image_height: int = 400
    mapbox_image_zoom: float = 9

    # Scheduling (UTC, HH:MM)
    schedule_time: str = "07:00"
    test_mode: bool = False

    # HTTP
    # The trajectory host has served broken certificate chains; verification
    # stays off unless explicitly enabled.
    trajectory_verify_tls: bool = False
    request_timeout: Optional[float] = None

    log_level: str = "INFO"

    class Config:
        env_prefix = ""
        env_file = ".env"
        extra = "ignore"

    @field_validator("schedule_time")
    @classmethod
    def _check_schedule_time(cls, value: str) -> str:
        parse_schedule_time(value)
        return value

    @property
    def recipients(self) -> List[str]:
        """Notification addresses parsed from the comma-separated setting."""
        return [e.strip() for e in self.notification_emails.split(",") if e.strip()]

    @property
    def schedule_hour_minute(self) -> tuple:
        """Schedule time as (hour, minute)."""
        return parse_schedule_time(self.schedule_time)


def parse_schedule_time(value: str) -> tuple:
    """
    Parse an "HH:MM" string into (hour, minute).

    Raises:
        ValueError: if the string is not a valid 24h time
    """
    parts = value.strip().split(":")
    if len(parts) != 2:
        raise ValueError(f"Schedule time must be HH:MM, got {value!r}")
    hour, minute = int(parts[0]), int(parts[1])
    if not (0 <= hour <= 23 and 0 <= minute <= 59):
        raise ValueError(f"Schedule time out of range: {value!r}")
    return hour, minute
