"""
Main orchestrator for the balloon landing tracker.

Each run:
  1. Build the three forecast windows (today, +24h, +48h)
  2. For each window, fetch the trajectory listing and parse the landing point
  3. Measure the distance from the recovery base and check for water
  4. Classify the landing (positive = on land and within range)
  5. Email an HTML summary of all parsed windows

Windows whose listing cannot be fetched or parsed are logged and left out of
the report.
"""
import logging
from datetime import datetime
from typing import List, Optional

import requests

from balloon_tracker.config import Settings
from balloon_tracker.models.forecast import ForecastEndpoint
from balloon_tracker.models.result import EndpointResult, Report
from balloon_tracker.services.endpoint_service import EndpointService
from balloon_tracker.services.mail_service import MailService
from balloon_tracker.services.map_service import MapService
from balloon_tracker.services.report_builder import ReportBuilder, classify
from balloon_tracker.services.scheduler_service import DailyScheduler
from balloon_tracker.services.trajectory_service import TrajectoryService
from balloon_tracker.services.water_service import WaterService
from balloon_tracker.utils.geo_utils import haversine_km
from balloon_tracker.utils.logging_utils import setup_logging

logger = logging.getLogger(__name__)


class TrackerOrchestrator:
    """Runs one tracking pass over the forecast windows."""

    def __init__(
        self,
        settings: Settings,
        trajectory_service: Optional[TrajectoryService] = None,
        water_service: Optional[WaterService] = None,
        mail_service: Optional[MailService] = None,
        dry_run: bool = False,
    ):
        """
        Initialize the tracker.

        Args:
            settings: Runtime settings
            trajectory_service: Trajectory client (built from settings if omitted)
            water_service: Water lookup client (built from settings if omitted)
            mail_service: Email client (built from settings if omitted)
            dry_run: Log the report instead of emailing it
        """
        self.settings = settings
        self.dry_run = dry_run
        self.trajectory_service = trajectory_service or TrajectoryService(
            verify_tls=settings.trajectory_verify_tls,
            timeout=settings.request_timeout,
        )
        self.water_service = water_service or WaterService(
            api_host=settings.rapidapi_host,
            api_key=settings.rapidapi_key,
            timeout=settings.request_timeout,
        )
        self.mail_service = mail_service or MailService(
            api_key=settings.mailgun_api_key,
            domain=settings.mailgun_domain,
            api_base=settings.mailgun_api_base,
            timeout=settings.request_timeout,
        )
        self.map_service = MapService(
            access_token=settings.mapboxapi_key,
            width=settings.mapbox_image_width,
            height=settings.mapbox_image_height,
            zoom=settings.mapbox_image_zoom,
        )
        self.report_builder = ReportBuilder()

    def process_endpoint(
        self,
        endpoint: ForecastEndpoint,
        endpoint_service: EndpointService,
    ) -> Optional[EndpointResult]:
        """
        Fetch, parse and classify one forecast window.

        Returns:
            EndpointResult, or None if the window was skipped
        """
        url = endpoint_service.get_url(endpoint)
        logger.info(f"Fetching data from: {url}")

        try:
            point = self.trajectory_service.fetch_point(url)
        except requests.RequestException as e:
            logger.error(f"Error fetching data for {endpoint.label}: {e}")
            return None

        if not point.is_valid:
            logger.error(f"Failed to extract valid coordinates for {endpoint.label}")
            return None

        distance_km = haversine_km(
            self.settings.base_lat, self.settings.base_lon,
            point.latitude, point.longitude,
        )
        is_water = self.water_service.is_water(point.latitude, point.longitude)
        classification = classify(is_water, distance_km, self.settings.max_distance)

        logger.info(
            f"{endpoint.label}: ({point.latitude}, {point.longitude}) "
            f"{distance_km:.2f} km, {classification.value}"
        )

        return EndpointResult(
            label=endpoint.label,
            point=point,
            distance_km=distance_km,
            is_water=is_water,
            classification=classification,
            map_link=self.map_service.get_map_link(point.latitude, point.longitude),
            map_image_url=self.map_service.get_map_image_url(point.latitude, point.longitude),
        )

    def run(self, now: Optional[datetime] = None) -> Report:
        """
        Run one full pass and send the report.

        Args:
            now: Reference time for the forecast windows (defaults to now, UTC)

        Returns:
            The report that was sent (or would have been, in dry-run mode)
        """
        endpoint_service = EndpointService(
            launch_lat=self.settings.launch_lat,
            launch_lon=self.settings.launch_lon,
            balloon_ceiling=self.settings.balloon_ceiling,
            now=now,
        )

        results: List[EndpointResult] = []
        for endpoint in endpoint_service.get_endpoints():
            result = self.process_endpoint(endpoint, endpoint_service)
            if result is not None:
                results.append(result)

        report = self.report_builder.build(results)
        logger.info(
            f"Run complete: {len(results)} windows reported, "
            f"{sum(r.is_positive for r in results)} positive"
        )

        if self.dry_run:
            logger.info(f"Dry run, email not sent. Subject: {report.subject}\n{report.html}")
        else:
            self.mail_service.send(self.settings.recipients, report.subject, report.html)

        return report


def main():
    """Run the tracker once or on its daily schedule."""
    import argparse

    parser = argparse.ArgumentParser(description="Track predicted weather balloon landings")
    parser.add_argument(
        "--now",
        action="store_true",
        help="Run once immediately (same as TEST_MODE=true)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Log the report instead of emailing it",
    )
    args = parser.parse_args()

    settings = Settings()
    setup_logging(settings.log_level)

    tracker = TrackerOrchestrator(settings, dry_run=args.dry_run)

    if args.now or settings.test_mode:
        logger.info("Running in test mode...")
        tracker.run()
        return

    logger.info("Running in scheduled mode...")
    hour, minute = settings.schedule_hour_minute
    scheduler = DailyScheduler(hour, minute, tracker.run)
    scheduler.run_forever()


if __name__ == "__main__":
    main()
