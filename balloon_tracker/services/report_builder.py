"""Classification and HTML report rendering."""
import math
from html import escape
from typing import List

from balloon_tracker.config import SUBJECT_MATCHING, SUBJECT_SUMMARY
from balloon_tracker.models.result import Classification, EndpointResult, Report


def classify(is_water: bool, distance_km: float, max_distance_km: float) -> Classification:
    """A landing is positive when it is on land and within the match radius (inclusive)."""
    if not is_water and distance_km <= max_distance_km:
        return Classification.POSITIVE
    return Classification.NEGATIVE


def format_number(value: float) -> str:
    """Render a coordinate or altitude without a trailing .0 for whole numbers."""
    if math.isnan(value):
        return "NaN"
    if value.is_integer():
        return str(int(value))
    return repr(value)


class ReportBuilder:
    """Builds the summary email from per-endpoint results."""

    def build_subject(self, results: List[EndpointResult]) -> str:
        """Subject line, flagging runs with at least one positive result."""
        if any(r.is_positive for r in results):
            return SUBJECT_MATCHING
        return SUBJECT_SUMMARY

    def render_result(self, result: EndpointResult) -> str:
        """HTML fragment for one forecast window."""
        lat = format_number(result.point.latitude)
        lon = format_number(result.point.longitude)
        altitude = format_number(result.point.altitude_meters)

        return (
            f"<h2>{escape(result.label)}</h2>\n"
            f"<p>\n"
            f"  <strong>Coordinates:</strong> {lat}, {lon}\n"
            f"  (<a href=\"{escape(result.map_link)}\">Map Link</a>)\n"
            f"</p>\n"
            f"<p><strong>Distance:</strong> {result.distance_km:.2f} km</p>\n"
            f"<p><strong>Altitude:</strong> {altitude} m</p>\n"
            f"<p><strong>Result:</strong> {result.classification.value}</p>\n"
            f"<img src=\"{escape(result.map_image_url)}\" alt=\"Map image\" />\n"
            f"<hr/>\n"
        )

    def build(self, results: List[EndpointResult]) -> Report:
        """Render the full report."""
        html = "".join(self.render_result(r) for r in results)
        return Report(subject=self.build_subject(results), html=html, results=list(results))
