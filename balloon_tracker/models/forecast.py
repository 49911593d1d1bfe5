"""Forecast request and trajectory point models."""
import math

from attrs import define


@define
class ForecastEndpoint:
    """One trajectory forecast lookup (a forecast window)."""

    offset_hours: int
    forecast_code: int  # Service-specific FCST value
    label: str


@define
class TrajectoryPoint:
    """Predicted landing point parsed from a trajectory listing."""

    latitude: float
    longitude: float
    altitude_meters: float

    @classmethod
    def invalid(cls) -> "TrajectoryPoint":
        """Point returned when the listing could not be parsed."""
        nan = float("nan")
        return cls(latitude=nan, longitude=nan, altitude_meters=nan)

    @property
    def is_valid(self) -> bool:
        """A point is usable when both coordinates are finite numbers."""
        return math.isfinite(self.latitude) and math.isfinite(self.longitude)
