"""Per-endpoint result and report models."""
from enum import Enum
from typing import List

from attrs import define, field

from .forecast import TrajectoryPoint


class Classification(str, Enum):
    """Whether a predicted landing is worth a recovery trip."""

    POSITIVE = "positive"
    NEGATIVE = "negative"


@define
class EndpointResult:
    """Outcome of one successfully parsed forecast window."""

    label: str
    point: TrajectoryPoint
    distance_km: float
    is_water: bool
    classification: Classification
    map_link: str
    map_image_url: str

    @property
    def is_positive(self) -> bool:
        return self.classification is Classification.POSITIVE


@define
class Report:
    """Rendered email report."""

    subject: str
    html: str
    results: List[EndpointResult] = field(factory=list)
