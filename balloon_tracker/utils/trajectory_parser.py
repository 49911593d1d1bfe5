"""
Parser for the balloon_traj "list" output.

The service answers with an HTML page holding several <pre> blocks. The second
one is the trajectory table, one row per time step:

    H    MIN   LAT      LON      ALT
    0     0    35.1    -80.0     250
    ...
    2    15    35.5    -80.2   15000

The last row is the predicted landing point.
"""
import logging
import math
import re

from bs4 import BeautifulSoup

from balloon_tracker.models.forecast import TrajectoryPoint

logger = logging.getLogger(__name__)

TRAJECTORY_BLOCK_INDEX = 1
LAT_COLUMN = 1
LON_COLUMN = 2
ALT_COLUMN = 3

# Plain decimal numbers only: no inf/nan spellings or digit separators
NUMBER_PATTERN = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$")


def _parse_field(fields: list, index: int) -> float:
    """Read a numeric column, NaN unless it holds a finite decimal number."""
    try:
        token = fields[index]
    except IndexError:
        return float("nan")

    if not NUMBER_PATTERN.match(token):
        return float("nan")
    value = float(token)
    return value if math.isfinite(value) else float("nan")


def extract_last_row(html: str) -> TrajectoryPoint:
    """
    Extract the landing point from a trajectory page.

    Returns:
        TrajectoryPoint from the last row of the second <pre> block, or an
        all-NaN point if the page does not have that shape.
    """
    soup = BeautifulSoup(html, "html.parser")
    pre_blocks = soup.find_all("pre")

    if len(pre_blocks) <= TRAJECTORY_BLOCK_INDEX:
        logger.error("Could not find the second <pre> block in the response")
        return TrajectoryPoint.invalid()

    text = pre_blocks[TRAJECTORY_BLOCK_INDEX].get_text()
    rows = text.strip().split("\n")
    last_row = rows[-1].strip().split()
    logger.debug("Last row of the trajectory block: %s", last_row)

    return TrajectoryPoint(
        latitude=_parse_field(last_row, LAT_COLUMN),
        longitude=_parse_field(last_row, LON_COLUMN),
        altitude_meters=_parse_field(last_row, ALT_COLUMN),
    )
