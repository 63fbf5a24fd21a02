"""
Versioned point-list payload used for copy/paste between plots and sessions.

    {"type": "aero-curves/points", "version": 1, "points": [{"x": 0, "y": 1}, ...]}

Only x and y travel; ids are minted again by whoever pastes.
"""
import json
import logging
from typing import Iterable

from .math import XY, is_finite_number

logger = logging.getLogger(__name__)

PAYLOAD_TYPE = "aero-curves/points"
PAYLOAD_VERSION = 1


def _xy(p) -> XY:
    if hasattr(p, "x") and hasattr(p, "y"):
        return p.x, p.y
    x, y = p
    return x, y


def serialize_points(points: Iterable) -> str:
    """Accepts Point objects or (x, y) pairs."""
    payload = {
        "type": PAYLOAD_TYPE,
        "version": PAYLOAD_VERSION,
        "points": [{"x": x, "y": y} for x, y in map(_xy, points)],
    }
    return json.dumps(payload)


def parse_points(text: str) -> list[XY] | None:
    """
    Decode a payload back into (x, y) pairs.

    Returns None when the text is not our payload at all. Entries without
    finite numeric x and y are skipped one by one; if none survive the result
    is None as well.
    """
    try:
        data = json.loads(text)
    except (TypeError, ValueError):
        logger.debug("Clipboard text is not JSON")
        return None
    if not isinstance(data, dict):
        return None
    if data.get("type") != PAYLOAD_TYPE or data.get("version") != PAYLOAD_VERSION:
        logger.debug("Clipboard payload type/version mismatch: %r/%r", data.get("type"), data.get("version"))
        return None
    raw = data.get("points")
    if not isinstance(raw, list):
        return None

    points: list[XY] = []
    for entry in raw:
        if not isinstance(entry, dict):
            continue
        x, y = entry.get("x"), entry.get("y")
        if not (is_finite_number(x) and is_finite_number(y)):
            continue
        points.append((x, y))
    if not points:
        logger.warning("Clipboard payload held no usable points")
        return None
    return points
