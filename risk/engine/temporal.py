"""Hour-of-day extraction from free-form clock strings."""

from __future__ import annotations

import logging
import re
from typing import Optional

logger = logging.getLogger(__name__)

# Leading (optionally signed) integer, the same prefix an integer parser
# would accept before giving up on trailing characters.
_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def parse_hour(time_str: Optional[str]) -> Optional[int]:
    """
    Return the hour encoded in ``time_str``.

    Supports 12-hour strings (``"2:30 PM"``) and pre-normalised 24-hour
    strings (``"14:30"``). A string without ``:`` maps to hour 0. A string
    whose part before the first ``:`` has no leading digits yields
    ``None``. The result is not clamped; callers drop values outside
    0..23.
    """
    if not time_str or ":" not in time_str:
        return 0

    head = time_str.split(":", 1)[0]
    match = _LEADING_INT.match(head)
    if match is None:
        logger.debug("Could not parse hour from time string %r", time_str)
        return None

    hour = int(match.group(1))
    lowered = time_str.lower()
    if "pm" in lowered and hour != 12:
        hour += 12
    elif "am" in lowered and hour == 12:
        hour = 0
    return hour


def is_valid_hour(hour: Optional[int]) -> bool:
    return hour is not None and 0 <= hour <= 23
