from __future__ import annotations

import itertools
from typing import Any

from risk.engine import IncidentRecord

_counter = itertools.count(1)


def make_record(**overrides: Any) -> IncidentRecord:
    """IncidentRecord with harmless defaults; override whatever a test cares about."""
    values: dict[str, Any] = {
        "accident_id": f"ACC-{next(_counter):05d}",
        "date": "2024-01-15",
        "time": "10:00 AM",
        "area": "Connaught Place",
        "latitude": 28.63,
        "longitude": 77.21,
        "fatalities": 0,
        "injuries": 0,
        "severity": "minor",
        "cause_primary": "Overspeeding",
    }
    values.update(overrides)
    return IncidentRecord(**values)
