"""Immutable in-memory representation of one accident record."""

from __future__ import annotations

import math
from dataclasses import dataclass, fields
from typing import Any, Mapping, Optional

UNKNOWN = "Unknown"


def is_blank(value: Any) -> bool:
    """
    True for values that mean "not provided": ``None``, whitespace-only
    strings and float NaN (what pandas puts in empty numeric cells).
    """
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, float) and math.isnan(value):
        return True
    return False


def _blank_to_none(value: Any) -> Any:
    return None if is_blank(value) else value


def _int_or_default(value: Any, default: Optional[int]) -> Optional[int]:
    value = _blank_to_none(value)
    if value is None:
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


@dataclass(frozen=True)
class IncidentRecord:
    """
    The subset of an accident row the engine reads.

    Records are expected to have been validated by the ingestion layer
    (:mod:`accidents.validation`); this class only applies the data-model
    defaults for absent values.
    """

    accident_id: str
    time: str = ""
    area: str = UNKNOWN
    id: Optional[str] = None
    date: str = ""
    day_of_week: Optional[str] = None
    time_of_day: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    fatalities: int = 0
    injuries: int = 0
    persons_involved: Optional[int] = None
    severity: Optional[str] = None
    cause_primary: str = UNKNOWN
    vehicle_type: Optional[str] = None
    weather_main: Optional[str] = None
    road_condition: Optional[str] = None
    light_conditions: Optional[str] = None
    police_response_time_min: Optional[int] = None
    ambulance_time_min: Optional[int] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "IncidentRecord":
        """
        Build a record from a dict (JSON payload, DataFrame row, model values).

        Unknown keys are ignored. Blank ``area`` / ``cause_primary`` become
        ``"Unknown"``; absent ``fatalities`` / ``injuries`` become 0.
        """
        known = {f.name for f in fields(cls)}
        values = {k: _blank_to_none(v) for k, v in data.items() if k in known}

        values["accident_id"] = str(values.get("accident_id") or "")
        values["time"] = str(values.get("time") or "")
        values["date"] = str(values.get("date") or "")
        values["area"] = str(values.get("area") or UNKNOWN)
        values["cause_primary"] = str(values.get("cause_primary") or UNKNOWN)
        values["fatalities"] = _int_or_default(values.get("fatalities"), 0)
        values["injuries"] = _int_or_default(values.get("injuries"), 0)
        for name in ("persons_involved", "police_response_time_min", "ambulance_time_min"):
            values[name] = _int_or_default(values.get(name), None)
        if values.get("id") is not None:
            values["id"] = str(values["id"])

        return cls(**values)

    def as_dict(self) -> dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}
