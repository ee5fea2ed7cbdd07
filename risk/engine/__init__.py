"""
Risk scoring & classification engine for accident records.

Everything in this package is a pure function over passed-in records: no
Django models, no database access and no module-level caches. Views fetch a
snapshot from :mod:`accidents.storage`, convert it to
:class:`~risk.engine.records.IncidentRecord` instances and hand it here.
"""

from __future__ import annotations

from .analytics import (
    HourlyHistogram,
    HourlyPrediction,
    average_response_time,
    build_hourly_histogram,
    dominant_cause,
    filter_by_hour,
    hourly_histogram,
    peak_hours,
    predict_for_hour,
    top_causes,
    top_values,
)
from .classifier import (
    RiskTier,
    classify,
    classify_group,
    classify_groups,
    percentile,
)
from .grouping import area_hour_key, area_key, group_by
from .recommendations import RECOMMENDATION_RULES, match_category, recommend
from .records import UNKNOWN, IncidentRecord, is_blank
from .scoring import score_group, severity_breakdown
from .temporal import is_valid_hour, parse_hour

__all__ = [
    "UNKNOWN",
    "IncidentRecord",
    "is_blank",
    "parse_hour",
    "is_valid_hour",
    "group_by",
    "area_key",
    "area_hour_key",
    "score_group",
    "severity_breakdown",
    "RiskTier",
    "percentile",
    "classify",
    "classify_group",
    "classify_groups",
    "top_causes",
    "top_values",
    "dominant_cause",
    "hourly_histogram",
    "build_hourly_histogram",
    "HourlyHistogram",
    "peak_hours",
    "filter_by_hour",
    "predict_for_hour",
    "HourlyPrediction",
    "average_response_time",
    "RECOMMENDATION_RULES",
    "match_category",
    "recommend",
]
