"""
Dashboard payloads composed from the risk engine.

These functions back the map overlay and the statistics dashboard. They take
an in-memory snapshot of records (already fetched by the view) and return
JSON-ready dicts; none of them touch the database.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Sequence

from .engine import (
    IncidentRecord,
    RiskTier,
    area_key,
    average_response_time,
    classify,
    classify_groups,
    dominant_cause,
    group_by,
    hourly_histogram,
    peak_hours,
    predict_for_hour,
    recommend,
    score_group,
    severity_breakdown,
    top_causes,
    top_values,
)
from .engine.analytics import HOURS_IN_DAY, filter_by_hour

logger = logging.getLogger(__name__)

SEARCH_RESULT_LIMIT = 8
SEVERITY_DISPLAY = (
    ("fatal", "Fatal"),
    ("severe", "Severe"),
    ("moderate", "Moderate"),
    ("minor", "Minor"),
)


def _pairs(pairs, first: str, second: str) -> List[Dict[str, Any]]:
    return [{first: a, second: b} for a, b in pairs]


def _round_or_none(value: Optional[float]) -> Optional[int]:
    return None if value is None else int(round(value))


def _tier_payload(tier: RiskTier) -> Dict[str, str]:
    return {"safety_level": tier.value, "safety_label": tier.label}


def area_statistics(records: Sequence[IncidentRecord]) -> List[Dict[str, Any]]:
    """Per-area summary, busiest areas first. Tiers are relative to all areas."""
    groups = group_by(records, area_key)
    classified = classify_groups(groups)

    rows: List[Dict[str, Any]] = []
    for area, area_records in groups.items():
        score, tier = classified[area]
        breakdown = severity_breakdown(area_records)
        rows.append(
            {
                "area": area,
                "total_accidents": len(area_records),
                "risk_score": score,
                **_tier_payload(tier),
                "fatal_accidents": breakdown["fatal"],
                "severe_accidents": breakdown["severe"],
                "top_causes": _pairs(top_causes(area_records), "cause", "count"),
                "hourly_distribution": _pairs(hourly_histogram(area_records), "hour", "count"),
                "average_response_time": _round_or_none(average_response_time(area_records)),
            }
        )

    rows.sort(key=lambda row: row["total_accidents"], reverse=True)
    return rows


def location_analytics(
    area: str,
    records: Sequence[IncidentRecord],
    *,
    recent_limit: int = 10,
) -> Optional[Dict[str, Any]]:
    """
    Detail panel for one area. ``records`` is the full snapshot so the area
    can be classified against every other area. Returns ``None`` when the
    area has no records.
    """
    groups = group_by(records, area_key)
    area_records = groups.get(area)
    if not area_records:
        return None

    score, tier = classify_groups(groups)[area]
    cause = dominant_cause(area_records)
    recent = sorted(area_records, key=lambda r: (r.date, r.time), reverse=True)[:recent_limit]

    return {
        "area": area,
        "location": _centroid(area_records),
        "current_risk_score": score,
        **_tier_payload(tier),
        "accident_count": len(area_records),
        "total_fatalities": sum(r.fatalities for r in area_records),
        "total_injuries": sum(r.injuries for r in area_records),
        "average_response_time": _round_or_none(average_response_time(area_records)),
        "recent_accidents": [r.as_dict() for r in recent],
        "hourly_distribution": _pairs(hourly_histogram(area_records), "hour", "count"),
        "peak_hours": _pairs(peak_hours(area_records), "hour", "count"),
        "top_causes": _pairs(top_causes(area_records), "cause", "count"),
        "dominant_cause": cause,
        "recommendations": recommend(cause),
    }


def _centroid(records: Sequence[IncidentRecord]) -> Optional[Dict[str, float]]:
    points = [(r.latitude, r.longitude) for r in records if r.latitude is not None and r.longitude is not None]
    if not points:
        return None
    return {
        "lat": sum(p[0] for p in points) / len(points),
        "lng": sum(p[1] for p in points) / len(points),
    }


def overall_statistics(records: Sequence[IncidentRecord]) -> Dict[str, Any]:
    breakdown = severity_breakdown(records)
    return {
        "total_accidents": len(records),
        "total_fatalities": sum(r.fatalities for r in records),
        "total_injuries": sum(r.injuries for r in records),
        "average_response_time": _round_or_none(average_response_time(records)),
        "average_police_response_time": _round_or_none(
            average_response_time(records, "police_response_time_min")
        ),
        "severity_distribution": [
            {"name": name, "value": breakdown[key]}
            for key, name in SEVERITY_DISPLAY
            if breakdown[key] > 0
        ],
        "top_causes": _pairs(top_causes(records), "cause", "count"),
        "vehicle_types": _pairs(top_values(records, "vehicle_type"), "type", "count"),
        "hourly_distribution": _pairs(hourly_histogram(records), "hour", "count"),
    }


def hourly_predictions(
    records: Sequence[IncidentRecord],
    *,
    area: Optional[str] = None,
) -> List[Dict[str, Any]]:
    """
    Predicted tier for each hour of the day.

    Each hour is classified against the scores of all 24 hours of the same
    record set (optionally narrowed to one area).
    """
    if area is not None:
        records = [r for r in records if area_key(r) == area]

    population = [score_group(filter_by_hour(records, hour)) for hour in range(HOURS_IN_DAY)]
    predictions = []
    for hour in range(HOURS_IN_DAY):
        prediction = predict_for_hour(hour, records, population)
        predictions.append(
            {
                "hour": prediction.hour,
                "predicted_risk_score": prediction.predicted_risk_score,
                **_tier_payload(prediction.safety_level),
                "confidence": prediction.confidence,
                "sample_size": prediction.sample_size,
            }
        )
    return predictions


def compare_areas(records: Sequence[IncidentRecord], first: str, second: str) -> Dict[str, Any]:
    """Side-by-side comparison of two areas (e.g. two candidate routes)."""
    groups = group_by(records, area_key)
    classified = classify_groups(groups)

    def _summary(name: str) -> Dict[str, Any]:
        area_records = groups.get(name, [])
        if area_records:
            score, tier = classified[name]
        else:
            score, tier = 0.0, classify(0.0, record_count=0)
        return {
            "name": name,
            "safety_score": score,
            **_tier_payload(tier),
            "accident_count": len(area_records),
            "average_response_time": _round_or_none(average_response_time(area_records)),
            "recommendations": recommend(dominant_cause(area_records))["civilian"],
        }

    left, right = _summary(first), _summary(second)
    if left["safety_score"] == right["safety_score"]:
        safer = None
    else:
        safer = first if left["safety_score"] < right["safety_score"] else second
    return {"route1": left, "route2": right, "safer": safer}


def search_areas(
    records: Sequence[IncidentRecord],
    query: str = "",
    *,
    limit: int = SEARCH_RESULT_LIMIT,
) -> List[Dict[str, Any]]:
    """Case-insensitive substring search over area names, busiest first."""
    groups = group_by(records, area_key)
    classified = classify_groups(groups)
    areas = [
        {"area": area, "count": len(area_records), **_tier_payload(classified[area][1])}
        for area, area_records in groups.items()
    ]
    areas.sort(key=lambda row: row["count"], reverse=True)

    needle = (query or "").strip().lower()
    if needle:
        areas = [row for row in areas if needle in row["area"].lower()]
    return areas[:limit]
