from __future__ import annotations

import logging
import math
import numbers
from typing import Any, List, Optional

from django.conf import settings
from django.http import JsonResponse
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes, throttle_classes
from rest_framework.permissions import IsAuthenticated

from accidents import storage
from accidents.validation import validate_numeric_fields

from . import dashboard
from .engine import IncidentRecord, classify, match_category, recommend, score_group
from .throttling import BurstRateThrottle

logger = logging.getLogger(__name__)


def _snapshot() -> List[IncidentRecord]:
    """Fetch every record once for this request and convert it for the engine."""
    return [record.to_incident() for record in storage.fetch_all()]


def _internal_error(message: str, **extra: Any) -> JsonResponse:
    logger.exception(message, extra=extra)
    return JsonResponse({"detail": f"Internal error: {message}"}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)


@api_view(["GET"])
@permission_classes([IsAuthenticated])
@throttle_classes([BurstRateThrottle])
def area_statistics_view(request):
    """Per-area totals, tier and analytics for the map overlay."""
    try:
        areas = dashboard.area_statistics(_snapshot())
    except Exception:
        return _internal_error("failed to compute area statistics")
    return JsonResponse({"count": len(areas), "areas": areas})


@api_view(["GET"])
@permission_classes([IsAuthenticated])
@throttle_classes([BurstRateThrottle])
def overall_statistics_view(request):
    try:
        stats = dashboard.overall_statistics(_snapshot())
    except Exception:
        return _internal_error("failed to compute overall statistics")
    return JsonResponse(stats)


@api_view(["GET"])
@permission_classes([IsAuthenticated])
@throttle_classes([BurstRateThrottle])
def location_analytics_view(request, area: str):
    """Detail panel for one area, classified against every other area."""
    recent_limit = getattr(settings, "RISK_RECENT_ACCIDENTS_LIMIT", 10)
    try:
        analytics = dashboard.location_analytics(area, _snapshot(), recent_limit=recent_limit)
    except Exception:
        return _internal_error("failed to compute location analytics", area=area)
    if analytics is None:
        return JsonResponse({"detail": f"No accidents recorded for area {area!r}."}, status=status.HTTP_404_NOT_FOUND)
    return JsonResponse(analytics)


@api_view(["GET"])
@permission_classes([IsAuthenticated])
@throttle_classes([BurstRateThrottle])
def hourly_predictions_view(request):
    area = request.query_params.get("area") or None
    try:
        predictions = dashboard.hourly_predictions(_snapshot(), area=area)
    except Exception:
        return _internal_error("failed to compute hourly predictions", area=area)
    return JsonResponse({"area": area, "predictions": predictions})


@api_view(["GET"])
@permission_classes([IsAuthenticated])
@throttle_classes([BurstRateThrottle])
def compare_areas_view(request):
    first = request.query_params.get("first")
    second = request.query_params.get("second")
    if not first or not second:
        return JsonResponse(
            {"detail": "first and second are required.", "required": ["first", "second"]},
            status=status.HTTP_400_BAD_REQUEST,
        )
    try:
        comparison = dashboard.compare_areas(_snapshot(), first, second)
    except Exception:
        return _internal_error("failed to compare areas", first=first, second=second)
    return JsonResponse(comparison)


@api_view(["GET"])
@permission_classes([IsAuthenticated])
@throttle_classes([BurstRateThrottle])
def search_areas_view(request):
    query = request.query_params.get("q", "")
    try:
        results = dashboard.search_areas(_snapshot(), query)
    except Exception:
        return _internal_error("failed to search areas", query=query)
    return JsonResponse({"query": query, "results": results})


@api_view(["GET"])
@permission_classes([IsAuthenticated])
def recommendation_view(request):
    """Advisories for a cause string; unmatched causes get the generic pair."""
    cause = request.query_params.get("cause", "")
    return JsonResponse(
        {
            "cause": cause,
            "category": match_category(cause),
            "recommendations": recommend(cause),
        }
    )


def _parse_population(raw: Any) -> Optional[List[float]]:
    if raw is None:
        return None
    if not isinstance(raw, list):
        raise ValueError("population_scores must be an array of numbers.")
    scores: List[float] = []
    for value in raw:
        if isinstance(value, bool) or not isinstance(value, numbers.Real) or not math.isfinite(value):
            raise ValueError("population_scores must be an array of numbers.")
        scores.append(float(value))
    return scores


@api_view(["POST"])
@permission_classes([IsAuthenticated])
@throttle_classes([BurstRateThrottle])
def score_records_view(request):
    """
    Score and classify an ad hoc list of records.

    Body: ``{"records": [...], "population_scores": [...]}``. Without
    ``population_scores`` the absolute thresholds are used. Records with
    malformed numeric fields are reported per index and nothing is scored.
    """
    payload = request.data if isinstance(request.data, dict) else {}
    raw_records = payload.get("records")
    if not isinstance(raw_records, list) or not all(isinstance(r, dict) for r in raw_records):
        return JsonResponse(
            {"detail": "records must be an array of objects."},
            status=status.HTTP_400_BAD_REQUEST,
        )
    try:
        population = _parse_population(payload.get("population_scores"))
    except ValueError as exc:
        return JsonResponse({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

    records: List[IncidentRecord] = []
    rejected: List[dict] = []
    for index, raw in enumerate(raw_records):
        cleaned, errors = validate_numeric_fields(raw)
        if errors:
            rejected.append({"index": index, "errors": errors})
            continue
        records.append(IncidentRecord.from_mapping({**raw, **cleaned}))
    if rejected:
        return JsonResponse(
            {"detail": "Invalid records.", "errors": rejected},
            status=status.HTTP_400_BAD_REQUEST,
        )

    score = score_group(records)
    tier = classify(score, population, record_count=len(records))
    return JsonResponse(
        {
            "record_count": len(records),
            "score": score,
            "safety_level": tier.value,
            "safety_label": tier.label,
            "policy": "absolute" if population is None else "percentile",
        }
    )
