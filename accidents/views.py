import logging

from django.http import JsonResponse
from django.utils.dateparse import parse_date
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes, throttle_classes
from rest_framework.permissions import IsAuthenticated

from . import storage
from .throttling import ImportRateThrottle

logger = logging.getLogger(__name__)


def _records_payload(records):
    return [record.to_payload() for record in records]


def _parse_required_date_param(raw, field_name: str) -> str:
    """Parse a required ISO date query param. Raises ValueError with a message."""
    if not raw:
        raise ValueError(f"{field_name} is required.")
    parsed = parse_date(raw)
    if parsed is None:
        raise ValueError(f"{field_name} must be an ISO-8601 date (YYYY-MM-DD).")
    return parsed.isoformat()


@api_view(["GET", "POST"])
@permission_classes([IsAuthenticated])
def accident_list_view(request):
    """
    GET: accidents newest first, optionally filtered by ``area``,
    ``severity``, ``cause_primary``, ``weather_main``, ``date_from`` and
    ``date_to``. POST: insert a single accident.
    """
    if request.method == "POST":
        return _insert_single(request)

    try:
        records = storage.fetch_filtered(request.query_params)
    except Exception:
        logger.exception("Failed to fetch accidents")
        return JsonResponse(
            {"detail": "Failed to fetch accidents."},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
    return JsonResponse(_records_payload(records), safe=False)


def _insert_single(request):
    if not isinstance(request.data, dict):
        return JsonResponse(
            {"detail": "Request body must be a JSON object."},
            status=status.HTTP_400_BAD_REQUEST,
        )
    try:
        result = storage.insert_many([request.data])
    except Exception:
        logger.exception(
            "Single insert failed",
            extra={"user_id": getattr(request.user, "id", None)},
        )
        return JsonResponse(
            {"detail": "Failed to insert accident."},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
    if result.rejected:
        return JsonResponse(
            {"detail": "Invalid accident record.", "errors": result.rejected[0]["errors"]},
            status=status.HTTP_400_BAD_REQUEST,
        )
    return JsonResponse(result.admitted[0].to_payload(), status=status.HTTP_201_CREATED)


@api_view(["GET"])
@permission_classes([IsAuthenticated])
def accident_detail_view(request, accident_pk):
    record = storage.fetch_by_id(accident_pk)
    if record is None:
        return JsonResponse({"detail": "Accident not found."}, status=status.HTTP_404_NOT_FOUND)
    return JsonResponse(record.to_payload())


@api_view(["GET"])
@permission_classes([IsAuthenticated])
def accidents_by_area_view(request, area: str):
    return JsonResponse(_records_payload(storage.fetch_by_group_key(area)), safe=False)


@api_view(["GET"])
@permission_classes([IsAuthenticated])
def accidents_by_date_range_view(request):
    """Accidents whose date lies in [start_date, end_date]."""
    try:
        start_date = _parse_required_date_param(request.query_params.get("start_date"), "start_date")
        end_date = _parse_required_date_param(request.query_params.get("end_date"), "end_date")
    except ValueError as exc:
        return JsonResponse({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

    records = storage.fetch_by_date_range(start_date, end_date)
    return JsonResponse(_records_payload(records), safe=False)


@api_view(["GET"])
@permission_classes([IsAuthenticated])
def accidents_by_severity_view(request, severity: str):
    return JsonResponse(_records_payload(storage.fetch_by_severity(severity)), safe=False)


@api_view(["GET"])
@permission_classes([IsAuthenticated])
def area_counts_view(request):
    return JsonResponse({"areas": storage.area_counts()})


@api_view(["POST"])
@permission_classes([IsAuthenticated])
@throttle_classes([ImportRateThrottle])
def bulk_insert_view(request):
    """
    Insert ``{"accidents": [...]}`` record by record.

    Invalid records are reported per index and do not block the valid ones.
    Responds 400 only when nothing in the batch could be admitted.
    """
    payload = request.data if isinstance(request.data, dict) else {}
    accidents = payload.get("accidents")
    if not isinstance(accidents, list):
        return JsonResponse(
            {"detail": "accidents must be an array."},
            status=status.HTTP_400_BAD_REQUEST,
        )

    try:
        result = storage.insert_many(accidents)
    except Exception:
        logger.exception(
            "Bulk insert failed",
            extra={"submitted": len(accidents), "user_id": getattr(request.user, "id", None)},
        )
        return JsonResponse(
            {"detail": "Failed to bulk import accidents."},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    if not result.admitted:
        return JsonResponse(
            {"detail": "No valid accidents to import.", "errors": result.rejected},
            status=status.HTTP_400_BAD_REQUEST,
        )

    body = {"imported": len(result.admitted), "total": len(accidents)}
    if result.rejected:
        body["errors"] = result.rejected
    return JsonResponse(body, status=status.HTTP_201_CREATED)
